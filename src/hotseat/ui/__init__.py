"""Qt presentation layer: i18n strings, timer, signal bridge, dialogs."""
