"""Hot-seat chess: rules engine, game state machine and Qt adapters."""

__version__ = "0.1.0"
