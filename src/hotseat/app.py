"""Application entry point."""

from __future__ import annotations

import sys

from hotseat.ui.bootstrap import configure_logging, run_application

__all__ = ["configure_logging", "main"]


def main() -> None:
    """Launch the hot-seat chess application."""
    configure_logging()
    sys.exit(run_application())


if __name__ == "__main__":
    main()
