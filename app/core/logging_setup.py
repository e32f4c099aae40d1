"""
Logging Setup Utilities.
"""

import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with a Rich console handler.

    Args:
        level: Logging level name, e.g. "INFO" or "DEBUG"
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid stacking handlers when the app module is reloaded
    root_logger.handlers.clear()

    console_handler = RichHandler(
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(console_handler)

    # Request lines from the HTTP client are noise at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
