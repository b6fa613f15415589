"""Simple logging configuration for interest-oracle."""

from __future__ import annotations

import logging
import sys

# Define TRACE level (lower than DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class ColoredFormatter(logging.Formatter):
    """Formatter that paints the level name of each record.

    Colors are only applied when ``use_color`` is set, so redirected output
    stays plain text.
    """

    LEVEL_COLORS = {
        TRACE: "\033[90m",
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"

    def __init__(self, fmt: str, datefmt: str | None = None, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_color or color is None:
            return super().format(record)

        # Paint a copy; other handlers see the record unchanged.
        painted = logging.makeLogRecord(record.__dict__)
        painted.levelname = f"{color}{self.BOLD}{record.levelname}{self.RESET}"
        return super().format(painted)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging for the application.

    Sets up a console handler with formatted output and colors. Unknown
    level names fall back to INFO. At DEBUG the web3 loggers stay at
    WARNING; use TRACE to see them.
    """
    log_level = log_level.upper()
    level = TRACE if log_level == "TRACE" else getattr(logging, log_level, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    formatter = ColoredFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        use_color=sys.stderr.isatty(),
    )
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    if log_level == "DEBUG":
        logging.getLogger("web3").setLevel(logging.WARNING)
        logging.getLogger("eth_account").setLevel(logging.WARNING)
    elif log_level == "TRACE":
        logging.getLogger("web3").setLevel(TRACE)
        logging.getLogger("eth_account").setLevel(TRACE)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Usually __name__ of the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
