"""Logging configuration for the CSS url() parser.

Log records always go to stderr so rewritten CSS can be piped from stdout.
"""

import logging
import sys

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("css-url-parser")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_DATE_FORMAT = "%H:%M:%S"


def setup_logging(debug: bool = False, quiet: bool = False) -> None:
    """
    Attach a single stderr handler to the package logger, coloured when
    colorlog is installed.

    Args:
        debug: Enable debug-level logging (wins over *quiet*)
        quiet: Only let warnings and errors through
    """
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    log.setLevel(level)
    log.handlers.clear()
    log.propagate = False

    if _COLORLOG_AVAILABLE:
        handler = colorlog.StreamHandler(sys.stderr)
        handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s" + _LOG_FORMAT.replace(" %(message)s", "%(reset)s %(message)s"),
            datefmt=_DATE_FORMAT,
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "bold_red",
            },
        ))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    log.addHandler(handler)
