# install_cost/logging_config.py
"""
Centralized logging configuration for install-cost.

Log records go to stderr only: stdout belongs to the startup line, the
progress bar and the report table.
"""
import logging
import sys

_FORMATS = {
    "simple": "%(levelname)-8s %(message)s",
    "detailed": "%(asctime)s [%(levelname)-8s] %(name)s:%(lineno)d - %(message)s",
    "json": (
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
        '"message": "%(message)s", "logger": "%(name)s"}'
    ),
}

LOG_FORMATS = tuple(_FORMATS)


def setup_logging(
    level: str = "WARNING",
    quiet: bool = False,
    verbose: bool = False,
    format_style: str = "simple"
) -> None:
    """
    Configure the root logger with a single stderr handler.

    Args:
        level: Base logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        quiet: Only errors; wins over *verbose* and *level*
        verbose: Debug logging; wins over *level*
        format_style: one of :data:`LOG_FORMATS`

    Raises:
        ValueError: on an unknown *level* or *format_style*
    """
    if quiet:
        log_level = logging.ERROR
    elif verbose:
        log_level = logging.DEBUG
    else:
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')
        log_level = numeric_level

    try:
        formatter = logging.Formatter(_FORMATS[format_style.lower()])
    except KeyError:
        raise ValueError(
            f"Invalid log format: {format_style} (choose from {', '.join(LOG_FORMATS)})"
        ) from None

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(log_level)

    root_logger.setLevel(log_level)
    root_logger.addHandler(stderr_handler)

    # asyncio logs every subprocess transport at DEBUG
    if log_level > logging.DEBUG:
        logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("install_cost").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the ``install_cost`` namespace."""
    return logging.getLogger(f"install_cost.{name}")
