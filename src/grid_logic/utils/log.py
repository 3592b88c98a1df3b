import logging

from rich.logging import RichHandler

from grid_logic.utils.config import resolve_log_level, settings

LOGGER_ROOT = "grid_logic"
LOG_FORMAT = "%(message)s"
LOG_DATE_FORMAT = "[%X]"


def configure_logging(level=None) -> logging.Logger:
    """Attaches a single RichHandler to the package logger. Called by the CLI only."""
    root = logging.getLogger(LOGGER_ROOT)
    root.setLevel(resolve_log_level(level or settings.LOG_LEVEL))
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    if not name.startswith(LOGGER_ROOT):
        name = f"{LOGGER_ROOT}.{name}"
    return logging.getLogger(name)
