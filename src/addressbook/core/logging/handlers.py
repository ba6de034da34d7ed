"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict; the builder registers them under
fixed names ("console", "file", "error_file", "error_console"). They are pure functions
of the Settings object, which keeps them easy to test.
"""

from addressbook.config.settings import Settings
from pathlib import Path

LOG_FILENAME = "addressbook.log"
ERROR_LOG_FILENAME = "errors.log"
FILTERS = ["context"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    """
    Return a handler configuration dict for the console (stderr) stream handler.

    Args:
        settings: expects LOG_FORMAT ('json' | 'text') and LOG_LEVEL.

    Returns:
        dict: keys "class", "formatter", "level", "filters". The formatter and filter names
        must exist in the surrounding dictConfig (builder.py provides them).
    """
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": FILTERS,
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / LOG_FILENAME),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": FILTERS,
    }


# Errors go to their own file, always structured.
def get_error_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / ERROR_LOG_FILENAME),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": FILTERS,
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": FILTERS,
    }
