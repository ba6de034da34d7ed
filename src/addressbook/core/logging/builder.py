"""
Logging builder: create and apply a dictConfig logging configuration.

    setup_logging(settings)

is called once at start-up (CLI callback, test session). Everything else in the
package just does `logger = logging.getLogger(__name__)`.

Layout produced by make_dict_config():
| Component      | Entries                                                        |
| -------------- | -------------------------------------------------------------- |
| **Formatters** | standard (ColorFormatter or plain), json (JsonFormatter)       |
| **Filters**    | context (command/table)                                        |
| **Handlers**   | console + file + error_file, or console + error_console        |
| **Loggers**    | root, sqlalchemy.engine                                        |

The interactive shell writes its own output through rich, so the console handler is
meant for diagnostics: with LOG_TO_STDOUT false (the default) the console only shows
WARNING and above and the full stream goes to the rotating files under LOG_DIR.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from addressbook.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import ContextFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Settings type (avoid calling get_settings() here to prevent import-time side effects)
from addressbook.config.settings import Settings  # type: ignore


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (color/text or plain) and "json"
      - filter: "context"
      - handlers: console, then (file/error_file) OR error_console depending on LOG_TO_STDOUT
      - loggers: root and sqlalchemy.engine
    """
    console_handler = get_console_handler(settings)

    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(table)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(default="addressbook"),
        },
    }

    filters = {
        "context": {"()": ContextFilter},
    }

    handlers: dict[str, dict] = {"console": console_handler}

    if _writes_files(settings):
        # Files take the full stream; keep the terminal quiet for the interactive shell.
        console_handler["level"] = "WARNING"
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            # Be cautious with SQL logging (statement parameters contain contact data)
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }

    return config


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

    Steps:
      1. Ensure LOG_DIR exists when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Register a ContextFilter on the root logger as well, for records logged on the
         root logger itself.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    logging.getLogger().addFilter(ContextFilter())
