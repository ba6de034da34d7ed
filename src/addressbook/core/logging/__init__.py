# addressbook/core/logging/
# ├─ __init__.py            # public API: setup_logging, make_dict_config, log context helpers
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # ContextFilter (+ contextvar helpers)
# └─ handlers.py            # handler factories (console/file/error)

from .builder import setup_logging, make_dict_config
from .filters import set_log_context, reset_log_context, get_log_context, ContextFilter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "set_log_context",
    "reset_log_context",
    "get_log_context",
    "ContextFilter",
]
