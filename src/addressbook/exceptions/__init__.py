
# addressbook/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Domain errors (ErrorKind taxonomy, RepositoryError subclasses)
# │   ├── integrity_classifier.py    # SQL-level / sqlite-specific constraint classification
# │   └── mapper.py                  # Map constraint violations to domain errors, rollback helper

from .base import *  # noqa: F401,F403
from .base import __all__  # noqa: F401
