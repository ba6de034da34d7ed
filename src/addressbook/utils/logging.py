"""Project name/version as shown in structured log records."""

from functools import lru_cache
from importlib import metadata
from pathlib import Path
import tomllib

DISTRIBUTION_NAME = "addressbook"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    """Walk up from `start` looking for pyproject.toml (source checkouts only)."""
    for directory in [start, *start.parents][:max_up]:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


@lru_cache()
def _project_table() -> dict:
    path = find_pyproject(Path(__file__).resolve().parent)
    if path is None:
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_project_name(default: str = DISTRIBUTION_NAME) -> str:
    return _project_table().get("name", default)


def get_project_version(default: str = "unknown") -> str:
    """Installed distribution version, else project.version from pyproject.toml, else `default`."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return _project_table().get("version", default)
