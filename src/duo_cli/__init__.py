"""duo: install and build component entries with a pluggable engine."""

from importlib import metadata
from pathlib import Path
import tomllib

from duo_cli.exceptions import DuoError
from duo_cli.models import Entry, ExecutionResult, Options

DIST_NAME = "duo-cli"


def _checkout_version() -> str | None:
    """Version declared by the enclosing source checkout, if running from one."""
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if not pyproject.is_file():
        return None
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != DIST_NAME:
        return None
    return project.get("version") or None


try:
    __version__ = _checkout_version() or metadata.version(DIST_NAME)
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0+unknown"


__all__ = ["DuoError", "Entry", "ExecutionResult", "Options", "__version__"]
