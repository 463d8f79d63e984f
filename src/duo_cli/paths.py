"""Root directory discovery."""

from __future__ import annotations

from pathlib import Path


def find_root(manifest_name: str, start: Path | None = None) -> Path:
    """Return the nearest directory (``start`` or a parent) holding ``manifest_name``.

    Falls back to ``start`` itself when no manifest is found.
    """
    cwd = (start or Path.cwd()).expanduser().resolve()
    for candidate in [cwd, *cwd.parents]:
        if (candidate / manifest_name).is_file():
            return candidate
    return cwd


def resolve_root(root: Path | None, manifest_name: str, start: Path | None = None) -> Path:
    """Resolve the shared root: an explicit ``--root`` wins over discovery."""
    if root is not None:
        base = start or Path.cwd()
        candidate = root.expanduser()
        if not candidate.is_absolute():
            candidate = base / candidate
        return candidate.resolve()
    return find_root(manifest_name, start)


def relativize(path: str | Path, root: Path) -> str:
    """Render ``path`` relative to ``root`` when it lives underneath it."""
    try:
        return Path(path).resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return str(path)


__all__ = ["find_root", "relativize", "resolve_root"]
