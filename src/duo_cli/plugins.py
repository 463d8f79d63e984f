"""Helpers for loading the engine and its plugins from import specs."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Iterable

from duo_cli.exceptions import ConfigurationError, PluginError
from duo_cli.models import EngineClass

__all__ = [
    "load_engine",
    "load_object",
    "load_plugins",
]


def _split_spec(spec: str) -> tuple[str, str]:
    module_path, separator, attr = spec.partition(":")
    if not separator:
        module_path, dot, attr = spec.rpartition(".")
        if not dot:
            raise PluginError(f"Invalid import specification: '{spec}' (expected 'module:attr')")
    if not module_path or not attr:
        raise PluginError(f"Invalid import specification: '{spec}' (expected 'module:attr')")
    return module_path, attr


def load_object(spec: str) -> Any:
    """Return the object referenced by ``spec`` (``module:attr`` or ``module.attr``)."""

    module_path, attr = _split_spec(spec.strip())
    try:
        module = import_module(module_path)
    except ImportError as exc:
        raise PluginError(f"Cannot import '{module_path}' for '{spec}': {exc}") from exc

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise PluginError(f"'{module_path}' has no attribute '{attr}' (from '{spec}')") from exc
    return target


def load_plugins(specs: Iterable[str]) -> tuple[Any, ...]:
    """Load plugin objects for ``specs``, preserving their order."""

    plugins: list[Any] = []
    for spec in specs:
        spec = spec.strip()
        if not spec:
            continue
        plugins.append(load_object(spec))
    return tuple(plugins)


def load_engine(spec: str | None) -> EngineClass:
    """Return the engine class referenced by ``spec``."""

    if not spec:
        raise ConfigurationError(
            "No engine configured. Set DUO_ENGINE (or `engine` in settings.toml) to 'module:Engine'."
        )
    candidate = load_object(spec)
    if not callable(candidate):
        raise ConfigurationError(f"Engine '{spec}' is not callable")
    return candidate  # type: ignore[return-value]
