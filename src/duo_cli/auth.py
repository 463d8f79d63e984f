"""Credential lookup for engines that talk to a package host."""

from __future__ import annotations

import logging
import netrc
import os
from pathlib import Path

from duo_cli.settings import Settings

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "GH_TOKEN"
NETRC_HOST = "api.github.com"


def _netrc_token(path: Path | None = None) -> str | None:
    try:
        credentials = netrc.netrc(str(path) if path is not None else None)
    except FileNotFoundError:
        return None
    except (netrc.NetrcParseError, OSError) as exc:
        logger.debug("netrc unreadable: %s", exc)
        return None

    entry = credentials.authenticators(NETRC_HOST)
    if entry is None:
        return None
    _login, _account, password = entry
    return password or None


def resolve_token(settings: Settings, *, netrc_path: Path | None = None) -> str | None:
    """Resolve the credential token.

    Resolution order:
    1) ``settings.token`` (``DUO_TOKEN`` / settings.toml)
    2) the ``GH_TOKEN`` environment variable
    3) the ``api.github.com`` password in ``~/.netrc``
    """
    if settings.token:
        return settings.token
    env_token = os.environ.get(TOKEN_ENV_VAR, "").strip()
    if env_token:
        return env_token
    return _netrc_token(netrc_path)


__all__ = ["NETRC_HOST", "TOKEN_ENV_VAR", "resolve_token"]
