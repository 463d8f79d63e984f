from __future__ import annotations

from pathlib import Path

from duo_cli.auth import resolve_token
from duo_cli.settings import Settings


def _write_netrc(path: Path, password: str) -> Path:
    path.write_text(f"machine api.github.com\n  login someone\n  password {password}\n", encoding="utf-8")
    path.chmod(0o600)
    return path


def test_settings_token_wins(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GH_TOKEN", "env-token")
    netrc_path = _write_netrc(tmp_path / ".netrc", "netrc-token")

    assert resolve_token(Settings(token="settings-token"), netrc_path=netrc_path) == "settings-token"


def test_env_token_is_used_next(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GH_TOKEN", "env-token")
    netrc_path = _write_netrc(tmp_path / ".netrc", "netrc-token")

    assert resolve_token(Settings(), netrc_path=netrc_path) == "env-token"


def test_netrc_password_is_the_fallback(tmp_path: Path) -> None:
    netrc_path = _write_netrc(tmp_path / ".netrc", "netrc-token")

    assert resolve_token(Settings(), netrc_path=netrc_path) == "netrc-token"


def test_missing_netrc_means_no_token(tmp_path: Path) -> None:
    assert resolve_token(Settings(), netrc_path=tmp_path / "absent") is None
