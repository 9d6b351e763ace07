"""Unit tests for /src/core/config.py"""

import pytest

from src.core.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for variable in [
        "REVERSI_STORE_URL",
        "REVERSI_SESSION_ROOT",
        "REVERSI_LOG_LEVEL",
        "REVERSI_SQL_ECHO",
    ]:
        monkeypatch.delenv(variable, raising=False)

    settings = Settings.from_env()
    assert settings == Settings()
    assert settings.store_url is None
    assert settings.session_root == "games"
    assert settings.log_level == "INFO"
    assert not settings.sql_echo


def test_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVERSI_STORE_URL", "sqlite:///reversi.db")
    monkeypatch.setenv("REVERSI_SESSION_ROOT", "/reversi/games/")
    monkeypatch.setenv("REVERSI_LOG_LEVEL", "debug")
    monkeypatch.setenv("REVERSI_SQL_ECHO", "true")

    settings = Settings.from_env()
    assert settings.store_url == "sqlite:///reversi.db"
    assert settings.session_root == "reversi/games"
    assert settings.log_level == "DEBUG"
    assert settings.sql_echo


def test_empty_store_url_means_no_store(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVERSI_STORE_URL", "")
    assert Settings.from_env().store_url is None


def test_session_path() -> None:
    assert Settings().session_path("AB12CD") == "games/AB12CD"
    assert Settings(session_root="x/y").session_path("AB12CD") == "x/y/AB12CD"
