"""
tests/test_main.py — Startup Refusals
======================================
The bot must log CRITICAL and exit with status 1 when it cannot start:
no token, unreadable config, unusable database, or a rejected token.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import discord
import pytest

from registrar.bot import __main__ as entry
from registrar.bot.core import RegistrarBot

GOOD_TOKEN = "x" * 59


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Run each test in an empty directory with no .env and a clean environment."""
    monkeypatch.chdir(tmp_path)
    for key in ("DISCORD_TOKEN", "DATABASE_URL", "REGISTRAR_CONFIG"):
        monkeypatch.delenv(key, raising=False)
    with patch.object(entry, "load_dotenv"):
        yield


def _run_main_expecting_exit(caplog) -> None:
    with caplog.at_level(logging.CRITICAL, logger="registrar"):
        with pytest.raises(SystemExit) as excinfo:
            entry.main()
    assert excinfo.value.code == 1
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)


class TestStartupRefusals:
    def test_missing_token(self, caplog):
        _run_main_expecting_exit(caplog)

    def test_placeholder_token(self, monkeypatch, caplog):
        monkeypatch.setenv("DISCORD_TOKEN", entry.TOKEN_PLACEHOLDER)
        _run_main_expecting_exit(caplog)

    def test_malformed_config_yaml(self, tmp_path, monkeypatch, caplog):
        monkeypatch.setenv("DISCORD_TOKEN", GOOD_TOKEN)
        (tmp_path / "config.yaml").write_text("messages: [unclosed\n", encoding="utf-8")
        _run_main_expecting_exit(caplog)

    def test_unknown_message_key_in_config(self, tmp_path, monkeypatch, caplog):
        monkeypatch.setenv("DISCORD_TOKEN", GOOD_TOKEN)
        (tmp_path / "config.yaml").write_text("messages:\n  nope: x\n", encoding="utf-8")
        _run_main_expecting_exit(caplog)

    def test_unknown_database_dialect(self, monkeypatch, caplog):
        monkeypatch.setenv("DISCORD_TOKEN", GOOD_TOKEN)
        monkeypatch.setenv("DATABASE_URL", "nosuchdialect://localhost/db")
        _run_main_expecting_exit(caplog)

    def test_missing_database_driver(self, monkeypatch, caplog):
        monkeypatch.setenv("DISCORD_TOKEN", GOOD_TOKEN)
        with patch.object(
            entry, "create_db_engine",
            side_effect=ModuleNotFoundError("No module named 'psycopg'"),
        ):
            _run_main_expecting_exit(caplog)

    def test_rejected_token(self, tmp_path, monkeypatch, caplog):
        monkeypatch.setenv("DISCORD_TOKEN", GOOD_TOKEN)
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'bot.db'}")
        with patch.object(
            RegistrarBot, "run", side_effect=discord.LoginFailure("Improper token"),
        ) as run:
            _run_main_expecting_exit(caplog)
        run.assert_called_once_with(GOOD_TOKEN, log_handler=None)
