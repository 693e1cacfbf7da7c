"""
tests/test_config.py — config.yaml Loader Tests
================================================
"""

from __future__ import annotations

import pytest

from registrar.config import RegistrarConfig, load_config
from registrar.constants import DEFAULT_MESSAGES


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.yaml")

    assert cfg == RegistrarConfig()
    assert cfg.setconfig_literal == "!setconfig"
    assert cfg.queue_capacity == 100
    assert cfg.messages == DEFAULT_MESSAGES


def test_overrides_are_merged(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "bot_prefix: '?'\n"
        "queue_capacity: 5\n"
        "queue_put_timeout: null\n"
        "messages:\n"
        "  config_saved: '設定完成'\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.setconfig_literal == "?setconfig"
    assert cfg.queue_capacity == 5
    assert cfg.queue_put_timeout is None
    assert cfg.messages["config_saved"] == "設定完成"
    assert cfg.messages["storage_error"] == DEFAULT_MESSAGES["storage_error"]


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == RegistrarConfig()


def test_unknown_message_key_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("messages:\n  welcome: hi\n", encoding="utf-8")
    with pytest.raises(KeyError, match="welcome"):
        load_config(path)


def test_non_positive_capacity_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("queue_capacity: 0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
