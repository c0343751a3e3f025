import json

import pytest

from hostbridge.config.loader import camel_to_snake, convert_keys, load_config, save_config, snake_to_camel
from hostbridge.config.schema import Config


def test_load_config_missing_file_returns_defaults(tmp_path):
    cfg = load_config(tmp_path / "missing.json")
    assert cfg.channel_name == "app.channel"
    assert cfg.launch.extras == {}
    assert cfg.dispatch.queue_maxsize == 0


def test_load_config_converts_camel_case_but_keeps_extra_names(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "channelName": "demo.channel",
                "logging": {"level": "DEBUG", "fileEnabled": False},
                "launch": {"extras": {"DEMO_MODE": True, "startPage": "home"}},
                "dispatch": {"queueMaxsize": 8},
            }
        )
    )
    cfg = load_config(path)
    assert cfg.channel_name == "demo.channel"
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.file_enabled is False
    assert cfg.launch.extras == {"DEMO_MODE": True, "startPage": "home"}
    assert cfg.dispatch.queue_maxsize == 8


def test_load_config_invalid_file_raises_value_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{broken")
    with pytest.raises(ValueError, match="Failed to load config"):
        load_config(path)


def test_load_config_rejects_negative_queue_size(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"dispatch": {"queueMaxsize": -1}}))
    with pytest.raises(ValueError):
        load_config(path)


def test_save_then_load_preserves_values(tmp_path):
    path = tmp_path / "nested" / "config.json"
    cfg = Config()
    cfg.launch.extras = {"DEMO_MODE": True}
    cfg.logging.level = "WARNING"
    save_config(cfg, path)

    raw = json.loads(path.read_text())
    assert raw["channelName"] == "app.channel"
    assert raw["launch"]["extras"] == {"DEMO_MODE": True}
    assert raw["logging"]["fileEnabled"] is True

    loaded = load_config(path)
    assert loaded.launch.extras == {"DEMO_MODE": True}
    assert loaded.logging.level == "WARNING"


def test_env_overrides_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("HOSTBRIDGE_CHANNEL_NAME", "env.channel")
    monkeypatch.setenv("HOSTBRIDGE_LOGGING__LEVEL", "ERROR")
    cfg = load_config(tmp_path / "missing.json")
    assert cfg.channel_name == "env.channel"
    assert cfg.logging.level == "ERROR"


def test_key_helpers():
    assert camel_to_snake("queueMaxsize") == "queue_maxsize"
    assert snake_to_camel("file_enabled") == "fileEnabled"
    assert convert_keys({"launch": {"extras": {"DEMO_MODE": 1}}}) == {"launch": {"extras": {"DEMO_MODE": 1}}}
