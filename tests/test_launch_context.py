import pytest
from loguru import logger

from hostbridge.launch_context import LaunchContext, parse_extra_value
from hostbridge.utils.exceptions import HostBridgeError


def test_get_bool_returns_stored_value():
    assert LaunchContext({"DEMO_MODE": True}).get_bool("DEMO_MODE") is True
    assert LaunchContext({"DEMO_MODE": False}).get_bool("DEMO_MODE", True) is False


def test_get_bool_absent_key_uses_default():
    ctx = LaunchContext()
    assert ctx.get_bool("DEMO_MODE") is False
    assert ctx.get_bool("DEMO_MODE", True) is True


def test_get_bool_wrong_type_uses_default():
    ctx = LaunchContext({"DEMO_MODE": "true", "COUNT": 1})
    assert ctx.get_bool("DEMO_MODE") is False
    assert ctx.get_bool("COUNT") is False


def test_get_int_rejects_bool():
    ctx = LaunchContext({"PORT": 8080, "FLAG": True})
    assert ctx.get_int("PORT") == 8080
    assert ctx.get_int("FLAG", 7) == 7
    assert ctx.get_int("MISSING", 3) == 3


def test_context_is_read_only_and_detached_from_source():
    source = {"DEMO_MODE": True}
    ctx = LaunchContext(source)
    source["DEMO_MODE"] = False
    assert ctx["DEMO_MODE"] is True
    with pytest.raises(TypeError):
        ctx["DEMO_MODE"] = False  # type: ignore[index]
    assert dict(ctx) == {"DEMO_MODE": True}
    assert ctx == {"DEMO_MODE": True}


def test_merged_layers_overrides_without_mutating():
    base = LaunchContext({"DEMO_MODE": False, "LOCALE": "en"})
    merged = base.merged({"DEMO_MODE": True})
    assert merged == {"DEMO_MODE": True, "LOCALE": "en"}
    assert base["DEMO_MODE"] is False


def test_from_pairs_coerces_values():
    ctx = LaunchContext.from_pairs(["DEMO_MODE=true", "RETRIES=3", "NAME=demo user", "OFF=False"])
    assert ctx["DEMO_MODE"] is True
    assert ctx["RETRIES"] == 3
    assert ctx["NAME"] == "demo user"
    assert ctx["OFF"] is False


@pytest.mark.parametrize("raw", ["yes", "no", "on", "off", "1.5", "0x1"])
def test_from_pairs_leaves_other_literals_as_strings(raw):
    ctx = LaunchContext.from_pairs([f"DEMO_MODE={raw}"])
    assert ctx["DEMO_MODE"] == raw
    assert ctx.get_bool("DEMO_MODE") is False


def test_get_str_wrong_type_uses_default_and_warns():
    messages = []
    sink_id = logger.add(lambda message: messages.append(str(message)), level="WARNING")
    try:
        ctx = LaunchContext({"LOCALE": "en", "DEMO_MODE": True})
        assert ctx.get_str("LOCALE") == "en"
        assert ctx.get_str("DEMO_MODE", "fallback") == "fallback"
        assert ctx.get_str("MISSING") is None
    finally:
        logger.remove(sink_id)
    assert len(messages) == 1
    assert "DEMO_MODE expected str" in messages[0]


@pytest.mark.parametrize("raw", ["DEMO_MODE", "=true", ""])
def test_from_pairs_rejects_malformed(raw):
    with pytest.raises(HostBridgeError) as exc_info:
        LaunchContext.from_pairs([raw])
    assert exc_info.value.code == "INVALID_EXTRA"


def test_parse_extra_value_keeps_plain_strings():
    assert parse_extra_value(" hello ") == "hello"
    assert parse_extra_value("1") == 1
