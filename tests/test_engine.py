"""End-to-end tests: activity -> engine -> channel -> dispatcher."""

from __future__ import annotations

import asyncio

import pytest

from hostbridge.channel.protocol import MethodNotImplemented, Success
from hostbridge.constants import CHANNEL_NAME, EXTRA_DEMO_MODE, METHOD_GET_DEMO_MODE
from hostbridge.engine import HostActivity, HostEngine
from hostbridge.launch_context import LaunchContext
from hostbridge.utils.exceptions import EngineDetachedError, MissingMethodError


@pytest.mark.asyncio
async def test_demo_mode_true_scenario():
    async with HostActivity(LaunchContext({EXTRA_DEMO_MODE: True})) as engine:
        assert await engine.channel(CHANNEL_NAME).invoke_method(METHOD_GET_DEMO_MODE) is True


@pytest.mark.asyncio
async def test_demo_mode_absent_scenario():
    async with HostActivity(LaunchContext({})) as engine:
        assert await engine.channel(CHANNEL_NAME).invoke_method(METHOD_GET_DEMO_MODE) is False


@pytest.mark.asyncio
async def test_unknown_method_scenario():
    async with HostActivity(LaunchContext({EXTRA_DEMO_MODE: True})) as engine:
        channel = engine.channel(CHANNEL_NAME)
        assert isinstance(await channel.invoke("unknownMethod"), MethodNotImplemented)
        assert isinstance(await channel.invoke("unknownMethod", {"a": [1, 2]}), MethodNotImplemented)
        with pytest.raises(MissingMethodError):
            await channel.invoke_method("unknownMethod")


@pytest.mark.asyncio
async def test_calls_before_registration_are_not_implemented():
    engine = HostEngine(engine_id="cold")
    channel = engine.channel(CHANNEL_NAME)
    assert isinstance(await channel.invoke(METHOD_GET_DEMO_MODE), MethodNotImplemented)

    HostActivity(LaunchContext({EXTRA_DEMO_MODE: True})).configure_engine(engine)
    assert await channel.invoke(METHOD_GET_DEMO_MODE) == Success(True)
    await engine.detach()


@pytest.mark.asyncio
async def test_recreated_engine_serves_calls_and_old_engine_is_detached():
    activity = HostActivity(LaunchContext({EXTRA_DEMO_MODE: True}))
    old = await activity.attach()
    old_channel = old.channel(CHANNEL_NAME)
    old_dispatcher = activity.dispatcher

    new = await activity.recreate()

    assert activity.engine is new
    assert not old.attached
    assert old.registrar.channel_names() == []
    assert activity.dispatcher is not old_dispatcher
    with pytest.raises(EngineDetachedError):
        await old_channel.invoke_method(METHOD_GET_DEMO_MODE)
    with pytest.raises(EngineDetachedError):
        old.channel(CHANNEL_NAME)
    assert await new.channel(CHANNEL_NAME).invoke_method(METHOD_GET_DEMO_MODE) is True
    await activity.detach()
    assert activity.engine is None


@pytest.mark.asyncio
async def test_stale_handler_never_sees_calls_after_recreate():
    seen = []
    activity = HostActivity(
        LaunchContext(),
        methods={"whoami": lambda call, ctx: seen.append(call.method) or "engine"},
    )
    old = await activity.attach()
    old_handler = old.registrar.handler_for(CHANNEL_NAME)
    new = await activity.recreate()

    assert new.registrar.handler_for(CHANNEL_NAME) is not None
    assert new.registrar.handler_for(CHANNEL_NAME) != old_handler
    assert await new.channel(CHANNEL_NAME).invoke_method("whoami") == "engine"
    assert seen == ["whoami"]
    await activity.detach()


@pytest.mark.asyncio
async def test_concurrent_calls_each_get_exactly_one_result():
    async with HostActivity(LaunchContext({EXTRA_DEMO_MODE: True})) as engine:
        channel = engine.channel(CHANNEL_NAME)
        methods = [METHOD_GET_DEMO_MODE, "nope"] * 10
        results = await asyncio.gather(*(channel.invoke(m) for m in methods))

    assert len(results) == len(methods)
    for method, result in zip(methods, results):
        if method == METHOD_GET_DEMO_MODE:
            assert result == Success(True)
        else:
            assert isinstance(result, MethodNotImplemented)


@pytest.mark.asyncio
async def test_custom_channel_name():
    async with HostActivity(LaunchContext({EXTRA_DEMO_MODE: True}), channel_name="other.channel") as engine:
        assert await engine.channel("other.channel").invoke_method(METHOD_GET_DEMO_MODE) is True
        assert isinstance(await engine.channel(CHANNEL_NAME).invoke(METHOD_GET_DEMO_MODE), MethodNotImplemented)
