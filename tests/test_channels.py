from unittest.mock import MagicMock

import pytest

from bridge import ChannelError, ChannelResult, MethodChannel, widget_channel


def test_invoke_returns_handler_value():
    channel = MethodChannel("test")
    channel.register("echo", lambda arguments: arguments["value"])

    result = channel.invoke("echo", {"value": 42})

    assert result == ChannelResult.success(42)
    assert result.ok


def test_unknown_method_is_not_implemented():
    result = MethodChannel("test").invoke("missing")

    assert result.implemented is False
    assert not result.ok


def test_channel_error_becomes_error_result():
    channel = MethodChannel("test")

    def fail(arguments):
        raise ChannelError("BAD", "went wrong", {"why": "test"})

    channel.register("fail", fail)
    result = channel.invoke("fail")

    assert result.error_code == "BAD"
    assert result.error_message == "went wrong"
    assert result.error_details == {"why": "test"}
    assert not result.ok


def test_other_exceptions_propagate():
    channel = MethodChannel("test")

    def boom(arguments):
        raise RuntimeError("boom")

    channel.register("boom", boom)
    with pytest.raises(RuntimeError):
        channel.invoke("boom")


def test_duplicate_registration_rejected():
    channel = MethodChannel("test")
    channel.register("a", lambda arguments: None)

    with pytest.raises(ValueError):
        channel.register("a", lambda arguments: None)


def test_update_today_widget_refreshes_hub():
    hub = MagicMock()
    channel = widget_channel(hub)

    result = channel.invoke("updateTodayWidget")

    assert result == ChannelResult.success(None)
    hub.update_all.assert_called_once_with()
    assert channel.name == "cqut/widget"
