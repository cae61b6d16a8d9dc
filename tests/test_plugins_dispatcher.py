import pytest

from orka_plugins.bridge.worker_bridge import WorkerBridge
from orka_plugins.plugins.core.contracts import Plugin, WorkerRunner
from orka_plugins.plugins.core.protocol import CallRequest
from orka_plugins.plugins.dispatcher import Dispatcher, PluginApi
from orka_plugins.plugins.registry import build_dispatcher, plugin_ids
from orka_plugins.utils.exceptions import UnknownPluginError, ValidationError


class EchoPlugin:
    def register(self, api):
        api.register_method("Echo", lambda args: {"echo": args})
        api.register_method("Invalid", self._invalid)
        api.register_method("Crash", self._crash)
        api.register_method("NotAMapping", lambda args: ["x"])

    def _invalid(self, args):
        raise ValidationError("text is required", field="text")

    def _crash(self, args):
        raise RuntimeError("token=sk-abcdefghijklmnopqrstuvwxyz leaked")


def test_register_method_rejects_bad_registrations():
    api = PluginApi("p")
    api.register_method("A", lambda args: {})
    with pytest.raises(ValueError):
        api.register_method("A", lambda args: {})
    with pytest.raises(ValueError):
        api.register_method("  ", lambda args: {})
    with pytest.raises(ValueError):
        api.register_method("B", "not callable")


def test_from_plugin_class_and_function():
    assert Dispatcher.from_plugin("echo", EchoPlugin).methods == ["Crash", "Echo", "Invalid", "NotAMapping"]

    def register(api):
        api.register_method("Ping", lambda args: {"pong": True})

    assert Dispatcher.from_plugin("fn", register).dispatch("Ping").data == {"pong": True}


def test_from_plugin_requires_register():
    with pytest.raises(TypeError):
        Dispatcher.from_plugin("bad", object())


def test_dispatch_success_and_args_copy():
    args = {"a": 1}
    response = Dispatcher.from_plugin("echo", EchoPlugin()).dispatch("Echo", args)
    assert response.success is True
    assert response.data == {"echo": {"a": 1}}
    assert response.to_dict() == {"success": True, "error": "", "data": {"echo": {"a": 1}}}


def test_unknown_method():
    response = Dispatcher.from_plugin("echo", EchoPlugin()).dispatch("Nope", {})
    assert response.to_dict() == {"success": False, "error": "unknown method: Nope", "data": None}


def test_plugin_error_message_is_passed_through():
    response = Dispatcher.from_plugin("echo", EchoPlugin()).handle(CallRequest(method="Invalid"))
    assert response.error == "text is required"


def test_unexpected_exception_is_sanitized():
    response = Dispatcher.from_plugin("echo", EchoPlugin()).call_method("Crash", {})
    assert response.success is False
    assert response.error.startswith("internal error: ")
    assert "sk-abcdefghijklmnopqrstuvwxyz" not in response.error


def test_non_mapping_result_is_an_error():
    response = Dispatcher.from_plugin("echo", EchoPlugin()).dispatch("NotAMapping", {})
    assert response.success is False
    assert "expected a mapping" in response.error


def test_registry_builds_builtin_plugins():
    assert plugin_ids() == ["ai-worker", "llm", "telegram"]
    assert build_dispatcher("ai-worker").methods == ["ChatCompletion"]
    assert build_dispatcher("llm").methods == ["ChatCompletion", "StreamChatCompletion"]
    assert build_dispatcher("telegram").methods == ["SendMessage"]
    with pytest.raises(UnknownPluginError) as exc_info:
        build_dispatcher("slack")
    assert exc_info.value.details["available"] == ["ai-worker", "llm", "telegram"]


def test_dispatcher_satisfies_plugin_contract():
    assert isinstance(Dispatcher.from_plugin("echo", EchoPlugin()), Plugin)
    assert isinstance(WorkerBridge(), WorkerRunner)


def test_non_string_method_name_is_contained():
    response = Dispatcher("x", {}).dispatch(["ChatCompletion"], {})
    assert response.success is False
    assert response.error == "unknown method: ['ChatCompletion']"


def test_non_mapping_args_are_contained():
    response = Dispatcher.from_plugin("echo", EchoPlugin()).dispatch("Echo", ["a"])
    assert response.success is False
    assert response.error.startswith("internal error: ")
