import json

from orka_plugins.plugins.core.protocol import CallResponse
from orka_plugins.plugins.core.serialization import (
    decode_call_request,
    decode_call_response,
    encode_call_response,
    safe_dict,
)


def test_decode_call_request_normalizes():
    request = decode_call_request({"method": " ChatCompletion ", "args": {"model": "y"}})
    assert request.method == "ChatCompletion"
    assert request.args == {"model": "y"}


def test_decode_call_request_tolerates_garbage():
    request = decode_call_request(["not", "a", "dict"])
    assert request.method == ""
    assert request.args == {}
    assert decode_call_request({"method": 5, "args": "x"}).args == {}


def test_fail_never_has_empty_error():
    assert CallResponse.fail("").error == "call failed"
    assert decode_call_response({"success": False}).error == "call failed"


def test_encode_and_decode_response():
    line = encode_call_response(CallResponse.ok({"text": "héllo"}))
    assert json.loads(line) == {"success": True, "error": "", "data": {"text": "héllo"}}
    assert "héllo" in line
    decoded = decode_call_response(json.loads(line))
    assert decoded.success is True
    assert decoded.data == {"text": "héllo"}


def test_safe_dict():
    assert safe_dict(None) == {}
    assert safe_dict({"a": 1}) == {"a": 1}
