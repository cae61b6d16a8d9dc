"""Shared plugin types and helpers."""

from .contracts import Plugin, WorkerRunner
from .protocol import CallRequest, CallResponse
from .serialization import decode_call_request, decode_call_response, encode_call_response, safe_dict

__all__ = [
    "CallRequest",
    "CallResponse",
    "Plugin",
    "WorkerRunner",
    "decode_call_request",
    "decode_call_response",
    "encode_call_response",
    "safe_dict",
]
