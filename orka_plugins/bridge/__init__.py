"""External worker bridge: one call in, one short-lived process, one outcome out."""

from .codec import CodecError, WorkerOutcome, decode_outcome, encode_payload
from .diagnostics import DiagnosticBuffer
from .environment import DENIED_ENV_PREFIXES, sanitize_env
from .process import invoke_worker
from .resolver import WorkerPathResolver
from .worker_bridge import WorkerBridge

__all__ = [
    "CodecError",
    "DENIED_ENV_PREFIXES",
    "DiagnosticBuffer",
    "WorkerBridge",
    "WorkerOutcome",
    "WorkerPathResolver",
    "decode_outcome",
    "encode_payload",
    "invoke_worker",
    "sanitize_env",
]
