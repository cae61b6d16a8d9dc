"""FastAPI transport for one plugin dispatcher.

POST /rpc carries a ``{"method": ..., "args": {...}}`` call and always answers
200 with a CallResponse body; failures live in ``success``/``error``.
"""

from typing import Any

from fastapi import FastAPI
from loguru import logger

from orka_plugins import __version__
from orka_plugins.plugins.core.serialization import decode_call_request
from orka_plugins.plugins.dispatcher import Dispatcher


def create_app(dispatcher: Dispatcher) -> FastAPI:
    """Build the HTTP app serving ``dispatcher``."""
    app = FastAPI(title=f"orka-plugins:{dispatcher.plugin_id}", version=__version__)
    app.state.dispatcher = dispatcher

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {
            "ok": True,
            "plugin": dispatcher.plugin_id,
            "methods": dispatcher.methods,
        }

    @app.post("/rpc")
    def rpc(body: dict[str, Any]) -> dict[str, Any]:
        # Handlers block on worker processes; keep this off the event loop.
        request = decode_call_request(body)
        logger.debug("rpc {}.{}", dispatcher.plugin_id, request.method)
        return dispatcher.handle(request).to_dict()

    return app
