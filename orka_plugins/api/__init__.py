"""HTTP transport."""

from orka_plugins.api.server import create_app

__all__ = ["create_app"]
