"""orka-plugins - plugin dispatcher with an external worker bridge."""

__version__ = "0.1.0"
__logo__ = "🐋"
