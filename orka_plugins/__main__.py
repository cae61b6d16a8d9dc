"""Entry point for running orka-plugins as a module: python -m orka_plugins."""

from orka_plugins.cli.commands import app

if __name__ == "__main__":
    app()
