"""CLI commands for orka-plugins.

Single entry point: ``serve`` exposes one plugin over HTTP, ``call`` runs one
method in-process, ``plugins`` and ``worker-path`` inspect the installation.
"""

import json
import os
import sys

# Local LiteLLM cost map; importing litellm must not hit the network.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from orka_plugins import __logo__, __version__
from orka_plugins.cli.shared.logging_utils import ensure_rotating_log_file
from orka_plugins.plugins.core.serialization import encode_call_response

app = typer.Typer(
    name="orka-plugins",
    help=f"{__logo__} orka-plugins - plugin dispatcher and worker bridge",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} orka-plugins v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", callback=version_callback, is_eager=True
    ),
):
    """orka-plugins - plugin dispatcher and worker bridge."""
    pass


def _load(config_path: str | None):
    from pathlib import Path

    from orka_plugins.config.loader import load_config

    return load_config(Path(config_path).expanduser() if config_path else None)


def _dispatcher_or_exit(plugin_id: str, config):
    from orka_plugins.plugins.registry import build_dispatcher
    from orka_plugins.utils.exceptions import UnknownPluginError

    try:
        return build_dispatcher(plugin_id, config)
    except UnknownPluginError as e:
        available = ", ".join(e.details.get("available") or [])
        console.print(f"[red]{e}[/red] (available: {available})")
        raise typer.Exit(2)


# ============================================================================
# Server
# ============================================================================


@app.command()
def serve(
    plugin: str = typer.Option(None, "--plugin", help="Plugin id to serve (default: server.plugin)"),
    host: str = typer.Option(None, "--host", "-h", help="Bind host (default: server.host)"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port (default: server.port)"),
    config_path: str = typer.Option(None, "--config", "-c", help="Config file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Serve one plugin's methods over HTTP (POST /rpc, GET /health)."""
    import uvicorn

    from orka_plugins.api.server import create_app

    config = _load(config_path)
    plugin_id = plugin or config.server.plugin
    bind_host = host or config.server.host
    bind_port = port or config.server.port
    dispatcher = _dispatcher_or_exit(plugin_id, config)

    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG", format="<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>")
    log_path = ensure_rotating_log_file("serve", level="DEBUG" if verbose else "INFO")
    console.print(f"{__logo__} Serving plugin [cyan]{plugin_id}[/cyan] on {bind_host}:{bind_port}")
    console.print(f"[dim]Methods: {', '.join(dispatcher.methods)}[/dim]")
    console.print(f"[dim]Logs: {log_path}[/dim]")
    uvicorn.run(
        create_app(dispatcher),
        host=bind_host,
        port=bind_port,
        log_level="debug" if verbose else "info",
    )


# ============================================================================
# One-shot call
# ============================================================================


@app.command()
def call(
    plugin: str = typer.Argument(..., help="Plugin id"),
    method: str = typer.Argument(..., help="Method name"),
    args: str = typer.Option("{}", "--args", "-a", help="Arguments as a JSON object"),
    config_path: str = typer.Option(None, "--config", "-c", help="Config file path"),
    logs: bool = typer.Option(False, "--logs/--no-logs", help="Show runtime logs on stderr"),
):
    """Invoke one plugin method in-process and print the response as JSON."""
    try:
        parsed = json.loads(args)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid --args JSON: {e}[/red]")
        raise typer.Exit(2)
    if not isinstance(parsed, dict):
        console.print("[red]--args must be a JSON object[/red]")
        raise typer.Exit(2)

    if logs:
        logger.enable("orka_plugins")
    else:
        logger.disable("orka_plugins")

    config = _load(config_path)
    dispatcher = _dispatcher_or_exit(plugin, config)
    response = dispatcher.dispatch(method, parsed)
    sys.stdout.write(encode_call_response(response) + "\n")
    raise typer.Exit(0 if response.success else 1)


# ============================================================================
# Inspection
# ============================================================================


@app.command()
def plugins(
    config_path: str = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """List built-in plugins and the methods each registers."""
    from orka_plugins.plugins.registry import build_dispatcher, plugin_ids

    config = _load(config_path)
    table = Table(title="Plugins")
    table.add_column("ID", style="cyan")
    table.add_column("Methods")
    for plugin_id in plugin_ids():
        table.add_row(plugin_id, ", ".join(build_dispatcher(plugin_id, config).methods))
    console.print(table)


@app.command("worker-path")
def worker_path(
    config_path: str = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Show where the ai-worker plugin looks for its worker program."""
    from orka_plugins.bridge.worker_bridge import WorkerBridge
    from orka_plugins.utils.exceptions import WorkerNotFound

    config = _load(config_path)
    bridge = WorkerBridge(config.worker)
    try:
        path = bridge.resolver.resolve()
    except WorkerNotFound as e:
        console.print(f"[red]{e}[/red]")
        for candidate in e.details.get("searched") or []:
            console.print(f"  [dim]searched {candidate}[/dim]")
        raise typer.Exit(1)
    typer.echo(str(path))
    console.print(f"[dim]command: {' '.join(bridge.command_for(path))}[/dim]")


if __name__ == "__main__":
    app()
