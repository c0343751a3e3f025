"""CLI commands for hostbridge.

Entry point for running the host side of the bridge by hand: invoke a single
method against a throwaway engine (``call``), serve an engine over stdio for
an out-of-process embedded runtime (``serve``), and inspect what is
configured (``methods``, ``status``, ``init``).
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from hostbridge import __logo__, __version__
from hostbridge.channel.protocol import CallError, CallResult, Success
from hostbridge.cli.shared.logging_utils import configure_console_logging, ensure_rotating_log_file
from hostbridge.config.loader import get_config_path, load_config, save_config
from hostbridge.config.schema import Config
from hostbridge.dispatch.methods import default_methods
from hostbridge.engine import HostActivity
from hostbridge.launch_context import LaunchContext
from hostbridge.transport.stdio import StdioBridgeServer
from hostbridge.utils.exceptions import HostBridgeError

app = typer.Typer(
    name="hostbridge",
    help=f"{__logo__} hostbridge - host side of the app method channel",
    no_args_is_help=True,
)

console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_IMPLEMENTED = 2


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} hostbridge v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """hostbridge - host side of the app method channel."""
    pass


def _load(config_path: Path | None, command: str) -> Config:
    try:
        config = load_config(config_path)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(EXIT_ERROR) from exc
    configure_console_logging(config.logging.level)
    if config.logging.file_enabled:
        ensure_rotating_log_file(command, level=config.logging.level)
    return config


def _launch_context(config: Config, extras: list[str] | None) -> LaunchContext:
    try:
        explicit = LaunchContext.from_pairs(extras or [])
    except HostBridgeError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(EXIT_ERROR) from exc
    return LaunchContext(config.launch.extras).merged(explicit)


def _parse_args(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        console.print(f"[red]--args is not valid JSON: {exc.msg}[/red]")
        raise typer.Exit(EXIT_ERROR) from exc


async def _invoke_once(activity: HostActivity, channel_name: str, method: str, arguments: Any) -> CallResult:
    async with activity as engine:
        return await engine.channel(channel_name).invoke(method, arguments)


@app.command()
def call(
    method: str = typer.Argument(..., help="Method name, e.g. getDemoMode"),
    args: str = typer.Option(None, "--args", "-a", help="JSON argument payload"),
    extra: list[str] = typer.Option(None, "--extra", "-e", help="Launch extra KEY=VALUE (repeatable)"),
    channel: str = typer.Option(None, "--channel", "-c", help="Channel to call (defaults to the configured one)"),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
) -> None:
    """Invoke one method against a freshly attached engine and print the result."""
    config = _load(config_path, "call")
    arguments = _parse_args(args)
    activity = HostActivity(
        _launch_context(config, extra),
        channel_name=config.channel_name,
        queue_maxsize=config.dispatch.queue_maxsize,
    )
    result = asyncio.run(_invoke_once(activity, channel or config.channel_name, method, arguments))

    if isinstance(result, Success):
        console.print(json.dumps(result.value, ensure_ascii=False), markup=False, highlight=False)
        raise typer.Exit(EXIT_OK)
    if isinstance(result, CallError):
        console.print(f"[red]Error {result.code}[/red]: {result.message or ''}")
        raise typer.Exit(EXIT_ERROR)
    console.print(f"[yellow]Not implemented:[/yellow] {method}")
    raise typer.Exit(EXIT_NOT_IMPLEMENTED)


async def _serve_stdio(activity: HostActivity) -> int:
    async with activity as engine:
        return await StdioBridgeServer(engine.messenger).serve(sys.stdin, sys.stdout)


@app.command()
def serve(
    extra: list[str] = typer.Option(None, "--extra", "-e", help="Launch extra KEY=VALUE (repeatable)"),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
) -> None:
    """Serve the bridge over stdio (one JSON frame per line) until EOF."""
    config = _load(config_path, "serve")
    activity = HostActivity(
        _launch_context(config, extra),
        channel_name=config.channel_name,
        queue_maxsize=config.dispatch.queue_maxsize,
    )
    try:
        asyncio.run(_serve_stdio(activity))
    except KeyboardInterrupt:
        pass


@app.command()
def methods() -> None:
    """List recognized host methods."""
    for name in sorted(default_methods()):
        console.print(name, markup=False, highlight=False)


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config with defaults"),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
) -> None:
    """Write a config file with default values."""
    path = config_path or get_config_path()

    if path.exists() and not force:
        config = _load(config_path, "init")
        save_config(config, path)
        console.print(f"[green]✓[/green] Config refreshed at {path} (existing values preserved)")
        return

    save_config(Config(), path)
    console.print(f"[green]✓[/green] Created config at {path}")


@app.command()
def status(
    extra: list[str] = typer.Option(None, "--extra", "-e", help="Launch extra KEY=VALUE (repeatable)"),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
) -> None:
    """Show hostbridge configuration and effective launch extras."""
    path = config_path or get_config_path()
    config = _load(config_path, "status")
    launch = _launch_context(config, extra)

    console.print(f"{__logo__} hostbridge Status\n")
    console.print(f"Config: {path} {'[green]✓[/green]' if path.exists() else '[dim]defaults[/dim]'}")
    console.print(f"Channel: {config.channel_name}")
    console.print(f"Log level: {config.logging.level}")

    table = Table(title="Launch extras")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in sorted(launch.items()):
        table.add_row(key, json.dumps(value))
    console.print(table)


if __name__ == "__main__":
    app()
