"""Compose project scaffolding commands (GOWA, n8n, ...)."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from opskit.cli_support import (
    UsageFallbackGroup,
    configure_logging,
    handle_cli_error,
    print_plain,
    print_success,
    usage_error,
)
from opskit.core.config import ScaffoldConfig
from opskit.scaffold import AppCatalog, AppKind, DirectoryExists, ScaffoldManager, ScaffoldRequest


def _usage(kind: AppKind, prog: str) -> str:
    return f"Usage:\n  {prog} {kind.key} --name <name> --port <port>"


def _make_scaffold_command(kind: AppKind, console: Console, prog: str):
    def scaffold_command(
        name: Optional[str] = typer.Option(None, "--name", "-n", help="Project, container and volume name"),
        port: Optional[str] = typer.Option(None, "--port", "-p", help="Host port to publish"),
    ):
        if not name or not port:
            usage_error(console, "Both --name and --port are required", _usage(kind, prog))

        try:
            request = ScaffoldRequest.build(kind.key, name, port)
            manager = ScaffoldManager(root=ScaffoldConfig.from_env().root)
            base_dir = manager.scaffold(request)
        except (DirectoryExists, ValueError, OSError) as e:
            handle_cli_error(e, console)

        print_success(console, f"{kind.title} project created")
        print_plain(console, f"Name   : {request.name}")
        print_plain(console, f"Port   : {request.port}")
        print_plain(console, f"Path   : {base_dir}")
        console.print()
        console.print("[cyan]Next step:[/cyan]")
        print_plain(console, f"cd {base_dir} && docker compose up -d")

    scaffold_command.__doc__ = f"Scaffold a {kind.title} compose project ({kind.description})."
    return scaffold_command


def build_scaffold_app(console: Console, prog: str = "dockapp") -> typer.Typer:
    """Create the scaffold command group."""
    scaffold_app = typer.Typer(
        help="Scaffold docker compose projects under ~/dockerApp",
        cls=UsageFallbackGroup,
        add_completion=False,
    )

    @scaffold_app.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
    ):
        configure_logging(verbose, log_file)
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())

    @scaffold_app.command("kinds")
    def kinds_command():
        """List the app kinds that can be scaffolded."""
        table = Table(title="Scaffoldable apps", show_header=True, header_style="bold cyan")
        table.add_column("Kind", style="cyan")
        table.add_column("Image", style="white")
        table.add_column("Files", style="yellow")
        table.add_column("Description", style="dim")

        for kind in AppCatalog.list_apps():
            table.add_row(kind.key, kind.image, ", ".join(kind.files), kind.description)

        console.print(table)

    for kind in AppCatalog.list_apps():
        scaffold_app.command(kind.key)(_make_scaffold_command(kind, console, prog))

    return scaffold_app


def register_scaffold_commands(app: typer.Typer, console: Console) -> None:
    """Attach scaffold commands to the main CLI."""
    app.add_typer(build_scaffold_app(console, prog="opskit scaffold"), name="scaffold")
