#!/usr/bin/env python3
"""opskit CLI - small helpers for routine DevOps chores."""

import typer
from rich.console import Console

from opskit import __version__
from opskit.cli_dns_commands import build_dns_app, register_dns_commands
from opskit.cli_github_commands import build_github_app, register_github_commands
from opskit.cli_scaffold_commands import build_scaffold_app, register_scaffold_commands

app = typer.Typer(
    name="opskit",
    help="""opskit - small helpers for routine DevOps chores

Quick start:
  opskit scaffold gowaApp --name wa1 --port 3002   # WhatsApp gateway compose project
  opskit scaffold n8nApp --name flows --port 5679  # n8n compose project
  opskit gh                                        # Interactive GitHub menu
  opskit dns list                                  # Cloudflare DNS records

Each group also ships as its own command: dockapp, ghh, cfdns.
""",
    add_completion=False,
)

console = Console()

# Attach modular subcommands
register_scaffold_commands(app, console)
register_github_commands(app, console)
register_dns_commands(app, console)


@app.command()
def version():
    """Show opskit version."""
    console.print(f"opskit v{__version__}")


# Standalone entry points
scaffold_app = build_scaffold_app(console, prog="dockapp")
github_app = build_github_app(console)
dns_app = build_dns_app(console, prog="cfdns")

if __name__ == "__main__":
    app()
