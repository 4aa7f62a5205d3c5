"""Shared utilities for opskit CLI modules."""
from __future__ import annotations

from typing import Optional

import click
import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperGroup


class UsageFallbackGroup(TyperGroup):
    """Command group that prints usage for unknown sub-commands instead of failing."""

    def resolve_command(self, ctx: click.Context, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError:
            click.echo(ctx.get_help())
            ctx.exit(0)


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Apply --verbose/--log-file options shared by every command group."""
    from opskit.core.logger import set_verbose, setup_file_logging

    if verbose:
        set_verbose(True)
    if log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)


def confirm_action(message: str, yes_flag: bool = False) -> bool:
    """Prompt user for confirmation unless --yes.

    Args:
        message: Confirmation message to display
        yes_flag: Skip prompt if True (from --yes flag)

    Returns:
        True if confirmed, False otherwise
    """
    if yes_flag:
        return True
    return typer.confirm(message)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    print_error(console, escape(str(e)))
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def usage_error(console: Console, message: str, usage: str) -> None:
    """Report a missing or malformed argument with usage text, then exit 1."""
    print_error(console, escape(message))
    print_plain(console, usage)
    raise typer.Exit(1)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting.

    Args:
        console: Rich console for output
        message: Success message
        prefix: Prefix symbol (default: ✓)
    """
    console.print(f"[green]{prefix}[/green] {message}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting.

    Args:
        console: Rich console for output
        message: Error message
        prefix: Prefix symbol (default: ✗)
    """
    console.print(f"[red]{prefix}[/red] {message}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}")


def print_plain(console: Console, text: str = "") -> None:
    """Print text verbatim, without markup, emoji codes or wrapping."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
