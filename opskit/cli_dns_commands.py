"""Cloudflare DNS record commands."""
from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from opskit.cli_dns_helpers import format_record_table, parse_patch
from opskit.cli_support import (
    UsageFallbackGroup,
    configure_logging,
    handle_cli_error,
    print_error,
    print_plain,
    print_success,
    usage_error,
)
from opskit.core.config import CloudflareConfig, ConfigError
from opskit.services.cloudflare import ApiFailure, CloudflareClient

HELP = "Manage Cloudflare DNS records (needs CF_API_TOKEN and CF_ZONE_ID)"


def usage_text(prog: str) -> str:
    return f"""Usage:
  {prog} list [--type TYPE] [--name NAME]
  {prog} show <ID>
  {prog} add <TYPE> <NAME> <CONTENT> [proxied] [--ttl N]
  {prog} update <ID> key=value key=value
  {prog} delete <ID>"""


def build_dns_app(console: Console, prog: str = "cfdns") -> typer.Typer:
    """Create the DNS command group.

    The Cloudflare client is built once per invocation from the environment;
    a missing token or zone id stops the process before any command runs.
    """
    dns_app = typer.Typer(
        help=HELP,
        cls=UsageFallbackGroup,
        add_completion=False,
    )
    usage = usage_text(prog)

    def report_api_failure(e: ApiFailure) -> None:
        print_error(console, "Cloudflare API Error:")
        for error in e.errors:
            if isinstance(error, dict) and "message" in error:
                print_plain(console, f"  [{error.get('code', '?')}] {error['message']}")
            else:
                print_plain(console, f"  {error}")
        raise typer.Exit(1)

    @dns_app.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
    ):
        configure_logging(verbose, log_file)
        if ctx.invoked_subcommand is None:
            print_plain(console, usage)
            return

        try:
            ctx.obj = CloudflareClient(CloudflareConfig.from_env())
        except ConfigError as e:
            handle_cli_error(e, console)

    @dns_app.command("list")
    def list_command(
        ctx: typer.Context,
        record_type: Optional[str] = typer.Option(None, "--type", "-t", help="Only records of this type"),
        name: Optional[str] = typer.Option(None, "--name", help="Only records with this name"),
    ):
        """List the zone's records as a table."""
        client: CloudflareClient = ctx.obj
        try:
            records = client.list_records(record_type=record_type, name=name)
        except ApiFailure as e:
            report_api_failure(e)

        for line in format_record_table(records):
            print_plain(console, line)

    @dns_app.command("show")
    def show_command(
        ctx: typer.Context,
        record_id: Optional[str] = typer.Argument(None, metavar="ID", help="Record id"),
    ):
        """Show one record."""
        if not record_id:
            usage_error(console, "Record id required", usage)

        client: CloudflareClient = ctx.obj
        try:
            record = client.get_record(record_id)
        except ApiFailure as e:
            report_api_failure(e)

        for line in format_record_table([record]):
            print_plain(console, line)

    @dns_app.command("add")
    def add_command(
        ctx: typer.Context,
        record_type: Optional[str] = typer.Argument(None, metavar="TYPE", help="A, AAAA, CNAME, TXT or MX"),
        name: Optional[str] = typer.Argument(None, help="Record name, e.g. test.domain.com"),
        content: Optional[str] = typer.Argument(None, help="Record content, e.g. 1.1.1.1"),
        proxied: Optional[str] = typer.Argument(None, help="'true' to proxy through Cloudflare"),
        ttl: Optional[int] = typer.Option(None, "--ttl", help="TTL in seconds (default: 1 = automatic)"),
    ):
        """Create a record."""
        if not record_type or not name or not content:
            usage_error(console, "TYPE, NAME and CONTENT are required", usage)

        fields = {
            "type": record_type,
            "name": name,
            "content": content,
            "proxied": proxied == "true",
        }
        if ttl is not None:
            fields["ttl"] = ttl

        client: CloudflareClient = ctx.obj
        try:
            record = client.add_record(fields)
        except ApiFailure as e:
            report_api_failure(e)
        except ValueError as e:
            handle_cli_error(e, console)

        print_success(console, f"Record added: {escape(record.id)}")

    @dns_app.command("update")
    def update_command(
        ctx: typer.Context,
        record_id: Optional[str] = typer.Argument(None, metavar="ID", help="Record id"),
        pairs: Optional[List[str]] = typer.Argument(None, metavar="KEY=VALUE...", help="Fields to change"),
    ):
        """Replace a record with its current values merged with KEY=VALUE pairs."""
        if not record_id:
            usage_error(console, "Record id required", usage)

        try:
            patch = parse_patch(pairs or [])
        except ValueError as e:
            usage_error(console, str(e), usage)

        client: CloudflareClient = ctx.obj
        try:
            record = client.update_record(record_id, patch)
        except ApiFailure as e:
            report_api_failure(e)
        except ValueError as e:
            handle_cli_error(e, console)

        print_success(console, f"Record updated: {escape(record.id)}")

    @dns_app.command("delete")
    def delete_command(
        ctx: typer.Context,
        record_id: Optional[str] = typer.Argument(None, metavar="ID", help="Record id"),
    ):
        """Delete a record."""
        if not record_id:
            usage_error(console, "Record id required", usage)

        client: CloudflareClient = ctx.obj
        try:
            client.delete_record(record_id)
        except ApiFailure as e:
            report_api_failure(e)

        print_success(console, f"Record deleted: {escape(record_id)}")

    return dns_app


def register_dns_commands(app: typer.Typer, console: Console) -> None:
    """Attach DNS commands to the main CLI as ``dns``."""
    app.add_typer(build_dns_app(console, prog="opskit dns"), name="dns")
