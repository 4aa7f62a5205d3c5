"""GitHub helper commands: repositories, secrets and variables via gh."""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from opskit.cli_support import (
    UsageFallbackGroup,
    configure_logging,
    confirm_action,
    handle_cli_error,
    print_error,
    print_info,
    print_success,
    usage_error,
)
from opskit.core.config import ConfigError, GitHubConfig
from opskit.core.runner import CommandFailed
from opskit.models import RepositoryDescriptor, Secret, Variable
from opskit.services.github_cli import GitHubCli
from opskit.services.repo_filters import (
    filter_by_visibility,
    filter_updated_before,
    filter_updated_within,
    sort_by_updated,
)

# Module-level console instance (will be set by build function)
console: Console = Console()

USAGE = """Usage:
  ghh                              interactive menu
  ghh menu
  ghh list [--visibility public|private] [--since-months N] [--older-than-months N]
  ghh add <name> [public|private]
  ghh delete <owner/repo> [--yes]
  ghh secrets <repo>
  ghh secret-set <repo> <key> [--value VALUE]
  ghh variables <repo>
  ghh variable-set <repo> <key> <value>"""

MENU_ITEMS = [
    ("1", "List repo"),
    ("2", "Add repo"),
    ("3", "Delete repo"),
    ("4", "Add secret"),
    ("5", "Add variable"),
    ("6", "List secrets"),
    ("7", "List variables"),
    ("8", "List public repos"),
    ("9", "List private repos"),
    ("10", "Repo updated last X months"),
    ("11", "Repo not updated for X months"),
    ("0", "Exit"),
]


def get_github_cli() -> GitHubCli:
    """Build the gh wrapper from environment settings."""
    return GitHubCli(config=GitHubConfig.from_env())


def _when(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


def show_repos(repos: Sequence[RepositoryDescriptor], title: str = "Repositories") -> None:
    table = Table(title=f"{title} ({len(repos)})", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Visibility", style="yellow")
    table.add_column("Updated", style="white")
    table.add_column("Created", style="white")
    table.add_column("Pushed", style="white")
    table.add_column("URL", style="dim")

    for repo in repos:
        table.add_row(
            escape(repo.name),
            (repo.visibility or "-").lower(),
            _when(repo.updated_at),
            _when(repo.created_at),
            _when(repo.pushed_at),
            escape(repo.url or ""),
        )
    console.print(table)


def show_secrets(secrets: Sequence[Secret], repo: str) -> None:
    table = Table(title=f"Secrets in {escape(repo)}", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Updated", style="white")
    for secret in secrets:
        table.add_row(escape(secret.name), _when(secret.updated_at))
    console.print(table)


def show_variables(variables: Sequence[Variable], repo: str) -> None:
    table = Table(title=f"Variables in {escape(repo)}", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_column("Updated", style="dim")
    for variable in variables:
        table.add_row(escape(variable.name), escape(variable.value), _when(variable.updated_at))
    console.print(table)


def _line() -> None:
    console.print("─" * 32)


def _ask_months(ask: Callable[[str], str], question: str) -> float:
    answer = ask(question)
    try:
        months = float(answer)
    except ValueError:
        raise ValueError(f"Expected a number of months, got '{answer}'") from None
    if months < 0:
        raise ValueError("Number of months cannot be negative")
    return months


def _menu_action(gh: GitHubCli, choice: str, ask: Callable[[str], str]) -> None:
    """Carry out one menu choice."""
    if choice == "1":
        show_repos(gh.list_repos())

    elif choice == "2":
        name = ask("Repo name: ")
        visibility = ask("Visibility (public/private): ") or "private"
        gh.create_repo(name, visibility)
        print_success(console, "Repo created")

    elif choice == "3":
        repo = ask("owner/repo: ")
        if confirm_action(f"Delete {repo}? This cannot be undone"):
            gh.delete_repo(repo)
            print_success(console, "Repo deleted")

    elif choice == "4":
        repo = ask("Repo (owner/name): ")
        key = ask("Secret key: ")
        value = ask("Secret value: ")
        gh.set_secret(repo, key, value)
        print_success(console, "Secret saved")

    elif choice == "5":
        repo = ask("Repo (owner/name): ")
        key = ask("Variable key: ")
        value = ask("Variable value: ")
        gh.set_variable(repo, key, value)
        print_success(console, "Variable saved")

    elif choice == "6":
        repo = ask("Repo (owner/name): ")
        show_secrets(gh.list_secrets(repo), repo)

    elif choice == "7":
        repo = ask("Repo (owner/name): ")
        show_variables(gh.list_variables(repo), repo)

    elif choice == "8":
        show_repos(filter_by_visibility(gh.list_repos(), "public"), "Public repositories")

    elif choice == "9":
        show_repos(filter_by_visibility(gh.list_repos(), "private"), "Private repositories")

    elif choice == "10":
        months = _ask_months(ask, "Last how many months?: ")
        repos = sort_by_updated(filter_updated_within(gh.list_repos(), months))
        show_repos(repos, f"Updated in the last {months:g} months")

    elif choice == "11":
        months = _ask_months(ask, "Not updated for how many months?: ")
        repos = sort_by_updated(filter_updated_before(gh.list_repos(), months), "asc")
        show_repos(repos, f"Not updated for {months:g} months")

    else:
        print_error(console, f"Unknown choice '{escape(choice)}'")


def run_menu(gh: GitHubCli, ask: Optional[Callable[[str], str]] = None) -> None:
    """Interactive loop: show the menu, read a choice, dispatch, repeat until 0."""
    ask = ask or (lambda question: console.input(question).strip())

    while True:
        _line()
        console.print("[bold]GitHub Helper (ghh)[/bold]")
        _line()
        for key, label in MENU_ITEMS:
            console.print(f"{key}. {label}")
        _line()

        try:
            choice = ask("Choose: ")
        except EOFError:
            return

        if choice == "0":
            return

        try:
            _menu_action(gh, choice, ask)
        except EOFError:
            return
        except (CommandFailed, ValueError) as e:
            print_error(console, escape(str(e)))


def menu():
    """Run the interactive menu."""
    try:
        run_menu(get_github_cli())
    except ConfigError as e:
        handle_cli_error(e, console)


def list_repos(
    visibility: Optional[str] = typer.Option(None, "--visibility", "-V", help="Only public or private repos"),
    since_months: Optional[float] = typer.Option(None, "--since-months", help="Updated within the last N months"),
    older_than_months: Optional[float] = typer.Option(None, "--older-than-months", help="Not updated for N months"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Sort by update time: asc|desc"),
):
    """List repositories."""
    try:
        repos: List[RepositoryDescriptor] = get_github_cli().list_repos()
        if visibility:
            repos = filter_by_visibility(repos, visibility)
        if since_months is not None:
            repos = filter_updated_within(repos, since_months)
        if older_than_months is not None:
            repos = filter_updated_before(repos, older_than_months)
        if sort:
            repos = sort_by_updated(repos, sort.lower())
    except (CommandFailed, ConfigError, ValueError) as e:
        handle_cli_error(e, console)

    show_repos(repos)


def add(
    name: Optional[str] = typer.Argument(None, help="Repository name (or owner/name)"),
    visibility: str = typer.Argument("private", help="public, private or internal"),
):
    """Create a repository."""
    if not name:
        usage_error(console, "Repo name required", USAGE)

    try:
        get_github_cli().create_repo(name, visibility)
    except (CommandFailed, ConfigError, ValueError) as e:
        handle_cli_error(e, console)

    print_success(console, "Repo created")


def delete(
    repo: Optional[str] = typer.Argument(None, help="Repository as owner/name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a repository."""
    if not repo:
        usage_error(console, "Repository required", USAGE)

    if not confirm_action(f"Delete {repo}? This cannot be undone", yes_flag=yes):
        print_info(console, "Cancelled")
        return

    try:
        get_github_cli().delete_repo(repo)
    except (CommandFailed, ConfigError) as e:
        handle_cli_error(e, console)

    print_success(console, "Repo deleted")


def secrets(repo: Optional[str] = typer.Argument(None, help="Repository (name or owner/name)")):
    """List a repository's secrets."""
    if not repo:
        usage_error(console, "Repository required", USAGE)

    try:
        found = get_github_cli().list_secrets(repo)
    except (CommandFailed, ConfigError, ValueError) as e:
        handle_cli_error(e, console)

    show_secrets(found, repo)


def secret_set(
    repo: Optional[str] = typer.Argument(None, help="Repository (name or owner/name)"),
    key: Optional[str] = typer.Argument(None, help="Secret name"),
    value: Optional[str] = typer.Option(None, "--value", help="Secret value (prompted when omitted)"),
):
    """Set a repository secret. The value is passed to gh on stdin."""
    if not repo or not key:
        usage_error(console, "Repository and secret key required", USAGE)

    if value is None:
        value = typer.prompt("Secret value", hide_input=True)

    try:
        get_github_cli().set_secret(repo, key, value)
    except (CommandFailed, ConfigError, ValueError) as e:
        handle_cli_error(e, console)

    print_success(console, "Secret saved")


def variables(repo: Optional[str] = typer.Argument(None, help="Repository (name or owner/name)")):
    """List a repository's variables."""
    if not repo:
        usage_error(console, "Repository required", USAGE)

    try:
        found = get_github_cli().list_variables(repo)
    except (CommandFailed, ConfigError, ValueError) as e:
        handle_cli_error(e, console)

    show_variables(found, repo)


def variable_set(
    repo: Optional[str] = typer.Argument(None, help="Repository (name or owner/name)"),
    key: Optional[str] = typer.Argument(None, help="Variable name"),
    value: Optional[str] = typer.Argument(None, help="Variable value"),
):
    """Set a repository variable."""
    if not repo or not key or value is None:
        usage_error(console, "Repository, variable key and value required", USAGE)

    try:
        get_github_cli().set_variable(repo, key, value)
    except (CommandFailed, ConfigError, ValueError) as e:
        handle_cli_error(e, console)

    print_success(console, "Variable saved")


def build_github_app(shared_console: Console) -> typer.Typer:
    """Create the gh helper command group.

    Running the group without a sub-command opens the interactive menu.
    """
    global console
    console = shared_console

    github_app = typer.Typer(
        help="GitHub helper: repositories, secrets and variables through gh",
        cls=UsageFallbackGroup,
        add_completion=False,
    )

    @github_app.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
    ):
        configure_logging(verbose, log_file)
        if ctx.invoked_subcommand is None:
            menu()

    github_app.command("menu")(menu)
    github_app.command("list")(list_repos)
    github_app.command("add")(add)
    github_app.command("delete")(delete)
    github_app.command("secrets")(secrets)
    github_app.command("secret-set")(secret_set)
    github_app.command("variables")(variables)
    github_app.command("variable-set")(variable_set)

    return github_app


def register_github_commands(app: typer.Typer, shared_console: Console) -> None:
    """Attach the gh helper group to the main CLI as ``gh``."""
    app.add_typer(build_github_app(shared_console), name="gh")
