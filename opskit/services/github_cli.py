"""Repository, secret and variable management through the gh CLI."""
import json
from typing import Any, List, Optional

from opskit.core.config import GitHubConfig
from opskit.core.logger import get_logger
from opskit.core.runner import CommandRunner, SubprocessRunner
from opskit.models import RepositoryDescriptor, Secret, Variable

logger = get_logger(__name__)

REPO_FIELDS = "name,visibility,url,updatedAt,createdAt,pushedAt"
VISIBILITIES = ("public", "private", "internal")


class GitHubCli:
    """Thin projection of repository chores onto `gh` invocations."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        config: Optional[GitHubConfig] = None,
    ):
        self.runner = runner or SubprocessRunner()
        self.config = config or GitHubConfig()

    def _gh(self, *args: str, input: Optional[str] = None) -> str:
        return self.runner.run([self.config.executable, *args], input=input)

    def _gh_json(self, *args: str) -> Any:
        out = self._gh(*args)
        return json.loads(out) if out else []

    def resolve_repo(self, value: str) -> str:
        """Turn a bare repository name into ``owner/name``.

        Values that already contain a slash are returned unchanged; otherwise
        gh is asked which owner the authenticated user resolves it to.
        """
        if "/" in value:
            return value

        data = self._gh_json("repo", "view", value, "--json", "owner,name")
        resolved = f"{data['owner']['login']}/{data['name']}"
        logger.debug(f"Resolved {value} to {resolved}")
        return resolved

    def list_repos(self) -> List[RepositoryDescriptor]:
        """List repositories of the authenticated user, up to the configured limit."""
        rows = self._gh_json(
            "repo", "list",
            "--limit", str(self.config.repo_limit),
            "--json", REPO_FIELDS,
        )
        return [RepositoryDescriptor.model_validate(row) for row in rows]

    def create_repo(self, name: str, visibility: str = "private") -> str:
        """Create a repository and return gh's output (normally its URL)."""
        visibility = (visibility or "private").lower()
        if visibility not in VISIBILITIES:
            raise ValueError(
                f"Visibility must be one of {', '.join(VISIBILITIES)}, got '{visibility}'"
            )

        logger.info(f"Creating {visibility} repository {name}")
        return self._gh("repo", "create", name, f"--{visibility}", "--confirm")

    def delete_repo(self, repo: str) -> str:
        logger.info(f"Deleting repository {repo}")
        return self._gh("repo", "delete", repo, "--yes")

    def list_secrets(self, repo: str) -> List[Secret]:
        target = self.resolve_repo(repo)
        rows = self._gh_json("secret", "list", "--repo", target, "--json", "name,updatedAt")
        return [Secret.model_validate(row) for row in rows]

    def set_secret(self, repo: str, key: str, value: str) -> str:
        """Store a repository secret.

        The value goes to gh on stdin so it never shows up in the process list.
        """
        target = self.resolve_repo(repo)
        logger.info(f"Setting secret {key} on {target}")
        return self._gh("secret", "set", key, "--repo", target, input=value)

    def list_variables(self, repo: str) -> List[Variable]:
        target = self.resolve_repo(repo)
        rows = self._gh_json(
            "variable", "list", "--repo", target, "--json", "name,value,updatedAt"
        )
        return [Variable.model_validate(row) for row in rows]

    def set_variable(self, repo: str, key: str, value: str) -> str:
        target = self.resolve_repo(repo)
        logger.info(f"Setting variable {key} on {target}")
        return self._gh("variable", "set", key, "--repo", target, "--body", value)
