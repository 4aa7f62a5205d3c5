"""opskit runtime configuration and settings."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

CLOUDFLARE_API = "https://api.cloudflare.com/client/v4"


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


@dataclass
class CloudflareConfig:
    """Credentials and endpoint for the Cloudflare DNS API.

    Attributes:
        api_token: Bearer token with DNS edit permission
        zone_id: Zone whose records are managed
        base_url: API base URL (default: Cloudflare v4 endpoint)
        timeout: Request timeout in seconds (default: None, wait indefinitely)
    """

    api_token: str
    zone_id: str
    base_url: str = CLOUDFLARE_API
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CloudflareConfig":
        """Create config from environment variables.

        Environment variables:
            CF_API_TOKEN: API token (required)
            CF_ZONE_ID: Zone identifier (required)
            CF_API_BASE: Override for the API base URL
            CF_TIMEOUT: Request timeout in seconds

        Raises:
            ConfigError: If the token or zone id is absent
        """
        env = os.environ if environ is None else environ
        token = env.get("CF_API_TOKEN")
        zone_id = env.get("CF_ZONE_ID")

        if not token or not zone_id:
            raise ConfigError("CF_API_TOKEN or CF_ZONE_ID is not set")

        timeout = env.get("CF_TIMEOUT")
        try:
            timeout_value = float(timeout) if timeout else None
        except ValueError as e:
            raise ConfigError(f"CF_TIMEOUT must be a number, got {timeout!r}") from e

        return cls(
            api_token=token,
            zone_id=zone_id,
            base_url=env.get("CF_API_BASE", CLOUDFLARE_API).rstrip("/"),
            timeout=timeout_value,
        )


@dataclass
class GitHubConfig:
    """Settings for the gh wrapper."""

    executable: str = "gh"
    repo_limit: int = 1000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GitHubConfig":
        env = os.environ if environ is None else environ
        limit = env.get("OPSKIT_REPO_LIMIT", cls.repo_limit)
        try:
            repo_limit = int(limit)
        except ValueError as e:
            raise ConfigError(f"OPSKIT_REPO_LIMIT must be an integer, got {limit!r}") from e

        return cls(
            executable=env.get("OPSKIT_GH_BIN", cls.executable),
            repo_limit=repo_limit,
        )


@dataclass
class ScaffoldConfig:
    """Where scaffolded compose projects are written."""

    root: Path

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScaffoldConfig":
        env = os.environ if environ is None else environ
        if root := env.get("OPSKIT_DOCKER_ROOT"):
            return cls(root=Path(root).expanduser())
        return cls(root=Path.home() / "dockerApp")
