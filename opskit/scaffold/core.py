"""Core scaffolding functionality for compose projects."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml

from opskit.core.logger import get_logger
from opskit.scaffold.templates import AppCatalog, AppKind, TemplateEngine

logger = get_logger(__name__)


class DirectoryExists(Exception):
    """Raised when the scaffold target directory is already present."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Folder already exists: {path}")


@dataclass
class ScaffoldRequest:
    """Validated input for one scaffold run."""

    kind: AppKind
    name: str
    port: str

    @classmethod
    def build(cls, kind: str, name: Optional[str], port: Optional[str]) -> "ScaffoldRequest":
        """Check and normalize raw arguments.

        Raises:
            ValueError: If the kind is unknown or name/port are empty or unsafe
        """
        app = AppCatalog.get(kind)
        if app is None:
            known = ", ".join(a.key for a in AppCatalog.list_apps())
            raise ValueError(f"Unknown app kind '{kind}'. Known kinds: {known}")

        name = (name or "").strip()
        port = str(port or "").strip()
        if not name or not port:
            raise ValueError("Both name and port are required")

        # name becomes a single path segment
        if name in {".", ".."} or "/" in name or "\\" in name:
            raise ValueError(f"Invalid app name '{name}'")

        return cls(kind=app, name=name, port=port)


class ScaffoldManager:
    """Creates compose project directories under the docker app root."""

    def __init__(self, root: Optional[Path] = None, engine: Optional[TemplateEngine] = None):
        self.root = root or Path.home() / "dockerApp"
        self.engine = engine or TemplateEngine()

    def target_dir(self, request: ScaffoldRequest) -> Path:
        """Deterministic location: <root>/<kind>/<name>."""
        return self.root / request.kind.key / request.name

    def render(self, request: ScaffoldRequest) -> List[tuple]:
        """Render every file for the request as (file name, content) pairs.

        Rendered compose files are parsed before anything is written.
        """
        context = request.kind.context(request.name, request.port)
        rendered = []
        for output_name, template_name in request.kind.files.items():
            content = self.engine.render_template(
                f"{request.kind.key}/{template_name}", context
            )
            if output_name.endswith((".yaml", ".yml")):
                self._check_compose(output_name, content)
            rendered.append((output_name, content))
        return rendered

    def scaffold(self, request: ScaffoldRequest) -> Path:
        """Create the project directory and write its files.

        Returns:
            Path to the created directory

        Raises:
            DirectoryExists: If the target directory already exists (nothing is written)
        """
        base_dir = self.target_dir(request)
        if base_dir.exists():
            raise DirectoryExists(base_dir)

        files = self.render(request)

        base_dir.mkdir(parents=True)
        for output_name, content in files:
            (base_dir / output_name).write_text(content, encoding="utf-8")
            logger.debug(f"Wrote {base_dir / output_name}")

        logger.info(f"Created {request.kind.title} project {request.name} at {base_dir}")
        return base_dir

    @staticmethod
    def _check_compose(output_name: str, content: str) -> None:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Rendered {output_name} is not valid YAML: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("services"), dict):
            raise ValueError(f"Rendered {output_name} has no services section")
