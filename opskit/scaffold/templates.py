"""App catalog and template engine for compose scaffolding."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass
class AppKind:
    """A third-party image we know how to scaffold a compose project for."""

    key: str
    title: str
    image: str
    container_port: int
    # output file name -> template file name, written in this order
    files: Dict[str, str] = field(default_factory=dict)
    description: str = ""

    def context(self, name: str, port: str) -> Dict[str, Any]:
        """Values substituted into this kind's templates."""
        return {
            "name": name,
            "port": port,
            "image": self.image,
            "container_port": self.container_port,
            "volume": name,
            "network": f"{name}_net",
        }


class AppCatalog:
    """Static catalog of scaffoldable app kinds."""

    APPS: List[AppKind] = [
        AppKind(
            key="gowaApp",
            title="GOWA",
            image="aldinokemal2104/go-whatsapp-web-multidevice",
            container_port=3000,
            files={"compose.yaml": "compose.yaml.j2"},
            description="WhatsApp REST gateway (go-whatsapp-web-multidevice)",
        ),
        AppKind(
            key="n8nApp",
            title="n8n",
            image="n8nio/n8n:latest",
            container_port=5678,
            files={".env": "env.j2", "compose.yaml": "compose.yaml.j2"},
            description="Workflow automation",
        ),
    ]

    @classmethod
    def list_apps(cls) -> List[AppKind]:
        return cls.APPS

    @classmethod
    def get(cls, key: str) -> Optional[AppKind]:
        """Look up an app kind by key or title, ignoring case."""
        wanted = key.lower()
        for app in cls.APPS:
            if wanted in (app.key.lower(), app.title.lower()):
                return app
        return None


class TemplateEngine:
    """Renders ``{{key}}`` placeholders in template files."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir or TEMPLATE_DIR

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with given context.

        Raises:
            FileNotFoundError: If the template does not exist
        """
        template_path = self.template_dir / template_name
        if not template_path.exists():
            raise FileNotFoundError(f"Template not found: {template_path}")

        content = template_path.read_text(encoding="utf-8")
        for key, value in context.items():
            content = content.replace(f"{{{{{key}}}}}", str(value))
        return content
