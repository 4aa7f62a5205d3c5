"""Compose project scaffolding for pre-selected third-party images."""

from .core import DirectoryExists, ScaffoldManager, ScaffoldRequest
from .templates import AppCatalog, AppKind, TemplateEngine

__all__ = [
    "AppCatalog",
    "AppKind",
    "DirectoryExists",
    "ScaffoldManager",
    "ScaffoldRequest",
    "TemplateEngine",
]
