"""Documentation settings.

Defaults mirror a documentation service mounted at ``/swagger_doc``. Settings
can be built in code or loaded from a YAML file with ``load_config``.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from route_docs.errors import SourceError
from route_docs.source.base import DeferredField


class DocumentationConfig(BaseModel):
    """Options recognized when the documentation service is set up."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mount_path: str = "/swagger_doc"
    base_path: DeferredField = None  # literal, callback(request) or request base URL
    api_version: str | None = "0.1"
    markdown: bool | list[str] = False  # True or a list of Python-Markdown extensions
    hide_documentation_path: bool = False
    hide_format: bool = False
    format: str | None = None
    models: list[str] = []
    info: dict[str, Any] = {}
    authorizations: dict[str, Any] | None = None
    root_base_path: bool = True


def load_config(file_path: Path | None) -> DocumentationConfig:
    """Load settings from YAML; a missing path yields the defaults."""
    if file_path is None:
        return DocumentationConfig()
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        return DocumentationConfig(**data)
    except (yaml.YAMLError, ValidationError, TypeError) as e:
        raise SourceError(f"{file_path}: invalid configuration: {e}") from e
