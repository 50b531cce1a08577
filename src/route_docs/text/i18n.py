"""Translation lookup over nested, dotted-key message catalogs."""

from pathlib import Path
from typing import Any

import yaml

from route_docs.errors import SourceError


class Translator:
    """Looks up ``a.b.c`` keys in a nested mapping of messages."""

    def __init__(self, messages: dict | None = None):
        self.messages = messages or {}

    def translate(self, key: str, default: Any = None) -> Any:
        node: Any = self.messages
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node if node not in (None, "") else default


def load_translations(file_path: Path, locale: str = "en") -> Translator:
    """Load a YAML catalog, unwrapping a top-level ``<locale>:`` key if present."""
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise SourceError(f"{file_path}: invalid translations: {e}") from e
    if not isinstance(data, dict):
        raise SourceError(f"{file_path}: expected a mapping of messages")
    if locale in data and isinstance(data[locale], dict):
        data = data[locale]
    return Translator(data)
