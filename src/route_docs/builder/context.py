"""Shared, read-only state handed to every document builder."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from route_docs.aggregator import ResourceIndex
from route_docs.config import DocumentationConfig
from route_docs.errors import UnknownModelError
from route_docs.source.base import ModelDescriptor, RouteSource
from route_docs.text.i18n import Translator
from route_docs.text.markdown import MarkdownRenderer, as_markdown
from .common import entity_name, parse_path, underscore


class DocContext(BaseModel):
    """Everything a rendering call reads: source, settings, index and text helpers.

    Built once when the documentation service starts and never mutated.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source: RouteSource
    config: DocumentationConfig
    index: ResourceIndex
    translator: Translator = Translator()
    renderer: MarkdownRenderer | None = None

    @property
    def models(self) -> dict[str, ModelDescriptor]:
        return self.source.models

    def model(self, ref: str) -> ModelDescriptor:
        try:
            return self.source.models[ref]
        except KeyError:
            raise UnknownModelError(ref) from None

    def model_name(self, ref: str) -> str:
        return entity_name(self.model(ref))

    def as_markdown(self, text: str | None) -> str | None:
        return as_markdown(text, self.renderer)

    def translate(self, scope: str, key: str) -> Any:
        """Look up ``key`` under the dotted, underscored form of ``scope``."""
        prefix = underscore(scope).replace("/", ".")
        return self.translator.translate(f"{prefix}.{key}" if key else prefix)

    def parse_path(self, path: str, version: str | None = None) -> str:
        return parse_path(path, version, self.config.hide_format)
