"""Documentation service: aggregates once, then renders documents on demand."""

import logging
from typing import Any

from pydantic import BaseModel

from route_docs.aggregator import build_index
from route_docs.builder.context import DocContext
from route_docs.builder.listing import ApiDoc, all_hidden
from route_docs.builder.resource import DocRequest, EndpointDoc
from route_docs.config import DocumentationConfig
from route_docs.errors import ResourceNotFound
from route_docs.source.base import RouteSource
from route_docs.source.namespaces import combined_namespaces, combined_routes
from route_docs.text.i18n import Translator
from route_docs.text.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Request-Method": "*",
}


class DocResponse(BaseModel):
    status: int = 200
    headers: dict[str, str] = {}
    body: dict[str, Any]


class DocumentationService:
    """Serves the resource listing and per-resource documents for one route source."""

    def __init__(
        self,
        source: RouteSource,
        config: DocumentationConfig | None = None,
        translator: Translator | None = None,
    ):
        config = config or DocumentationConfig()
        exclude_path = config.mount_path if config.hide_documentation_path else None
        index = build_index(combined_routes(source), combined_namespaces(source), exclude_path)
        logger.debug("Aggregated %d resources from %d apps", len(index.groups), len(source.apps))

        renderer = None
        if config.markdown:
            extensions = config.markdown if isinstance(config.markdown, list) else None
            renderer = MarkdownRenderer(extensions)

        self.context = DocContext(
            source=source,
            config=config,
            index=index,
            translator=translator or Translator(),
            renderer=renderer,
        )

    @property
    def listing_path(self) -> str:
        return self.context.config.mount_path

    @property
    def resource_path_template(self) -> str:
        return f"{self.context.config.mount_path}/:name"

    def resource_names(self) -> list[str]:
        """Keys of all resources that have at least one visible route."""
        return [key for key, routes in self.context.index.groups.items() if not all_hidden(routes)]

    def listing(self) -> dict[str, Any]:
        return ApiDoc(self.context).description()

    def resource(self, name: str, request: DocRequest | None = None) -> dict[str, Any]:
        """Document for resource ``name``; raises ResourceNotFound when there is none."""
        return EndpointDoc(self.context, name).description(request or DocRequest())

    def listing_response(self) -> DocResponse:
        return DocResponse(headers=dict(CORS_HEADERS), body=self.listing())

    def resource_response(self, name: str, request: DocRequest | None = None) -> DocResponse:
        try:
            body = self.resource(name, request)
        except ResourceNotFound as e:
            return DocResponse(status=e.status, headers=dict(CORS_HEADERS), body={"error": str(e)})
        return DocResponse(headers=dict(CORS_HEADERS), body=body)
