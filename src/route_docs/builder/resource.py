"""Per-resource API declaration: operations grouped by path plus their models."""

from typing import Any
from urllib.parse import urljoin, urlparse

from pydantic import BaseModel

from route_docs.errors import ResourceNotFound
from route_docs.source.base import RouteDescriptor
from .common import SWAGGER_VERSION, content_types_for
from .context import DocContext
from .models import models_with_included_presenters, parse_entity_models
from .operation import RouteDoc


class DocRequest(BaseModel):
    """The parts of an incoming HTTP request the documents depend on."""

    base_url: str = ""


class EndpointDoc:
    """Builds the document for one resource."""

    def __init__(self, context: DocContext, routes_name: str):
        self.context = context
        self.routes_name = routes_name

    @property
    def config(self):
        return self.context.config

    def routes(self) -> tuple[RouteDescriptor, ...]:
        return self.context.index.routes_for(self.routes_name)

    def visible_operations(self) -> list[RouteDescriptor]:
        return [route for route in self.routes() if not route.is_hidden()]

    def grouped_operations(self) -> dict[str, list[RouteDescriptor]]:
        grouped: dict[str, list[RouteDescriptor]] = {}
        for route in self.visible_operations():
            path = self.context.parse_path(route.path, self.config.api_version)
            grouped.setdefault(path, []).append(route)
        return grouped

    def resource_path(self) -> str:
        return "/" + self.context.index.original_name(self.routes_name)

    def description(self, request: DocRequest) -> dict[str, Any]:
        grouped = self.grouped_operations()
        if not grouped:
            raise ResourceNotFound(self.routes_name)

        model_refs = list(self.config.models)
        apis = []
        for path, routes in grouped.items():
            operations = []
            for route in routes:
                route_doc = RouteDoc(self.context, route)
                model_refs.extend(route_doc.response_models())
                operations.append(route_doc.operation())
            apis.append({"path": path, "operations": operations})

        models = models_with_included_presenters(self.context, model_refs)

        api_description: dict[str, Any] = {
            "apiVersion": self.config.api_version,
            "swaggerVersion": SWAGGER_VERSION,
            "resourcePath": self.resource_path(),
            "produces": content_types_for(self.context.source.root_app, self.config.format),
            "apis": apis,
        }

        base_path = self.parse_base_path(request)
        if base_path and self.config.root_base_path:
            api_description["basePath"] = base_path
        if models:
            api_description["models"] = parse_entity_models(self.context, models)
        if self.config.authorizations:
            api_description["authorizations"] = self.config.authorizations
        return api_description

    def parse_base_path(self, request: DocRequest) -> str | None:
        base_path = self.config.base_path
        if base_path is None:
            return request.base_url
        if base_path.is_callback:
            return base_path.resolve(request)
        value = str(base_path.value)
        if not urlparse(value).scheme:
            return urljoin(request.base_url, value)
        return value
