"""Top-level resource listing."""

from typing import Any

from route_docs.source.base import RouteDescriptor
from .common import SWAGGER_VERSION, content_types_for, pluralize
from .context import DocContext


def all_hidden(routes: tuple[RouteDescriptor, ...]) -> bool:
    """True when every route is hidden. Every flag and predicate is evaluated."""
    flags = [route.is_hidden() for route in routes]
    return all(flags)


class ApiDoc:
    """Builds the resource listing document."""

    def __init__(self, context: DocContext):
        self.context = context

    @property
    def config(self):
        return self.context.config

    def description(self) -> dict[str, Any]:
        output: dict[str, Any] = {
            "apiVersion": self.config.api_version,
            "swaggerVersion": SWAGGER_VERSION,
            "produces": self.produces(),
            "apis": self.apis(),
            "info": self.parse_info(self.config.info),
        }
        if self.config.authorizations:
            output["authorizations"] = self.config.authorizations
        return output

    def produces(self) -> list[str]:
        return content_types_for(self.context.source.root_app, self.config.format)

    def apis(self) -> list[dict[str, str]]:
        index = self.context.index
        url_format = "" if self.config.hide_format else ".{format}"
        doc_prefix = self.context.parse_path(self.config.mount_path) + "/"

        result = []
        for key, routes in index.groups.items():
            if self.config.hide_documentation_path and f"/{key}/".startswith(doc_prefix):
                continue
            if all_hidden(routes):
                continue
            result.append({"path": f"/{key}{url_format}", "description": self.resource_description(key)})
        return result

    def resource_description(self, key: str) -> str:
        namespace = self.context.index.namespace_for(key)
        description = None
        if namespace is not None and namespace.description is not None:
            description = namespace.description.resolve()
        return description or f"Operations about {pluralize(self.context.index.original_name(key))}"

    def parse_info(self, info: dict[str, Any]) -> dict[str, Any]:
        translations = self.context.translate(self.context.source.root, "") or {}
        if not isinstance(translations, dict):
            translations = {}

        parsed = {
            "contact": info.get("contact"),
            "description": self.context.as_markdown(translations.get("description") or info.get("description")),
            "license": info.get("license"),
            "licenseUrl": info.get("license_url"),
            "termsOfServiceUrl": info.get("terms_of_service_url"),
            "title": translations.get("title") or info.get("title"),
        }
        return {k: v for k, v in parsed.items() if v}
