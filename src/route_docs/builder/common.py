"""Primitives shared by the document builders: type mapping, naming, paths."""

import re

from route_docs.source.base import ApiApp, ModelDescriptor

SWAGGER_VERSION = "1.2"

PRIMITIVE_TYPES = {
    "object", "integer", "long", "float", "double", "string",
    "byte", "boolean", "date", "dateTime",
}

# Raw declared type tokens, matched case-insensitively.
DATA_TYPES = {
    "hash": "object",
    "object": "object",
    "rack::multipart::uploadedfile": "File",
    "uploadfile": "File",
    "file": "File",
    "virtus::attribute::boolean": "boolean",
    "boolean": "boolean",
    "bool": "boolean",
    "integer": "integer",
    "int": "integer",
    "string": "string",
    "str": "string",
    "symbol": "string",
    "date": "date",
    "datetime": "dateTime",
    "bigdecimal": "long",
    "long": "long",
    "float": "double",
    "double": "double",
    "numeric": "double",
    "byte": "byte",
}

# Default formatters and their MIME types, in registry order.
CONTENT_TYPES = {
    "xml": "application/xml",
    "serializable_hash": "application/json",
    "json": "application/json",
    "binary": "application/octet-stream",
    "txt": "text/plain",
}
DEFAULT_FORMATTERS = ("json", "serializable_hash", "txt", "xml")

_PLACEHOLDER = re.compile(r":([a-zA-Z_]\w*)")


def select_data_type(raw_type: str, models: dict[str, ModelDescriptor] | None = None) -> str:
    """Map a declared type token to a Swagger type, or to a model name."""
    data_type = DATA_TYPES.get(raw_type.lower())
    if data_type:
        return data_type
    model = (models or {}).get(raw_type)
    if model is not None:
        return entity_name(model)
    return stripped_model_name(raw_type)


def type_to_ref(type_name: str) -> dict[str, str]:
    if type_name in PRIMITIVE_TYPES:
        return {"type": type_name}
    return {"$ref": type_name}


def entity_name(model: ModelDescriptor) -> str:
    """Canonical name of a model: its declared entity name, else the stripped name."""
    return model.entity_name or stripped_model_name(model.name)


def stripped_model_name(name: str) -> str:
    """``API::Entities::Widget`` -> ``API::Widget``; ``WidgetEntity`` -> ``Widget``."""
    name = re.sub(r"Entit(?:y|ies)", "", name)
    name = name.replace("::::", "::").replace("..", ".")
    return re.sub(r"^(::|\.)", "", name)


def parse_path(path: str, version: str | None, hide_format: bool) -> str:
    """Render a route path template in Swagger form."""
    parsed = path.replace("(.:format)", "" if hide_format else ".{format}")
    parsed = _PLACEHOLDER.sub(r"{\1}", parsed)
    return parsed.replace("{version}", version) if version else parsed


def content_types_for(app: ApiApp, fmt: str | None = None) -> list[str]:
    """MIME types produced by the host app."""
    content_types = list(app.content_types.values())

    if not content_types:
        formats = _unique(f for f in (app.format, app.default_format, fmt) if f)
        if not formats:
            formats = list(DEFAULT_FORMATTERS)
        content_types = [mime for name, mime in CONTENT_TYPES.items() if name in formats]

    return _unique(content_types)


def pluralize(word: str) -> str:
    """English plural of the last segment of a path-like word."""
    head, sep, last = word.rpartition("/")
    lower = last.lower()
    if not last:
        plural = last
    elif lower.endswith(("ss", "sh", "ch", "x", "z", "us")):
        plural = last + "es"
    elif lower.endswith("s"):
        plural = last
    elif lower.endswith("y") and lower[-2:-1] not in ("a", "e", "i", "o", "u", ""):
        plural = last[:-1] + "ies"
    else:
        plural = last + "s"
    return head + sep + plural


def underscore(name: str) -> str:
    """``Twitter::API`` -> ``twitter/api``; ``WidgetApi`` -> ``widget_api``."""
    name = name.replace("::", "/").replace(".", "/")
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def _unique(items) -> list:
    return list(dict.fromkeys(items))
