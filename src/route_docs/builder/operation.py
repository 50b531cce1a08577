"""Operation and parameter extraction for a single route."""

import re
from typing import Any

from route_docs.source.base import DeclaredHeader, DeclaredParam, Deferred, RouteDescriptor
from .common import PRIMITIVE_TYPES, select_data_type, type_to_ref
from .context import DocContext

ARRAY_CONTAINER = "Array"
MUTATING_METHODS = ("POST", "PUT", "PATCH")
_NICKNAME_CHARS = re.compile(r"[/:().]")


def param_values(values: Deferred | None) -> list | None:
    """Materialize an enum declaration: a list, an inclusive range or a callback."""
    if values is None:
        return None
    raw = values.resolve()
    if raw is None:
        return None
    if isinstance(raw, (range, tuple, set, frozenset)):
        return list(raw)
    return raw


def _is_nested(parent: str, name: str) -> bool:
    return re.match(rf"^{re.escape(parent)}\[.+\]$", name) is not None


class RouteDoc:
    """Builds the Swagger operation for one route."""

    def __init__(self, context: DocContext, route: RouteDescriptor):
        self.context = context
        self.route = route

    @property
    def method(self) -> str:
        return self.route.method

    @property
    def path(self) -> str:
        return self.route.path

    def parameters(self) -> list[dict]:
        return self.header_params() + self.parse_params()

    def header_params(self) -> list[dict]:
        result = []
        for name, header in self.route.headers.items():
            parsed = {
                "paramType": "header",
                "name": name,
                "description": self.get_description(header, name),
                "type": "string",
                "required": header.required,
            }
            if header.default is not None:
                parsed["defaultValue"] = header.default
            result.append(parsed)
        return result

    def select_param_type(self, data_type: str, name: str) -> str:
        if f":{name}" in self.path:
            return "path"
        if self.method in MUTATING_METHODS:
            return "form" if data_type in PRIMITIVE_TYPES else "body"
        return "query"

    def get_description(self, spec: DeclaredParam | DeclaredHeader, name: str) -> str:
        text = spec.description.resolve() if spec.description is not None else None
        if text is None:
            text = self.translate(spec.i18n_key or name) or name
        return self.context.as_markdown(text)

    def translate(self, key: str) -> Any:
        if not self.route.app:
            return None
        return self.context.translate(self.route.app, key)

    def parse_array_params(self) -> dict[str, DeclaredParam]:
        """Rename the bracketed children of an Array param to ``<name>[]<rest>``."""
        result: dict[str, DeclaredParam] = {}
        array_param = None
        for name, spec in self.route.params.items():
            if spec.type == ARRAY_CONTAINER:
                array_param = name
            elif array_param is not None and name.startswith(array_param + "["):
                name = array_param + "[]" + name[len(array_param):]
            result[name] = spec
        return result

    def non_nested_params(self) -> dict[str, DeclaredParam]:
        """Drop container params that Swagger 1.2 cannot describe.

        A container whose children include a required one becomes optional.
        Array containers are kept and their children dropped; other containers
        are dropped and their children kept, optional when the container is.
        """
        params = self.parse_array_params()
        children = {name: [p for p in params if _is_nested(name, p)] for name in params}
        dropped = {
            child
            for name, spec in params.items()
            if spec.type == ARRAY_CONTAINER
            for child in children[name]
        }

        kept: dict[str, DeclaredParam] = {}
        relaxed: set[str] = set()
        for name, spec in params.items():
            if name in dropped:
                continue
            kids = children[name]
            if not kids:
                kept[name] = spec
                continue
            if spec.type == ARRAY_CONTAINER:
                if any(params[k].required for k in kids):
                    spec = spec.model_copy(update={"required": False})
                kept[name] = spec
            elif not spec.required:
                relaxed.update(kids)

        return {
            name: spec.model_copy(update={"required": False}) if name in relaxed else spec
            for name, spec in kept.items()
        }

    def parse_params(self) -> list[dict]:
        params = self.non_nested_params()
        all_names = list(self.route.params)
        return [self._parse_param(name, spec, all_names) for name, spec in params.items()]

    def _parse_param(self, name: str, spec: DeclaredParam, all_names: list[str]) -> dict:
        if spec.type == ARRAY_CONTAINER:
            is_array = True
            data_type = "object" if any(_is_nested(name, n) for n in all_names) else "string"
        else:
            is_array = spec.is_array
            data_type = select_data_type(spec.type, self.context.models)

        parsed: dict[str, Any] = {
            "paramType": spec.param_type or self.select_param_type(data_type, name),
            "name": spec.full_name or name,
            "description": self.get_description(spec, name),
            "type": "array" if is_array else data_type,
            "required": spec.required,
            "allowMultiple": is_array,
        }
        if data_type == "integer":
            parsed["format"] = "int32"
        elif data_type == "long":
            parsed["format"] = "int64"
        if is_array:
            parsed["items"] = type_to_ref(data_type)
        if spec.default is not None:
            parsed["defaultValue"] = spec.default

        enum_values = param_values(spec.values)
        if enum_values is not None:
            parsed["enum"] = enum_values
        return parsed

    def response_messages(self) -> list[dict]:
        messages = []
        for http_code in self.route.http_codes:
            message: dict[str, Any] = {"code": http_code.code, "message": http_code.message}
            if http_code.model:
                message["responseModel"] = self.context.model_name(http_code.model)
            messages.append(message)
        return messages

    def response_models(self) -> list[str]:
        """Model references this route contributes to the resource's model set."""
        refs = list(self.route.entity)
        refs.extend(c.model for c in self.route.http_codes if c.model)
        return refs

    def nickname(self) -> str:
        return self.route.nickname or self.method + _NICKNAME_CHARS.sub("-", self.path)

    def operation(self) -> dict:
        route = self.route
        parameters = self.parameters()

        operation: dict[str, Any] = {
            "notes": self.context.as_markdown(route.notes) or "",
            "summary": route.description or "",
            "nickname": self.nickname(),
            "method": self.method,
            "parameters": parameters,
            "type": "void",
        }
        if route.authorizations:
            operation["authorizations"] = route.authorizations
        if any(p["type"] == "File" for p in parameters):
            operation["consumes"] = ["multipart/form-data"]

        messages = self.response_messages()
        if messages:
            operation["responseMessages"] = messages
        if route.entity:
            operation["type"] = self.context.model_name(route.entity[0])
        return operation
