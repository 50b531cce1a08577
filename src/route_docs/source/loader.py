"""Route source loader.

Reads a YAML or JSON description of the host API (apps, mounts, namespaces,
routes and entity models) and normalizes it into the typed models in
``route_docs.source.base``. All "is it a mapping, a literal or a shorthand"
handling lives here.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from route_docs.errors import SourceError
from .base import (
    ApiApp,
    DeclaredHeader,
    DeclaredParam,
    HttpCode,
    ModelDescriptor,
    NamespaceDescriptor,
    PropertySpec,
    RouteDescriptor,
    RouteSource,
)

PROPERTY_KEYS = {"type", "using", "is_array", "required", "desc", "values", "documented"}


def load_source(file_path: Path) -> RouteSource:
    """Load a route source document from a YAML or JSON file."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SourceError(f"{file_path}: invalid YAML/JSON: {e}") from e
    if not isinstance(data, dict):
        raise SourceError(f"{file_path}: expected a mapping at the top level")
    return parse_source(data)


def parse_source(data: dict) -> RouteSource:
    """Normalize a raw source mapping into a RouteSource."""
    apps_data = _mapping(data.get("apps"), "apps")
    if not apps_data:
        raise SourceError("source declares no apps")

    root = data.get("root") or next(iter(apps_data))
    if root not in apps_data:
        raise SourceError(f"root app {root!r} is not declared")

    try:
        apps = {name: _parse_app(name, _mapping(raw, f"app {name!r}")) for name, raw in apps_data.items()}
        models = {
            name: _parse_model(name, _mapping(raw, f"model {name!r}"))
            for name, raw in _mapping(data.get("models"), "models").items()
        }
        return RouteSource(root=root, apps=apps, models=models)
    except (ValidationError, TypeError, ValueError) as e:
        raise SourceError(f"invalid route source: {e}") from e


def _mapping(raw: Any, what: str) -> dict:
    """``None`` stands for an empty mapping; any other non-mapping is rejected."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SourceError(f"{what}: expected a mapping, got {type(raw).__name__}")
    return raw


def _parse_app(name: str, raw: dict) -> ApiApp:
    prefix = raw.get("prefix")
    routes = [_parse_route(r, name, prefix) for r in raw.get("routes", [])]

    return ApiApp(
        name=name,
        prefix=prefix,
        format=raw.get("format"),
        default_format=raw.get("default_format"),
        content_types=raw.get("content_types") or {},
        namespaces=_parse_namespaces(raw.get("namespaces") or {}),
        routes=routes,
        mounts=list(raw.get("mounts", [])),
    )


def _parse_namespaces(raw: dict | list) -> list[NamespaceDescriptor]:
    """Namespaces may be a mapping of path -> options or a list of option mappings."""
    if isinstance(raw, dict):
        items = [(path, _mapping(opts, f"namespace {path!r}")) for path, opts in raw.items()]
    else:
        items = []
        for opts in raw:
            opts = _mapping(opts, "namespace")
            if "path" not in opts:
                raise SourceError("namespace declared without a path")
            items.append((opts["path"], opts))

    result = []
    for path, opts in items:
        swagger = _mapping(opts.get("swagger"), f"namespace {path!r} swagger options")
        result.append(
            NamespaceDescriptor(
                path=str(path).lstrip("/"),
                description=opts.get("desc", opts.get("description")),
                nested=swagger.get("nested", opts.get("nested", True)),
                name=swagger.get("name", opts.get("name")),
            )
        )
    return result


def _parse_route(raw: Any, app_name: str, prefix: str | None) -> RouteDescriptor:
    raw = _mapping(raw, f"route in app {app_name!r}")
    if not raw.get("path"):
        raise SourceError(f"route in app {app_name!r} declared without a path")

    entity = raw.get("entity") or []
    if isinstance(entity, str):
        entity = [entity]

    return RouteDescriptor(
        method=str(raw.get("method", "GET")).upper(),
        path=raw["path"],
        namespace=raw.get("namespace"),
        prefix=raw.get("prefix", prefix),
        params={str(k): _parse_param(v) for k, v in _mapping(raw.get("params"), "params").items()},
        headers={str(k): _parse_header(v) for k, v in _mapping(raw.get("headers"), "headers").items()},
        http_codes=_parse_http_codes(raw.get("http_codes")),
        entity=entity,
        hidden=raw.get("hidden"),
        nickname=raw.get("nickname"),
        notes=raw.get("notes"),
        description=raw.get("description", raw.get("desc")),
        authorizations=raw.get("authorizations"),
        app=raw.get("app", app_name),
    )


def _parse_param(raw: Any) -> DeclaredParam:
    if raw is None:
        return DeclaredParam()
    if isinstance(raw, str):
        return DeclaredParam(type=raw)
    raw = _mapping(raw, "param")

    return DeclaredParam(
        type=raw.get("type", "String"),
        required=bool(raw.get("required", False)),
        default=raw.get("default"),
        description=raw.get("desc", raw.get("description")),
        i18n_key=raw.get("i18n_key"),
        values=_parse_values(raw.get("values")),
        is_array=bool(raw.get("is_array", False)),
        param_type=raw.get("param_type"),
        full_name=raw.get("full_name"),
    )


def _parse_header(raw: Any) -> DeclaredHeader:
    if not isinstance(raw, dict):
        return DeclaredHeader()
    return DeclaredHeader(
        description=raw.get("desc", raw.get("description")),
        i18n_key=raw.get("i18n_key"),
        required=bool(raw.get("required", False)),
        default=raw.get("default"),
    )


def _parse_values(raw: Any) -> Any:
    """``{range: [lo, hi]}`` becomes an inclusive range; anything else is kept."""
    if isinstance(raw, dict) and "range" in raw:
        bounds = raw["range"]
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2 or not all(isinstance(b, int) for b in bounds):
            raise SourceError(f"range expects [low, high] integers, got {bounds!r}")
        lo, hi = bounds
        return range(lo, hi + 1)
    return raw


def _parse_http_codes(raw: Any) -> list[HttpCode]:
    if not raw:
        return []
    if isinstance(raw, dict):
        return [HttpCode(code=int(k), message=v or "") for k, v in raw.items()]

    codes = []
    for item in raw:
        if isinstance(item, dict):
            codes.append(HttpCode(**item))
        elif isinstance(item, (list, tuple)) and 2 <= len(item) <= 3:
            code, message, *rest = item
            codes.append(HttpCode(code=int(code), message=message or "", model=rest[0] if rest else None))
        else:
            raise SourceError(f"http code expects [code, message] or [code, message, model], got {item!r}")
    return codes


def _parse_model(name: str, raw: dict) -> ModelDescriptor:
    properties = {}
    for prop_name, spec in _mapping(raw.get("properties"), f"model {name!r} properties").items():
        properties[str(prop_name)] = _parse_property(spec)

    return ModelDescriptor(
        name=name,
        entity_name=raw.get("entity_name"),
        root=raw.get("root"),
        properties=properties,
    )


def _parse_property(raw: Any) -> PropertySpec:
    if raw is None:
        return PropertySpec()
    if isinstance(raw, str):
        return PropertySpec(type=raw)
    raw = _mapping(raw, "property")

    extra = {k: v for k, v in raw.items() if k not in PROPERTY_KEYS}
    return PropertySpec(
        type=raw.get("type"),
        using=raw.get("using"),
        is_array=bool(raw.get("is_array", False)),
        required=bool(raw.get("required", False)),
        desc=raw.get("desc"),
        values=_parse_values(raw.get("values")),
        documented=bool(raw.get("documented", True)),
        extra=extra,
    )
