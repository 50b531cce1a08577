"""Typed models for the route source.

The loader normalizes loosely-typed route, namespace and model declarations
into these models. Everything downstream reads only these types.
"""

from collections.abc import Callable
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class Deferred(BaseModel):
    """A literal value or a callback producing it when the document is rendered."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = None
    callback: Callable[..., Any] | None = None

    @classmethod
    def of(cls, raw: Any) -> "Deferred | None":
        if raw is None:
            return None
        if isinstance(raw, Deferred):
            return raw
        if callable(raw):
            return cls(callback=raw)
        return cls(value=raw)

    @property
    def is_callback(self) -> bool:
        return self.callback is not None

    def resolve(self, *args: Any) -> Any:
        if self.callback is not None:
            return self.callback(*args)
        return self.value


# Accepts a literal, a callback or an existing Deferred.
DeferredField = Annotated[Deferred | None, BeforeValidator(Deferred.of)]


def resolve(deferred: Deferred | None, *args: Any) -> Any:
    """Resolve an optional Deferred, returning None when it is absent."""
    return deferred.resolve(*args) if deferred is not None else None


class DeclaredParam(BaseModel):
    """A parameter as declared on a route."""

    model_config = ConfigDict(frozen=True)

    type: str = "String"
    required: bool = False
    default: Any = None
    description: DeferredField = None
    i18n_key: str | None = None
    values: DeferredField = None
    is_array: bool = False
    param_type: str | None = None  # explicit location override
    full_name: str | None = None


class DeclaredHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: DeferredField = None
    i18n_key: str | None = None
    required: bool = False
    default: Any = None


class HttpCode(BaseModel):
    """A documented response code, optionally tagged with a model."""

    model_config = ConfigDict(frozen=True)

    code: int
    message: str = ""
    model: str | None = None


class RouteDescriptor(BaseModel):
    """One HTTP method + path registration with its documentation metadata."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    namespace: str | None = None  # e.g. /widgets or /:version/widgets
    prefix: str | None = None
    params: dict[str, DeclaredParam] = {}
    headers: dict[str, DeclaredHeader] = {}
    http_codes: list[HttpCode] = []
    entity: list[str] = []
    hidden: DeferredField = None
    nickname: str | None = None
    notes: str | None = None
    description: str | None = None
    authorizations: dict[str, Any] | None = None
    app: str | None = None  # owning app, used for translation keys

    def is_hidden(self) -> bool:
        return bool(resolve(self.hidden))


class NamespaceDescriptor(BaseModel):
    """A path-scoped group of routes, e.g. ``widgets/parts``."""

    model_config = ConfigDict(frozen=True)

    path: str  # no leading slash
    description: DeferredField = None
    nested: bool = True
    name: str | None = None  # display name when standalone

    @property
    def is_standalone(self) -> bool:
        return not self.nested

    @property
    def parent_key(self) -> str:
        return self.path.split("/", 1)[0]

    def contains(self, other: str) -> bool:
        """Whether namespace path ``other`` is this one or nested below it."""
        return other == self.path or other.startswith(self.path + "/")

    def identifier(self) -> str:
        if self.name:
            return self.name.replace(" ", "-")
        return self.path.replace("_", "-").replace("/", "_")


class PropertySpec(BaseModel):
    """A single exposed property of an entity model."""

    model_config = ConfigDict(frozen=True)

    type: str | None = None
    using: str | None = None  # sub-model reference
    is_array: bool = False
    required: bool = False
    desc: DeferredField = None
    values: DeferredField = None
    documented: bool = True
    extra: dict[str, Any] = {}


class ModelDescriptor(BaseModel):
    """A named entity model and its exposed properties."""

    model_config = ConfigDict(frozen=True)

    name: str
    entity_name: str | None = None
    root: str | None = None  # explicit model id
    properties: dict[str, PropertySpec] = {}

    def documented_properties(self) -> dict[str, PropertySpec]:
        return {k: v for k, v in self.properties.items() if v.documented}


class ApiApp(BaseModel):
    """A host API application with its routes and mounted sub-applications."""

    model_config = ConfigDict(frozen=True)

    name: str
    prefix: str | None = None
    format: str | None = None
    default_format: str | None = None
    content_types: dict[str, str] = {}
    namespaces: list[NamespaceDescriptor] = []
    routes: list[RouteDescriptor] = []
    mounts: list[str] = []


class RouteSource(BaseModel):
    """All apps and models the documentation is generated from."""

    model_config = ConfigDict(frozen=True)

    root: str
    apps: dict[str, ApiApp]
    models: dict[str, ModelDescriptor] = Field(default_factory=dict)

    @property
    def root_app(self) -> ApiApp:
        return self.apps[self.root]
