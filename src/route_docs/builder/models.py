"""Model schema resolution.

Collects every model reachable from a root set through documented
sub-model usages and renders each one's Swagger schema.
"""

from collections.abc import Iterable
from typing import Any

from route_docs.source.base import ModelDescriptor, PropertySpec
from .common import entity_name, type_to_ref
from .context import DocContext


def models_with_included_presenters(context: DocContext, roots: Iterable[str]) -> list[str]:
    """Roots plus all transitively used sub-models, each once, roots first."""
    ordered: list[str] = []
    seen: set[str] = set()
    queue = list(roots)
    while queue:
        ref = queue.pop(0)
        if ref in seen:
            continue
        seen.add(ref)
        ordered.append(ref)
        model = context.model(ref)
        for spec in model.documented_properties().values():
            if spec.using and spec.using not in seen:
                queue.append(spec.using)
    return ordered


class ModelDoc:
    """Swagger schema of one entity model."""

    def __init__(self, context: DocContext, model: ModelDescriptor):
        self.context = context
        self.model = model

    @property
    def name(self) -> str:
        return entity_name(self.model)

    @property
    def id(self) -> str:
        return self.model.root or self.name

    def properties(self) -> dict[str, dict]:
        return {
            name: self.transform_property(spec, name)
            for name, spec in self.model.documented_properties().items()
        }

    def transform_property(self, spec: PropertySpec, name: str) -> dict[str, Any]:
        prop: dict[str, Any] = dict(spec.extra)

        type_name = spec.type
        if type_name is None and spec.using:
            type_name = self.context.model_name(spec.using)
        type_name = type_name or "string"

        if spec.is_array:
            prop["items"] = type_to_ref(type_name)
            prop["type"] = "array"
        else:
            prop.update(type_to_ref(type_name))

        description = spec.desc.resolve() if spec.desc is not None else None
        if description is None:
            description = self.context.translate(self.model.name, name)
        if description:
            prop["description"] = description

        if spec.values is not None:
            values = spec.values.resolve()
            if values is not None:
                prop["enum"] = list(values) if isinstance(values, range) else values
        return prop

    def required_properties(self) -> list[str]:
        return [name for name, spec in self.model.documented_properties().items() if spec.required]

    def as_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"id": self.id, "properties": self.properties()}
        required = self.required_properties()
        if required:
            schema["required"] = required
        return schema


def parse_entity_models(context: DocContext, refs: Iterable[str]) -> dict[str, dict]:
    """Render the schema of every referenced model, keyed by canonical name."""
    result = {}
    for ref in refs:
        doc = ModelDoc(context, context.model(ref))
        result[doc.name] = doc.as_schema()
    return result
