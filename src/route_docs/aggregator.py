"""Route aggregation: groups routes into top-level documentation resources.

Routes are first bucketed by the first segment of their path. Declared
namespaces then decide where each bucket's routes end up: folded into the
parent resource, or promoted to a resource of their own when marked
standalone (``nested: false``).
"""

import logging
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_validator

from route_docs.source.base import NamespaceDescriptor, RouteDescriptor

logger = logging.getLogger(__name__)

_SEGMENT = re.compile(r"/([\w|-]*?)[./(]")
_TRAILING_SEGMENT = re.compile(r"/([\w|-]*)$")
_VERSION_PREFIX = "/:version/"


class ResourceIndex(BaseModel):
    """Read-only result of aggregation, shared by every rendering call."""

    model_config = ConfigDict(frozen=True)

    groups: Mapping[str, tuple[RouteDescriptor, ...]]
    identifiers: Mapping[str, str]  # standalone identifier -> namespace path
    namespaces: Mapping[str, NamespaceDescriptor]

    @field_validator("groups", "identifiers", "namespaces", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping) -> Mapping:
        return MappingProxyType(dict(value))

    def routes_for(self, key: str) -> tuple[RouteDescriptor, ...]:
        return self.groups.get(key, ())

    def original_name(self, key: str) -> str:
        """The namespace path behind a standalone identifier, else the key itself."""
        return self.identifiers.get(key, key)

    def namespace_for(self, key: str) -> NamespaceDescriptor | None:
        return self.namespaces.get(self.original_name(key))


def resource_key(route: RouteDescriptor) -> str:
    """Lower-cased first path segment of a route, ignoring prefix and version."""
    path = route.path
    if route.prefix:
        idx = path.find(route.prefix)
        if idx >= 0:
            path = path[idx + len(route.prefix):]

    match = _SEGMENT.search(path) or _TRAILING_SEGMENT.search(path)
    if not match:
        return ""
    return match.group(1).lower()


def namespace_path(route: RouteDescriptor) -> str | None:
    """The owning namespace of a route without leading slash or version."""
    ns = route.namespace
    if not ns:
        return None
    if ns.startswith(_VERSION_PREFIX):
        return ns[len(_VERSION_PREFIX):]
    return ns.lstrip("/")


def group_by_key(
    routes: Iterable[RouteDescriptor], exclude_path: str | None = None
) -> dict[str, list[RouteDescriptor]]:
    """Provisional grouping of routes by resource key."""
    groups: dict[str, list[RouteDescriptor]] = {}
    for route in routes:
        key = resource_key(route)
        if not key:
            logger.debug("Dropping route %s %s: empty resource key", route.method, route.path)
            continue
        bucket = groups.setdefault(key, [])
        if exclude_path and exclude_path in route.path:
            continue
        bucket.append(route)
    return groups


def standalone_sub_namespaces(
    path: str, namespaces: Mapping[str, NamespaceDescriptor]
) -> list[str]:
    """Namespaces nested below ``path`` that fold into its standalone resource.

    A standalone descendant takes itself and everything below it out of the
    result, at any depth.
    """
    parent = namespaces[path]
    subs = [p for p in namespaces if p != path and parent.contains(p)]
    own = [p for p in subs if namespaces[p].is_standalone]
    return [p for p in subs if not any(namespaces[s].contains(p) for s in own)]


def build_index(
    routes: list[RouteDescriptor],
    namespaces: Mapping[str, NamespaceDescriptor],
    exclude_path: str | None = None,
) -> ResourceIndex:
    """Partition routes into resources according to the declared namespaces."""
    order = {id(route): i for i, route in enumerate(routes)}
    raw = group_by_key(routes, exclude_path)
    standalone = [ns for ns in namespaces.values() if ns.is_standalone]

    groups: dict[str, list[RouteDescriptor]] = {}
    identifiers: dict[str, str] = {}
    claimed: set[int] = set()

    for path, ns in namespaces.items():
        parent_routes = raw.get(ns.parent_key)
        if parent_routes is None:
            logger.debug("Skipping namespace %s: no routes under /%s", path, ns.parent_key)
            continue

        if ns.is_standalone:
            identifier = ns.identifier()
            identifiers[identifier] = path
            members = {path, *standalone_sub_namespaces(path, namespaces)}
            target = groups.setdefault(identifier, [])
        elif any(s.contains(path) for s in standalone):
            # collected by the enclosing standalone namespace
            continue
        else:
            members = {path}
            target = groups.setdefault(ns.parent_key, [])

        for route in parent_routes:
            if id(route) not in claimed and namespace_path(route) in members:
                target.append(route)
                claimed.add(id(route))

    for key, bucket in raw.items():
        leftovers = [r for r in bucket if id(r) not in claimed]
        groups.setdefault(key, []).extend(leftovers)

    return ResourceIndex(
        groups={
            key: tuple(sorted(bucket, key=lambda r: order[id(r)]))
            for key, bucket in groups.items()
        },
        identifiers=identifiers,
        namespaces=dict(namespaces),
    )
