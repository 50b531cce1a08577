"""Walks the app graph through mounts to collect namespaces and routes."""

from collections.abc import Iterator

from .base import ApiApp, NamespaceDescriptor, RouteDescriptor, RouteSource


def all_apps(source: RouteSource) -> Iterator[ApiApp]:
    """Yield the root app and every app reachable through mounts, each once.

    Apps are visited depth-first in mount declaration order. Mount cycles are
    ignored; mounts naming an undeclared app are skipped.
    """
    seen: set[str] = set()
    stack = [source.root]
    while stack:
        name = stack.pop()
        if name in seen or name not in source.apps:
            continue
        seen.add(name)
        app = source.apps[name]
        yield app
        stack.extend(reversed(app.mounts))


def combined_namespaces(source: RouteSource) -> dict[str, NamespaceDescriptor]:
    """All declared namespaces keyed by path, in declaration order.

    A later declaration of the same path replaces the earlier one but keeps
    its position.
    """
    namespaces: dict[str, NamespaceDescriptor] = {}
    for app in all_apps(source):
        for ns in app.namespaces:
            namespaces[ns.path] = ns
    return namespaces


def combined_routes(source: RouteSource) -> list[RouteDescriptor]:
    """All routes of all apps, in declaration order."""
    return [route for app in all_apps(source) for route in app.routes]
