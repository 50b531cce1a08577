"""Exceptions raised while loading sources and rendering documentation."""


class RouteDocsError(Exception):
    """Base class for all route-docs errors."""


class SourceError(RouteDocsError):
    """The route source or configuration document is malformed."""


class UnknownModelError(RouteDocsError):
    """A route or property references a model that is not declared."""

    def __init__(self, name: str):
        super().__init__(f"unknown model: {name}")
        self.name = name


class ResourceNotFound(RouteDocsError):
    """No visible resource exists under the requested name."""

    status = 404

    def __init__(self, name: str):
        super().__init__("Not Found")
        self.name = name
