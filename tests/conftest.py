
import pytest

from route_docs.aggregator import build_index
from route_docs.builder.context import DocContext
from route_docs.config import DocumentationConfig
from route_docs.source.base import ApiApp, RouteSource
from route_docs.text.i18n import Translator


@pytest.fixture
def make_context():
    """Factory for a DocContext over a single in-memory app."""

    def _make(routes=(), namespaces=(), models=None, config=None, translator=None, renderer=None, **app_options):
        routes = list(routes)
        namespaces = list(namespaces)
        app = ApiApp(name="Api", routes=routes, namespaces=namespaces, **app_options)
        source = RouteSource(root="Api", apps={"Api": app}, models=models or {})
        config = config or DocumentationConfig()
        exclude_path = config.mount_path if config.hide_documentation_path else None
        index = build_index(routes, {ns.path: ns for ns in namespaces}, exclude_path)
        return DocContext(
            source=source,
            config=config,
            index=index,
            translator=translator or Translator(),
            renderer=renderer,
        )

    return _make
