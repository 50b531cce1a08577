from pathlib import Path

import pytest

from route_docs.errors import SourceError
from route_docs.source.base import Deferred
from route_docs.source.loader import load_source, parse_source
from route_docs.source.namespaces import all_apps, combined_namespaces, combined_routes

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadSource:
    def test_load_catalog_apps(self):
        source = load_source(FIXTURES / "catalog.yaml")
        assert source.root == "Catalog::API"
        assert set(source.apps) == {"Catalog::API", "Catalog::Admin"}
        assert set(source.models) == {"Widget", "Part", "Error"}

    def test_route_fields(self):
        source = load_source(FIXTURES / "catalog.yaml")
        get_widgets = source.apps["Catalog::API"].routes[0]
        assert get_widgets.method == "GET"
        assert get_widgets.namespace == "/widgets"
        assert get_widgets.entity == ["Widget"]
        assert get_widgets.app == "Catalog::API"
        assert get_widgets.http_codes[0].code == 404
        assert get_widgets.http_codes[0].model == "Error"

    def test_param_shorthand_and_range(self):
        source = load_source(FIXTURES / "catalog.yaml")
        post = source.apps["Catalog::API"].routes[1]
        assert post.params["name"].required is True
        assert post.params["size"].values.resolve() == range(1, 4)

        avatar_route = source.apps["Catalog::Admin"].routes[1]
        assert avatar_route.params["id"].type == "Integer"

    def test_namespace_list_form(self):
        source = load_source(FIXTURES / "catalog.yaml")
        ns = source.apps["Catalog::Admin"].namespaces[0]
        assert ns.path == "admin/user_accounts"
        assert ns.is_standalone

    def test_hidden_flag(self):
        source = load_source(FIXTURES / "catalog.yaml")
        assert source.apps["Catalog::Admin"].routes[2].is_hidden() is True

    def test_model_properties(self):
        source = load_source(FIXTURES / "catalog.yaml")
        widget = source.models["Widget"]
        assert widget.properties["parts"].using == "Part"
        assert widget.properties["parts"].is_array is True
        assert widget.properties["secret"].documented is False
        assert source.models["Part"].entity_name == "WidgetPart"

    def test_invalid_yaml_raises(self, tmp_path):
        f = tmp_path / "broken.yaml"
        f.write_text("apps: [unclosed")
        with pytest.raises(SourceError):
            load_source(f)


class TestParseSource:
    def test_http_codes_mapping_form(self):
        source = parse_source({"apps": {"Api": {"routes": [
            {"path": "/a", "http_codes": {400: "Bad", 404: "Missing"}},
        ]}}})
        codes = source.root_app.routes[0].http_codes
        assert [(c.code, c.message) for c in codes] == [(400, "Bad"), (404, "Missing")]

    def test_root_defaults_to_first_app(self):
        source = parse_source({"apps": {"First": {}, "Second": {}}})
        assert source.root == "First"

    def test_unknown_root_raises(self):
        with pytest.raises(SourceError):
            parse_source({"root": "Missing", "apps": {"Api": {}}})

    def test_no_apps_raises(self):
        with pytest.raises(SourceError):
            parse_source({"apps": {}})

    def test_property_extra_keys_kept(self):
        source = parse_source({
            "apps": {"Api": {}},
            "models": {"Widget": {"properties": {"count": {"type": "integer", "format": "int32"}}}},
        })
        assert source.models["Widget"].properties["count"].extra == {"format": "int32"}

    def test_values_keep_deferred_literal(self):
        source = parse_source({"apps": {"Api": {"routes": [
            {"path": "/a", "params": {"color": {"values": ["red"]}}},
        ]}}})
        assert isinstance(source.root_app.routes[0].params["color"].values, Deferred)

    def test_route_without_path_raises(self):
        with pytest.raises(SourceError, match="without a path"):
            parse_source({"apps": {"Api": {"routes": [{"method": "GET"}]}}})

    def test_scalar_namespace_options_raise(self):
        with pytest.raises(SourceError, match="expected a mapping"):
            parse_source({"apps": {"Api": {"namespaces": {"widgets": "Widget ops"}}}})

    def test_listed_namespace_without_path_raises(self):
        with pytest.raises(SourceError, match="without a path"):
            parse_source({"apps": {"Api": {"namespaces": [{"desc": "Widget ops"}]}}})

    def test_short_http_code_tuple_raises(self):
        with pytest.raises(SourceError, match="http code"):
            parse_source({"apps": {"Api": {"routes": [{"path": "/a", "http_codes": [[404]]}]}}})

    def test_non_numeric_http_code_raises(self):
        with pytest.raises(SourceError):
            parse_source({"apps": {"Api": {"routes": [{"path": "/a", "http_codes": {"oops": "Bad"}}]}}})

    def test_malformed_range_raises(self):
        with pytest.raises(SourceError, match="range"):
            parse_source({"apps": {"Api": {"routes": [
                {"path": "/a", "params": {"size": {"values": {"range": [1]}}}},
            ]}}})

    def test_non_mapping_param_raises(self):
        with pytest.raises(SourceError, match="param"):
            parse_source({"apps": {"Api": {"routes": [{"path": "/a", "params": {"q": ["String"]}}]}}})


class TestMountWalk:
    def test_mount_cycle_visits_each_app_once(self):
        source = load_source(FIXTURES / "catalog.yaml")
        assert [app.name for app in all_apps(source)] == ["Catalog::API", "Catalog::Admin"]

    def test_missing_mount_is_skipped(self):
        source = parse_source({"apps": {"Api": {"mounts": ["Nowhere"]}}})
        assert [app.name for app in all_apps(source)] == ["Api"]

    def test_nested_mounts_in_declaration_order(self):
        source = parse_source({"root": "A", "apps": {
            "A": {"mounts": ["B", "C"]},
            "B": {"mounts": ["D"]},
            "C": {},
            "D": {},
        }})
        assert [app.name for app in all_apps(source)] == ["A", "B", "D", "C"]

    def test_combined_namespaces_and_routes(self):
        source = load_source(FIXTURES / "catalog.yaml")
        assert list(combined_namespaces(source)) == ["widgets", "admin/user_accounts"]
        assert len(combined_routes(source)) == 5
