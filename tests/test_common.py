import pytest

from route_docs.builder.common import (
    content_types_for,
    entity_name,
    parse_path,
    pluralize,
    select_data_type,
    stripped_model_name,
    type_to_ref,
    underscore,
)
from route_docs.source.base import ApiApp, ModelDescriptor


class TestSelectDataType:
    @pytest.mark.parametrize("raw, expected", [
        ("Integer", "integer"),
        ("String", "string"),
        ("Boolean", "boolean"),
        ("Float", "double"),
        ("DateTime", "dateTime"),
        ("BigDecimal", "long"),
        ("Hash", "object"),
        ("Symbol", "string"),
        ("Date", "date"),
        ("Virtus::Attribute::Boolean", "boolean"),
        ("Rack::Multipart::UploadedFile", "File"),
    ])
    def test_known_tokens(self, raw, expected):
        assert select_data_type(raw) == expected

    def test_case_insensitive(self):
        assert select_data_type("integer") == "integer"
        assert select_data_type("STRING") == "string"
        assert select_data_type("dateTime") == "dateTime"

    def test_unknown_token_resolves_to_model_name(self):
        models = {"API::Entities::Widget": ModelDescriptor(name="API::Entities::Widget")}
        assert select_data_type("API::Entities::Widget", models) == "API::Widget"

    def test_model_entity_name_wins(self):
        models = {"Widget": ModelDescriptor(name="Widget", entity_name="Gadget")}
        assert select_data_type("Widget", models) == "Gadget"

    def test_undeclared_token_is_stripped_name(self):
        assert select_data_type("PartEntity") == "Part"


class TestNaming:
    def test_stripped_model_name(self):
        assert stripped_model_name("API::Entities::Widget") == "API::Widget"
        assert stripped_model_name("Entities::Widget") == "Widget"
        assert stripped_model_name("Widget") == "Widget"

    def test_entity_name(self):
        assert entity_name(ModelDescriptor(name="WidgetEntity")) == "Widget"
        assert entity_name(ModelDescriptor(name="Widget", entity_name="Thing")) == "Thing"

    def test_type_to_ref(self):
        assert type_to_ref("string") == {"type": "string"}
        assert type_to_ref("Widget") == {"$ref": "Widget"}

    def test_underscore(self):
        assert underscore("Catalog::API") == "catalog/api"
        assert underscore("WidgetApi") == "widget_api"
        assert underscore("HTTPServer") == "http_server"

    @pytest.mark.parametrize("word, expected", [
        ("widget", "widgets"),
        ("widgets", "widgets"),
        ("category", "categories"),
        ("key", "keys"),
        ("box", "boxes"),
        ("status", "statuses"),
        ("admin/user", "admin/users"),
    ])
    def test_pluralize(self, word, expected):
        assert pluralize(word) == expected


class TestParsePath:
    def test_format_and_placeholders(self):
        assert parse_path("/widgets/:id(.:format)", None, False) == "/widgets/{id}.{format}"

    def test_hidden_format(self):
        assert parse_path("/widgets/:id(.:format)", None, True) == "/widgets/{id}"

    def test_version_substituted(self):
        assert parse_path("/:version/widgets", "v1", False) == "/v1/widgets"

    def test_version_left_when_not_given(self):
        assert parse_path("/:version/widgets", None, False) == "/{version}/widgets"


class TestContentTypes:
    def test_declared_content_types(self):
        app = ApiApp(name="Api", content_types={"json": "application/json", "xml": "application/xml"})
        assert content_types_for(app) == ["application/json", "application/xml"]

    def test_explicit_format(self):
        assert content_types_for(ApiApp(name="Api", format="json")) == ["application/json"]

    def test_configured_format(self):
        assert content_types_for(ApiApp(name="Api"), "txt") == ["text/plain"]

    def test_default_formatters(self):
        assert content_types_for(ApiApp(name="Api")) == ["application/xml", "application/json", "text/plain"]
