"""Tests for loading Swagger 2.0 and OpenAPI 3.x descriptions."""

from pathlib import Path

import pytest

from ts_request_generator.parser.oas_parser import OASParser, ParsedSpec

SPECS_DIR = Path(__file__).parent / "specs"


class TestSwagger2Parsing:
    @pytest.fixture
    def parsed_spec(self) -> ParsedSpec:
        return OASParser().parse_file(SPECS_DIR / "petstore.yaml")

    def test_server_synthesized_from_host(self, parsed_spec: ParsedSpec) -> None:
        """Swagger 2 host, basePath and schemes become a single server."""
        assert [server.url for server in parsed_spec.servers] == ["https://petstore.example.com/v2"]

    def test_definitions_loaded(self, parsed_spec: ParsedSpec) -> None:
        assert list(parsed_spec.definitions) == ["Pet", "ApiResponse"]

    def test_only_http_methods_become_operations(self, parsed_spec: ParsedSpec) -> None:
        """The path-level ``parameters`` key is not an operation."""
        assert list(parsed_spec.paths["/pet/{petId}"]) == ["get", "delete"]
        assert len(parsed_spec.operations) == 5

    def test_path_level_parameters_are_shared(self, parsed_spec: ParsedSpec) -> None:
        operation = parsed_spec.paths["/pet/{petId}"]["delete"]
        assert [(p.name, p.location) for p in operation.parameters] == [("petId", "path"), ("api_key", "header")]

    def test_response_codes_are_strings(self, parsed_spec: ParsedSpec) -> None:
        """Unquoted YAML status codes load as ints and are keyed as strings."""
        operation = parsed_spec.paths["/pet/{petId}"]["get"]
        assert list(operation.responses) == ["200", "404"]
        assert operation.responses["200"]["schema"] == {"$ref": "#/definitions/Pet"}

    def test_query_parameter_as_schema(self, parsed_spec: ParsedSpec) -> None:
        """Swagger 2 query parameters carry their schema keys inline."""
        param = parsed_spec.paths["/pet/findByStatus"]["get"].parameters[0]
        assert param.as_schema() == {
            "type": "array",
            "items": {"type": "string", "enum": ["available", "pending", "sold"]},
        }

    def test_operation_summary(self, parsed_spec: ParsedSpec) -> None:
        assert parsed_spec.paths["/pet"]["post"].summary == "Add a new pet to the store"


class TestOpenApi3Parsing:
    @pytest.fixture
    def parsed_spec(self) -> ParsedSpec:
        return OASParser().parse_file(SPECS_DIR / "petstore_v3.json")

    def test_servers_kept_in_order(self, parsed_spec: ParsedSpec) -> None:
        assert [server.url for server in parsed_spec.servers] == [
            "https://api.example.com/v1",
            "https://staging.example.com/v9",
        ]

    def test_component_schemas_are_definitions(self, parsed_spec: ParsedSpec) -> None:
        assert set(parsed_spec.definitions) == {"Pet", "NewPet"}

    def test_request_body_becomes_body_parameter(self, parsed_spec: ParsedSpec) -> None:
        (param,) = parsed_spec.paths["/pets"]["post"].parameters
        assert param.name == "requestBody"
        assert param.location == "body"
        assert param.required is True
        assert param.schema == {"$ref": "#/components/schemas/NewPet"}

    def test_response_content_lifted_to_schema(self, parsed_spec: ParsedSpec) -> None:
        responses = parsed_spec.paths["/pets"]["post"].responses
        assert responses["201"]["schema"] == {"$ref": "#/components/schemas/Pet"}

    def test_parameter_type_read_from_schema(self, parsed_spec: ParsedSpec) -> None:
        param = parsed_spec.paths["/pets/{petId}"]["get"].parameters[0]
        assert param.declared_type == "string"


class TestParseDict:
    def test_reference_parameters_kept_unresolved(self) -> None:
        spec = OASParser().parse_dict(
            {
                "paths": {
                    "/items": {
                        "get": {
                            "operationId": "listItems",
                            "parameters": [{"$ref": "#/parameters/Limit"}],
                            "responses": {},
                        }
                    }
                }
            }
        )
        (param,) = spec.paths["/items"]["get"].parameters
        assert param.is_reference
        assert param.ref == "#/parameters/Limit"
        assert param.location is None

    def test_operation_parameter_overrides_shared_one(self) -> None:
        spec = OASParser().parse_dict(
            {
                "paths": {
                    "/items/{id}": {
                        "parameters": [{"name": "id", "in": "path", "required": True, "type": "string"}],
                        "get": {
                            "operationId": "getItem",
                            "parameters": [{"name": "id", "in": "path", "required": True, "type": "integer"}],
                        },
                    }
                }
            }
        )
        (param,) = spec.paths["/items/{id}"]["get"].parameters
        assert param.declared_type == "integer"

    def test_no_servers_without_host(self) -> None:
        spec = OASParser().parse_dict({"paths": {}})
        assert spec.servers == []

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            OASParser().parse_dict(["not", "a", "mapping"])  # type: ignore[arg-type]

    def test_request_body_media_type_kept(self) -> None:
        spec = OASParser().parse_dict(
            {
                "paths": {
                    "/upload": {
                        "post": {
                            "operationId": "upload",
                            "requestBody": {
                                "content": {
                                    "multipart/form-data": {
                                        "schema": {"type": "object", "properties": {"file": {"type": "string"}}}
                                    }
                                }
                            },
                        }
                    }
                }
            }
        )
        (param,) = spec.paths["/upload"]["post"].parameters
        assert param.media_type == "multipart/form-data"
        assert param.schema == {"type": "object", "properties": {"file": {"type": "string"}}}

    def test_json_media_type_preferred(self) -> None:
        spec = OASParser().parse_dict(
            {
                "paths": {
                    "/pets": {
                        "post": {
                            "operationId": "createPet",
                            "requestBody": {
                                "content": {
                                    "application/xml": {"schema": {"type": "string"}},
                                    "application/json": {"schema": {"type": "object"}},
                                }
                            },
                        }
                    }
                }
            }
        )
        (param,) = spec.paths["/pets"]["post"].parameters
        assert param.media_type == "application/json"
        assert param.schema == {"type": "object"}
