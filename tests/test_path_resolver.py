"""Tests for base path derivation and per-operation path resolution."""

from typing import Any

import pytest

from ts_request_generator.errors import ConfigurationError, UnresolvedReferenceError
from ts_request_generator.parser.oas_parser import Operation, Parameter, Server
from ts_request_generator.resolver.path_resolver import (
    PathResolver,
    ResolvedOperation,
    derive_base_path_from_server,
    get_request_url,
    join_base_path,
)


def _param(name: str, location: str, *, required: bool = False, **attributes: Any) -> Parameter:  # noqa: ANN401
    return Parameter(
        name=name,
        location=location,
        required=required,
        param_type=attributes.get("type"),
        schema=attributes.get("schema"),
        attributes={"name": name, "in": location, **attributes},
    )


PET_SCHEMA = {"type": "object", "required": ["name"], "properties": {"name": {"type": "string"}}}


class TestDeriveBasePath:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://api.example.com/v1", "/v1"),
            ("https://api.example.com/v1/", "/v1"),
            ("http://localhost:8080/api/v2", "/api/v2"),
            ("https://api.example.com", ""),
            ("https://api.example.com/", ""),
        ],
    )
    def test_segments_after_host(self, url: str, expected: str) -> None:
        assert derive_base_path_from_server([Server(url=url)]) == expected

    def test_only_first_server_is_used(self) -> None:
        servers = [Server(url="https://a.example.com/first"), Server(url="https://b.example.com/second")]
        assert derive_base_path_from_server(servers) == "/first"

    def test_no_server(self) -> None:
        with pytest.raises(ConfigurationError, match="No server"):
            derive_base_path_from_server([])

    @pytest.mark.parametrize("url", ["/v1", "api.example.com/v1", "", "https:///v1"])
    def test_malformed_url(self, url: str) -> None:
        with pytest.raises(ConfigurationError, match="scheme and host"):
            derive_base_path_from_server([Server(url=url)])


class TestRequestUrl:
    def test_placeholders_become_interpolation_markers(self) -> None:
        assert get_request_url("/pets/{id}") == "/pets/${id}"
        assert get_request_url("/stores/{storeId}/pets/{petId}") == "/stores/${storeId}/pets/${petId}"

    def test_placeholder_inside_segment(self) -> None:
        assert get_request_url("/files/{name}.{ext}") == "/files/${name}.${ext}"

    def test_non_identifier_placeholder(self) -> None:
        assert get_request_url("/pets/{pet-id}") == "/pets/${petId}"

    def test_already_rewritten_marker_untouched(self) -> None:
        assert get_request_url("/pets/${id}") == "/pets/${id}"

    def test_plain_path_unchanged(self) -> None:
        assert get_request_url("/pets") == "/pets"

    def test_join_base_path(self) -> None:
        assert join_base_path("/v1", "/pets") == "/v1/pets"
        assert join_base_path("/v1", "/") == "/v1"
        assert join_base_path("", "/") == "/"


class TestPathResolver:
    """End-to-end resolution of small path maps."""

    def test_get_with_path_parameter(self) -> None:
        paths = {
            "/pets/{id}": {
                "get": Operation(
                    operation_id="getPet",
                    parameters=[_param("id", "path", required=True, type="string")],
                    responses={"200": {"schema": {"type": "string"}}},
                )
            }
        }
        (resolved,) = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve().resolved_paths

        assert resolved.url == "/pets/${id}"
        assert resolved.method == "get"
        assert resolved.path_params == ["id"]
        assert resolved.body_param is None
        assert resolved.query_params == []
        assert resolved.request_type == "{\n  id: string;\n}"
        assert resolved.response_type == "string"

    def test_post_with_body_parameter(self) -> None:
        paths = {
            "/pets": {
                "post": Operation(
                    operation_id="createPet",
                    parameters=[_param("pet", "body", required=True, schema=PET_SCHEMA)],
                )
            }
        }
        (resolved,) = PathResolver.of(paths, [Server(url="https://api.example.com/v1")]).resolve().resolved_paths

        assert resolved.url == "/v1/pets"
        assert resolved.body_param == "pet"
        assert resolved.request_content_type == "application/json"
        assert resolved.request_type == "{\n  pet: { name: string };\n}"

    def test_query_parameters(self) -> None:
        paths = {
            "/pets": {
                "get": Operation(
                    operation_id="listPets",
                    parameters=[
                        _param("limit", "query", required=True, type="integer"),
                        _param("offset", "query", type="integer"),
                    ],
                )
            }
        }
        (resolved,) = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve().resolved_paths

        assert resolved.query_params == ["limit", "offset"]
        assert [f.field_name for f in resolved.request_fields] == ["limit", "offset?"]
        assert resolved.body_param is None

    def test_only_error_response(self) -> None:
        paths = {"/pets": {"delete": Operation(operation_id="deletePets", responses={"404": {"description": "gone"}})}}
        (resolved,) = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve().resolved_paths

        assert resolved.response_type == ""
        assert resolved.request_type == ""

    def test_shared_schema_registered_once(self) -> None:
        ref = {"$ref": "#/definitions/Pet"}
        paths = {
            "/pets": {"get": Operation(operation_id="listPets", responses={"200": {"schema": ref}})},
            "/pets/{id}": {
                "get": Operation(
                    operation_id="getPet",
                    parameters=[_param("id", "path", required=True, type="integer")],
                    responses={"200": {"schema": ref}},
                )
            },
        }
        resolver = PathResolver.of(
            paths, [Server(url="https://api.example.com")], definitions={"Pet": PET_SCHEMA}
        ).resolve()

        assert [op.response_type for op in resolver.resolved_paths] == ["Pet", "Pet"]
        assert list(resolver.extra_definitions) == ["Pet"]

    def test_unrecognized_methods_skipped(self) -> None:
        paths: dict[str, dict[str, Any]] = {
            "/pets": {
                "GET": Operation(operation_id="listPets"),
                "x-internal": Operation(operation_id="internal"),
            }
        }
        resolved = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve().resolved_paths

        assert [(op.operation_id, op.method) for op in resolved] == [("listPets", "GET")]

    def test_one_result_per_operation_in_walk_order(self) -> None:
        paths = {
            "/b": {"post": Operation(operation_id="b2"), "get": Operation(operation_id="b1")},
            "/a": {"get": Operation(operation_id="a1")},
        }
        resolved = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve().resolved_paths

        assert [op.operation_id for op in resolved] == ["b2", "b1", "a1"]
        assert all(isinstance(op, ResolvedOperation) for op in resolved)

    def test_missing_server_is_reported_and_pass_continues(self) -> None:
        paths = {"/pets": {"get": Operation(operation_id="listPets")}}
        resolver = PathResolver.of(paths).resolve()

        assert [op.url for op in resolver.resolved_paths] == ["/pets"]
        (error,) = resolver.report.errors
        assert isinstance(error, ConfigurationError)

    def test_unresolved_reference_names_operation(self) -> None:
        paths = {
            "/pets": {"get": Operation(operation_id="listPets", responses={"200": {"schema": {"$ref": "#/definitions/Gone"}}})}
        }
        resolver = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve()

        assert resolver.resolved_paths[0].response_type == "any"
        assert [type(e) for e in resolver.report.errors_for("listPets")] == [UnresolvedReferenceError]

    def test_resolve_starts_from_fresh_state(self) -> None:
        paths = {"/pets": {"get": Operation(operation_id="listPets", responses={"200": {"schema": {"$ref": "#/definitions/Pet"}}})}}
        resolver = PathResolver.of(paths, [Server(url="https://api.example.com")], definitions={"Pet": PET_SCHEMA})

        resolver.resolve()
        resolver.resolve()

        assert len(resolver.resolved_paths) == 1
        assert list(resolver.extra_definitions) == ["Pet"]
        assert resolver.report.ok

    def test_form_data_operation(self) -> None:
        paths = {
            "/upload": {
                "post": Operation(
                    operation_id="upload",
                    parameters=[_param("file", "formData", required=True, type="file")],
                )
            }
        }
        resolver = PathResolver.of(
            paths, [Server(url="https://api.example.com")], form_data_location="formData"
        ).resolve()
        (resolved,) = resolver.resolved_paths

        assert resolved.form_data_params == ["file"]
        assert resolved.body_param == "file"
        assert resolved.request_content_type == "multipart/form-data"
        assert resolved.request_type == "{\n  file: File;\n}"

    def test_multipart_request_body(self) -> None:
        body = Parameter(
            name="requestBody",
            location="body",
            required=True,
            schema={"type": "object", "properties": {"file": {"type": "string", "format": "binary"}}},
            media_type="multipart/form-data",
        )
        paths = {"/upload": {"post": Operation(operation_id="upload", parameters=[body])}}
        (resolved,) = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve().resolved_paths

        assert resolved.body_param == "requestBody"
        assert resolved.request_content_type == "multipart/form-data"

    def test_json_is_default_body_content_type(self) -> None:
        paths = {"/pets": {"post": Operation(operation_id="createPet", parameters=[_param("pet", "body")])}}
        (resolved,) = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve().resolved_paths

        assert resolved.request_content_type == "application/json"

    def test_no_payload_has_no_content_type(self) -> None:
        paths = {"/pets": {"get": Operation(operation_id="listPets")}}
        (resolved,) = PathResolver.of(paths, [Server(url="https://api.example.com")]).resolve().resolved_paths

        assert resolved.request_content_type is None
