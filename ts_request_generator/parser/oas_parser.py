"""
API Description Parser for TypeScript Request Generation.

This module loads Swagger 2.0 and OpenAPI 3.x documents (JSON or YAML) and
normalizes them into the small data model the resolvers work on: servers,
path items keyed by method, operations, parameters and raw responses.

Schemas are left untouched; turning them into type expressions is the job
of :mod:`ts_request_generator.resolver.schema_resolver`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

from ts_request_generator.constants import BODY_LOCATION, HTTP_METHODS, JSON_CONTENT_TYPE, REQUEST_BODY_PARAM_NAME

logger = logging.getLogger(__name__)

_YAML_SUFFIXES: Final = frozenset({".yaml", ".yml"})
_DEFAULT_SCHEME: Final = "https"
# Parameter keys that describe the parameter rather than its value
_PARAMETER_ONLY_KEYS: Final = frozenset({"name", "in", "required", "description", "schema", "allowEmptyValue"})


def is_http_method(method: str) -> bool:
    """Check whether a path item key names a recognized HTTP method."""
    return isinstance(method, str) and method.lower() in HTTP_METHODS


def _preferred_media_type(content: dict[str, Any]) -> tuple[str | None, dict[str, Any] | None]:
    """Pick the JSON media type, falling back to the first one listed.

    Returns the media type name and its schema.
    """
    if not content:
        return None, None
    media_type = JSON_CONTENT_TYPE if JSON_CONTENT_TYPE in content else next(iter(content))
    media = content[media_type]
    if not isinstance(media, dict):
        return media_type, None
    return media_type, media.get("schema")


def _preferred_content_schema(content: dict[str, Any]) -> dict[str, Any] | None:
    return _preferred_media_type(content)[1]


@dataclass
class Server:
    """Represents a server entry; only ``url`` is consulted."""

    url: str
    description: str | None = None


@dataclass
class Parameter:
    """Represents a parameter, or an unresolved reference to one."""

    name: str | None
    location: str | None
    required: bool = False
    param_type: str | None = None
    schema: dict[str, Any] | None = None
    description: str | None = None
    ref: str | None = None
    media_type: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    @property
    def declared_type(self) -> str | None:
        """The primitive type, read from the parameter or from its schema."""
        if self.param_type:
            return self.param_type
        if self.schema:
            return self.schema.get("type")
        return None

    def as_schema(self) -> dict[str, Any]:
        """View the parameter as a schema.

        Swagger 2 non-body parameters carry ``type``, ``enum``, ``items`` and
        ``format`` directly on the parameter, so those keys form the schema
        when no nested ``schema`` is present.
        """
        if self.schema:
            return self.schema
        return {key: value for key, value in self.attributes.items() if key not in _PARAMETER_ONLY_KEYS}


@dataclass
class Operation:
    """Represents one HTTP operation bound to a path."""

    operation_id: str | None
    parameters: list[Parameter] = field(default_factory=list)
    responses: dict[str, dict[str, Any]] = field(default_factory=dict)
    summary: str | None = None
    description: str | None = None


@dataclass
class ParsedSpec:
    """Represents a parsed API description."""

    info: dict[str, Any]
    servers: list[Server]
    paths: dict[str, dict[str, Operation]]
    definitions: dict[str, Any]

    @property
    def operations(self) -> list[Operation]:
        return [operation for path in self.paths.values() for operation in path.values()]


class OASParser:
    """Parser for Swagger 2.0 and OpenAPI 3.x documents."""

    def __init__(self) -> None:
        self.spec_data: dict[str, Any] | None = None

    def parse_file(self, file_path: str | Path) -> ParsedSpec:
        """Parse an API description from a JSON or YAML file."""
        path = Path(file_path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) if path.suffix.lower() in _YAML_SUFFIXES else json.load(f)
        return self.parse_dict(data)

    def parse_dict(self, spec_dict: dict[str, Any]) -> ParsedSpec:
        """Parse an API description from a dictionary."""
        if not isinstance(spec_dict, dict):
            msg = "API description must be a mapping at the top level"
            raise ValueError(msg)
        self.spec_data = spec_dict
        return self._parse_spec()

    def _parse_spec(self) -> ParsedSpec:
        if not self.spec_data:
            msg = "No specification data loaded"
            raise ValueError(msg)

        paths = self._parse_paths()
        logger.debug("Parsed %d paths", len(paths))

        return ParsedSpec(
            info=self.spec_data.get("info", {}),
            servers=self._parse_servers(),
            paths=paths,
            definitions=self._extract_definitions(),
        )

    def _parse_servers(self) -> list[Server]:
        """Read OpenAPI 3 servers, or synthesize one from Swagger 2 host settings."""
        if not self.spec_data:
            return []
        servers = self.spec_data.get("servers")
        if servers:
            return [Server(url=server.get("url", ""), description=server.get("description")) for server in servers]

        host = self.spec_data.get("host")
        if not host:
            return []
        schemes = self.spec_data.get("schemes") or [_DEFAULT_SCHEME]
        base_path = self.spec_data.get("basePath", "")
        return [Server(url=f"{schemes[0]}://{host}{base_path}")]

    def _extract_definitions(self) -> dict[str, Any]:
        if not self.spec_data:
            return {}
        if "definitions" in self.spec_data:
            return self.spec_data["definitions"] or {}
        return self.spec_data.get("components", {}).get("schemas", {}) or {}

    def _parse_paths(self) -> dict[str, dict[str, Operation]]:
        paths: dict[str, dict[str, Operation]] = {}
        if not self.spec_data:
            return paths

        for path_name, path_item in (self.spec_data.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                continue
            shared_parameters = path_item.get("parameters", [])
            paths[path_name] = {
                method: self._parse_operation(operation_data, shared_parameters)
                for method, operation_data in path_item.items()
                if is_http_method(method) and isinstance(operation_data, dict)
            }

        return paths

    def _parse_operation(self, operation_data: dict[str, Any], shared_parameters: list[dict[str, Any]]) -> Operation:
        parameters = self._merge_parameters(shared_parameters, operation_data.get("parameters", []))

        request_body = operation_data.get("requestBody")
        if request_body:
            parameters.append(self._parse_request_body(request_body))

        return Operation(
            operation_id=operation_data.get("operationId"),
            parameters=parameters,
            responses=self._parse_responses(operation_data.get("responses", {})),
            summary=operation_data.get("summary"),
            description=operation_data.get("description"),
        )

    def _merge_parameters(
        self,
        shared_parameters: list[dict[str, Any]],
        operation_parameters: list[dict[str, Any]],
    ) -> list[Parameter]:
        """Merge path-level parameters ahead of operation-level ones.

        An operation parameter with the same name and location replaces the
        shared one in place.
        """
        merged: dict[tuple[str | None, str | None], Parameter] = {}
        for param_data in [*shared_parameters, *operation_parameters]:
            param = self._parse_parameter(param_data)
            key = (param.ref, None) if param.is_reference else (param.name, param.location)
            merged[key] = param
        return list(merged.values())

    def _parse_parameter(self, param_data: dict[str, Any]) -> Parameter:
        if "$ref" in param_data:
            return Parameter(name=None, location=None, ref=param_data["$ref"], attributes=dict(param_data))

        return Parameter(
            name=param_data.get("name"),
            location=param_data.get("in"),
            required=bool(param_data.get("required", False)),
            param_type=param_data.get("type"),
            schema=param_data.get("schema"),
            description=param_data.get("description"),
            attributes=dict(param_data),
        )

    def _parse_request_body(self, request_body: dict[str, Any]) -> Parameter:
        """Turn an OpenAPI 3 requestBody into a body parameter."""
        if "$ref" in request_body:
            return Parameter(name=None, location=None, ref=request_body["$ref"], attributes=dict(request_body))

        media_type, schema = _preferred_media_type(request_body.get("content", {}))
        return Parameter(
            name=REQUEST_BODY_PARAM_NAME,
            location=BODY_LOCATION,
            required=bool(request_body.get("required", False)),
            schema=schema,
            media_type=media_type,
            description=request_body.get("description"),
        )

    def _parse_responses(self, responses: dict[Any, Any]) -> dict[str, dict[str, Any]]:
        """Key responses by string status code and lift OpenAPI 3 content schemas to ``schema``."""
        parsed: dict[str, dict[str, Any]] = {}
        for status_code, response_data in responses.items():
            response = dict(response_data or {})
            if "$ref" not in response and "schema" not in response and "content" in response:
                schema = _preferred_content_schema(response["content"])
                if schema is not None:
                    response["schema"] = schema
            parsed[str(status_code)] = response
        return parsed
