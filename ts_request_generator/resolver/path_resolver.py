"""
Path resolution for request generation.

:class:`PathResolver` walks every path template and every recognized HTTP
operation on it, and produces one :class:`ResolvedOperation` per
(path, method) pair. All schema resolutions in a pass share one
:class:`ResolutionContext`, whose registry is only read once the walk is done.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Final

from ts_request_generator.constants import FORM_DATA_LOCATION, JSON_CONTENT_TYPE, MULTIPART_CONTENT_TYPE, SLASH
from ts_request_generator.errors import ConfigurationError, GenerationReport
from ts_request_generator.parser.oas_parser import Operation, Server, is_http_method
from ts_request_generator.resolver.parameters import ParameterClassifier, RequestField, TypeDeriver
from ts_request_generator.resolver.schema_resolver import ResolutionContext, TypeDefinition
from ts_request_generator.utils.string_case import ts_identifier
from ts_request_generator.utils.ts_syntax import render_object_type

logger = logging.getLogger(__name__)

# Placeholders not already turned into an interpolation marker
_PATH_PARAM_PATTERN: Final = re.compile(r"(?<!\$)\{([^{}]+)\}")
# scheme ("https:"), the empty segment between the slashes, and host
_SERVER_URL_PREFIX_SEGMENTS: Final = 3


def derive_base_path_from_server(servers: list[Server]) -> str:
    """Derive the request URL prefix from the first server.

    The URL must start with a scheme and a host (``https://host``); the
    segments after the host form the base path. Only ``servers[0]`` is read.

    Examples:
        >>> derive_base_path_from_server([Server(url="https://api.example.com/v1")])
        '/v1'
        >>> derive_base_path_from_server([Server(url="https://api.example.com")])
        ''

    Raises:
        ConfigurationError: If there is no server, or its URL lacks a scheme or host.
    """
    if not servers:
        msg = "No server configured; servers[0] is required to derive the base path"
        raise ConfigurationError(msg)

    url = servers[0].url or ""
    segments = url.split(SLASH)
    if len(segments) < _SERVER_URL_PREFIX_SEGMENTS or not segments[0].endswith(":") or segments[1] or not segments[2]:
        msg = f"Server URL {url!r} must start with a scheme and host, e.g. 'https://api.example.com'"
        raise ConfigurationError(msg)

    base_path = SLASH.join(segments[_SERVER_URL_PREFIX_SEGMENTS:]).rstrip(SLASH)
    return f"{SLASH}{base_path}" if base_path else ""


def get_request_url(path_name: str) -> str:
    """Rewrite ``{name}`` placeholders into ``${name}`` interpolation markers.

    Names that are not valid identifiers are converted the same way the
    generated function's parameters are, so the marker always refers to a
    bound name. Plain segments are left as they are.
    """
    return SLASH.join(
        _PATH_PARAM_PATTERN.sub(lambda match: f"${{{ts_identifier(match.group(1))}}}", segment)
        for segment in path_name.split(SLASH)
    )


def join_base_path(base_path: str, request_path: str) -> str:
    """Prefix the base path, without doubling the separator for the root template."""
    if request_path == SLASH and base_path:
        return base_path
    return f"{base_path}{request_path}"


@dataclass
class ResolvedOperation:
    """Everything needed to emit the request declaration of one operation."""

    url: str
    method: str
    operation_id: str | None
    path: str = ""
    summary: str | None = None
    path_params: list[str] = field(default_factory=list)
    query_params: list[str] = field(default_factory=list)
    body_params: list[str] = field(default_factory=list)
    form_data_params: list[str] = field(default_factory=list)
    request_fields: list[RequestField] = field(default_factory=list)
    response_type: str = ""
    body_media_type: str | None = None

    @property
    def request_type(self) -> str:
        return render_object_type(
            (request_field.name, request_field.type_expression, request_field.required)
            for request_field in self.request_fields
        )

    @property
    def param_names(self) -> list[str]:
        return [*self.path_params, *self.query_params, *self.body_params, *self.form_data_params]

    @property
    def body_param(self) -> str | None:
        """The payload parameter: the first body parameter, else the first form-data one."""
        if self.body_params:
            return self.body_params[0]
        if self.form_data_params:
            return self.form_data_params[0]
        return None

    @property
    def request_content_type(self) -> str | None:
        """The Content-Type sent with the payload, or None when there is no payload."""
        if self.body_params:
            return self.body_media_type or JSON_CONTENT_TYPE
        if self.form_data_params:
            return MULTIPART_CONTENT_TYPE
        return None


class PathResolver:
    """Resolves every operation of an API description."""

    @classmethod
    def of(
        cls,
        paths: dict[str, dict[str, Operation]],
        servers: list[Server] | None = None,
        *,
        definitions: dict[str, Any] | None = None,
        form_data_location: str = FORM_DATA_LOCATION,
    ) -> PathResolver:
        return cls(paths, servers or [], definitions=definitions, form_data_location=form_data_location)

    def __init__(
        self,
        paths: dict[str, dict[str, Operation]],
        servers: list[Server],
        *,
        definitions: dict[str, Any] | None = None,
        form_data_location: str = FORM_DATA_LOCATION,
    ) -> None:
        self.paths = paths
        self.servers = servers
        self.definitions = definitions or {}
        self.classifier = ParameterClassifier(form_data_location)
        self.resolved_paths: list[ResolvedOperation] = []
        self.context = ResolutionContext(definitions=self.definitions)

    @property
    def extra_definitions(self) -> dict[str, TypeDefinition]:
        return self.context.extra_definitions

    @property
    def report(self) -> GenerationReport:
        return self.context.report

    def resolve(self) -> PathResolver:
        """Run one resolution pass; state from any earlier pass is discarded."""
        self.context = ResolutionContext(definitions=self.definitions)
        base_path = self._base_path()

        self.resolved_paths = [
            resolved
            for path_name, path in self.paths.items()
            for resolved in self.resolve_path(path, path_name, base_path)
        ]
        self.context.operation_id = None

        logger.debug(
            "Resolved %d operations, %d extra definitions",
            len(self.resolved_paths),
            len(self.context.extra_definitions),
        )
        return self

    def _base_path(self) -> str:
        try:
            return derive_base_path_from_server(self.servers)
        except ConfigurationError as e:
            logger.warning("%s; generating URLs without a base path", e)
            self.context.report.record_error(e)
            return ""

    def resolve_path(self, path: dict[str, Operation], path_name: str, base_path: str) -> list[ResolvedOperation]:
        request_path = get_request_url(path_name)
        url = join_base_path(base_path, request_path)

        return [
            self.resolve_operation(operation, url=url, method=method, path_name=path_name)
            for method, operation in path.items()
            if is_http_method(method)
        ]

    def resolve_operation(self, operation: Operation, *, url: str, method: str, path_name: str = "") -> ResolvedOperation:
        self.context.operation_id = operation.operation_id
        groups = self.classifier.classify(
            operation.parameters,
            report=self.context.report,
            operation_id=operation.operation_id,
        )
        deriver = TypeDeriver(self.context)

        return ResolvedOperation(
            url=url,
            method=method,
            operation_id=operation.operation_id,
            path=path_name,
            summary=operation.summary,
            response_type=deriver.derive_response_type(operation.responses),
            request_fields=deriver.derive_request_fields(groups),
            body_media_type=groups.body_media_type(),
            **groups.names(),
        )
