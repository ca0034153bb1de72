"""
Parameter classification and request/response type derivation.

Parameters are partitioned by where they are transmitted, then each group is
turned into :class:`RequestField` records that together make up the request
type of an operation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ts_request_generator.constants import (
    BODY_LOCATION,
    FORM_DATA_LOCATION,
    OPTIONAL_MARKER,
    PATH_LOCATION,
    QUERY_LOCATION,
    SUCCESS_RESPONSE_CODES,
    TS_ANY,
    TS_FILE,
    TS_NUMBER,
    TS_STRING,
)
from ts_request_generator.errors import GenerationReport, UnresolvedReferenceError
from ts_request_generator.parser.oas_parser import Parameter
from ts_request_generator.resolver.schema_resolver import ResolutionContext, SchemaTypeResolver

logger = logging.getLogger(__name__)


@dataclass
class ParameterGroups:
    """An operation's parameters partitioned by transmission location."""

    path_params: list[Parameter] = field(default_factory=list)
    query_params: list[Parameter] = field(default_factory=list)
    body_params: list[Parameter] = field(default_factory=list)
    form_data_params: list[Parameter] = field(default_factory=list)

    def names(self) -> dict[str, list[str]]:
        return {
            "path_params": [param.name for param in self.path_params],
            "query_params": [param.name for param in self.query_params],
            "body_params": [param.name for param in self.body_params],
            "form_data_params": [param.name for param in self.form_data_params],
        }

    def body_media_type(self) -> str | None:
        """Media type declared for the body payload, if the document names one."""
        return next((param.media_type for param in self.body_params if param.media_type), None)


@dataclass(frozen=True)
class RequestField:
    """One entry of a request type: a parameter name and its type expression."""

    name: str
    type_expression: str
    required: bool

    @property
    def field_name(self) -> str:
        return self.name if self.required else f"{self.name}{OPTIONAL_MARKER}"


class ParameterClassifier:
    """Splits a parameter list into path, query, body and form-data groups."""

    def __init__(self, form_data_location: str = FORM_DATA_LOCATION) -> None:
        self.form_data_location = form_data_location

    def classify(
        self,
        parameters: Iterable[Parameter],
        *,
        report: GenerationReport | None = None,
        operation_id: str | None = None,
    ) -> ParameterGroups:
        """Partition ``parameters``; each one lands in at most one group.

        Reference entries and parameters with an unrecognized location are
        left out and reported.
        """
        groups = ParameterGroups()
        targets = {
            PATH_LOCATION: groups.path_params,
            QUERY_LOCATION: groups.query_params,
            BODY_LOCATION: groups.body_params,
            self.form_data_location: groups.form_data_params,
        }

        for param in parameters:
            if param.is_reference:
                if report is not None:
                    report.record_error(
                        UnresolvedReferenceError(
                            f"Parameter reference {param.ref!r} is not dereferenced",
                            operation_id=operation_id,
                        )
                    )
                continue

            target = targets.get(param.location)
            if target is None:
                message = f"Dropping parameter {param.name!r} with unrecognized location {param.location!r}"
                if operation_id:
                    message = f"{message} in {operation_id}"
                if report is not None:
                    report.record_warning(message)
                else:
                    logger.warning("%s", message)
                continue
            target.append(param)

        return groups


class TypeDeriver:
    """Derives request and response type expressions for one operation."""

    def __init__(self, context: ResolutionContext) -> None:
        self.context = context

    def derive_request_fields(self, groups: ParameterGroups) -> list[RequestField]:
        """Build request fields in path, query, body, form-data order.

        A name appearing in more than one group keeps its first position and
        takes the type of its last occurrence.
        """
        fields: dict[str, RequestField] = {}
        for request_field in [
            *self.path_param_fields(groups.path_params),
            *self.query_param_fields(groups.query_params),
            *self.body_param_fields(groups.body_params),
            *self.form_data_param_fields(groups.form_data_params),
        ]:
            if request_field.name in fields:
                logger.warning(
                    "Request field %s of %s is declared more than once", request_field.name, self.context.operation_id
                )
            fields[request_field.name] = request_field
        return list(fields.values())

    def derive_response_type(self, responses: dict[str, dict[str, Any]]) -> str:
        """Resolve the schema of the 200 response, or of the 201 response if 200 has none."""
        for status_code in SUCCESS_RESPONSE_CODES:
            response = responses.get(status_code)
            if not response:
                continue
            if "$ref" in response:
                self.context.report.record_error(
                    UnresolvedReferenceError(
                        f"Response reference {response['$ref']!r} is not dereferenced",
                        operation_id=self.context.operation_id,
                    )
                )
                continue
            schema = response.get("schema")
            if schema:
                return SchemaTypeResolver.of(self.context, schema).resolve()
        return ""

    def path_param_fields(self, params: list[Parameter]) -> list[RequestField]:
        fields = []
        for param in params:
            declared_type = param.declared_type
            type_expression = TS_NUMBER if declared_type == "integer" else declared_type or TS_STRING
            fields.append(RequestField(param.name, type_expression, param.required))
        return fields

    def query_param_fields(self, params: list[Parameter]) -> list[RequestField]:
        # Query parameters may carry enum or format metadata, so they always go through the resolver
        return [self._resolved_field(param, param.as_schema()) for param in params]

    def body_param_fields(self, params: list[Parameter]) -> list[RequestField]:
        return [self._resolved_field(param, param.schema) for param in params]

    def form_data_param_fields(self, params: list[Parameter]) -> list[RequestField]:
        fields = []
        for param in params:
            if param.schema:
                fields.append(self._resolved_field(param, param.schema))
                continue
            declared_type = param.declared_type
            type_expression = TS_FILE if declared_type == "file" else declared_type or TS_STRING
            fields.append(RequestField(param.name, type_expression, param.required))
        return fields

    def _resolved_field(self, param: Parameter, schema: dict[str, Any] | None) -> RequestField:
        resolver = SchemaTypeResolver.of(self.context, schema, key=param.name, parent_key=param.name)
        return RequestField(param.name, resolver.resolve() or TS_ANY, param.required)
