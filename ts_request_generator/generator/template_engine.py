"""
TypeScript Template Engine for Request Generation

This module uses Jinja2 templates to render resolved operations and the
extra definitions registry into TypeScript source fragments.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ts_request_generator.constants import (
    DEFAULT_FILE_NAME,
    DEFAULT_REQUEST_ACTION_IMPORT,
    FORM_DATA_LOCATION,
    REQUEST_ACTION_FACTORY,
    TS_UNDEFINED,
)
from ts_request_generator.errors import DuplicateOperationIdError, GenerationReport, MissingOperationIdError
from ts_request_generator.generator.filters import FILTERS
from ts_request_generator.parser.oas_parser import ParsedSpec
from ts_request_generator.resolver.path_resolver import PathResolver, ResolvedOperation
from ts_request_generator.resolver.schema_resolver import ALIAS_KIND, ENUM_KIND, INTERFACE_KIND, TypeDefinition
from ts_request_generator.utils.string_case import ts_identifier

logger = logging.getLogger(__name__)

DEFINITION_TEMPLATES = {
    ENUM_KIND: "enum.ts.j2",
    INTERFACE_KIND: "interface.ts.j2",
    ALIAS_KIND: "alias.ts.j2",
}


class TSTemplateEngine:
    """Template engine for generating TypeScript code."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize the template engine."""
        if template_dir is None:
            current_dir = Path(__file__).parent
            template_dir = current_dir.parent / "templates"

        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self.env.filters.update(FILTERS)
        self.env.globals.update(
            {
                "request_action_factory": REQUEST_ACTION_FACTORY,
                "undefined_type": TS_UNDEFINED,
            }
        )

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template with the given context."""
        template = self.env.get_template(template_name)
        return template.render(**context)


class RequestCodeGenerator:
    """Emits request action and type declarations."""

    def __init__(
        self,
        template_engine: TSTemplateEngine | None = None,
        request_action_import: str = DEFAULT_REQUEST_ACTION_IMPORT,
    ) -> None:
        """Initialize the code generator."""
        self.template_engine = template_engine or TSTemplateEngine()
        self.request_action_import = request_action_import

    def emit(
        self,
        resolved_operations: list[ResolvedOperation],
        extra_definitions: dict[str, TypeDefinition],
        report: GenerationReport | None = None,
    ) -> list[str]:
        """Render all request declarations, sorted by operationId, then every registry entry.

        Registry entries keep their registration order. Operations without an
        operationId, and all but the first operation declaring the same name, are reported
        and left out.
        """
        requests, definitions = self._render_fragments(resolved_operations, extra_definitions, report)
        return [*requests, *definitions]

    def _render_fragments(
        self,
        resolved_operations: list[ResolvedOperation],
        extra_definitions: dict[str, TypeDefinition],
        report: GenerationReport | None,
    ) -> tuple[list[str], list[str]]:
        report = report if report is not None else GenerationReport()
        requests = [self.render_request_action(operation) for operation in self._emittable(resolved_operations, report)]
        definitions = [self.render_definition(definition) for definition in extra_definitions.values()]
        return requests, definitions

    def _emittable(
        self,
        resolved_operations: list[ResolvedOperation],
        report: GenerationReport,
    ) -> Iterator[ResolvedOperation]:
        # Keyed by declaration name, so ids differing only in spelling ("get-pet", "getPet") collide
        seen: dict[str, str] = {}
        for operation in sorted(resolved_operations, key=lambda o: o.operation_id or ""):
            location = f"{operation.method} {operation.path}".strip()
            if not operation.operation_id:
                report.record_error(MissingOperationIdError("Operation has no operationId", location=location))
                continue
            declaration_name = ts_identifier(operation.operation_id)
            if declaration_name in seen:
                report.record_error(
                    DuplicateOperationIdError(
                        f"operationId {operation.operation_id!r} declares {declaration_name!r}, "
                        f"already declared by {seen[declaration_name]!r}",
                        operation_id=operation.operation_id,
                        location=location,
                    )
                )
                continue
            seen[declaration_name] = operation.operation_id
            yield operation

    def render_request_action(self, operation: ResolvedOperation) -> str:
        return self.template_engine.render_template("request_action.ts.j2", {"operation": operation})

    def render_definition(self, definition: TypeDefinition) -> str:
        template_name = DEFINITION_TEMPLATES.get(definition.kind, DEFINITION_TEMPLATES[ALIAS_KIND])
        return self.template_engine.render_template(template_name, {"definition": definition})

    def generate_module(
        self,
        resolved_operations: list[ResolvedOperation],
        extra_definitions: dict[str, TypeDefinition],
        report: GenerationReport | None = None,
    ) -> str:
        """Render a complete TypeScript module."""
        requests, definitions = self._render_fragments(resolved_operations, extra_definitions, report)
        context = {
            "fragments": [*requests, *definitions],
            "has_requests": bool(requests),
            "request_action_import": self.request_action_import,
        }
        return self.template_engine.render_template("module.ts.j2", context)

    def generate_client(
        self,
        spec: ParsedSpec,
        output_dir: Path,
        file_name: str = DEFAULT_FILE_NAME,
        form_data_location: str = FORM_DATA_LOCATION,
    ) -> tuple[dict[Path, str], GenerationReport]:
        """Resolve and render a parsed description into ``output_dir / file_name``."""
        resolver = PathResolver.of(
            spec.paths,
            spec.servers,
            definitions=spec.definitions,
            form_data_location=form_data_location,
        ).resolve()

        content = self.generate_module(resolver.resolved_paths, resolver.extra_definitions, resolver.report)
        logger.debug("Rendered %d operations into %s", len(resolver.resolved_paths), file_name)
        return {Path(output_dir) / file_name: content}, resolver.report
