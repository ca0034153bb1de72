"""
Schema to TypeScript type expression resolution.

:class:`SchemaTypeResolver` turns a schema fragment into a TypeScript type
expression. Named things it meets on the way (referenced definitions and
enumerations) are registered in the ``extra_definitions`` registry of the
:class:`ResolutionContext` shared by every call in one resolution pass, so
they can be emitted once as standalone declarations after the walk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Final

from ts_request_generator.constants import (
    TS_ANY,
    TS_BOOLEAN,
    TS_FILE,
    TS_NULL,
    TS_NUMBER,
    TS_STRING,
)
from ts_request_generator.errors import GenerationReport, UnresolvedReferenceError
from ts_request_generator.utils.string_case import ts_type_name
from ts_request_generator.utils.ts_syntax import join_types, ts_literal, ts_property_key, wrap_type

logger = logging.getLogger(__name__)

ENUM_KIND: Final = "enum"
INTERFACE_KIND: Final = "interface"
ALIAS_KIND: Final = "alias"

_PRIMITIVE_TYPES: Final = {
    "integer": TS_NUMBER,
    "number": TS_NUMBER,
    "string": TS_STRING,
    "boolean": TS_BOOLEAN,
    "file": TS_FILE,
    "null": TS_NULL,
}

# Local reference prefixes that point at named schemas
_SCHEMA_REF_PREFIXES: Final = ("#/definitions/", "#/components/schemas/")
_INDEX_SIGNATURE: Final = "[key: string]"
_ARRAY_ITEM_KEY: Final = "item"


@dataclass
class PropertyDefinition:
    """A single property of a registered interface."""

    name: str
    type_expression: str
    required: bool
    description: str | None = None


@dataclass
class TypeDefinition:
    """A named declaration recorded in the extra definitions registry.

    A freshly registered reference starts out as an ``any`` alias and is
    filled in once its target has been resolved.
    """

    name: str
    kind: str = ALIAS_KIND
    description: str | None = None
    enum_values: list[Any] = field(default_factory=list)
    properties: list[PropertyDefinition] = field(default_factory=list)
    type_expression: str = TS_ANY


@dataclass
class ResolutionContext:
    """State shared by every schema resolution in one pass over a document."""

    definitions: dict[str, Any] = field(default_factory=dict)
    extra_definitions: dict[str, TypeDefinition] = field(default_factory=dict)
    references: dict[str, str] = field(default_factory=dict)
    report: GenerationReport = field(default_factory=GenerationReport)
    operation_id: str | None = None

    def unique_name(self, name: str) -> str:
        """Return ``name``, suffixed with a counter if the registry already holds it."""
        candidate = name
        suffix = 2
        while candidate in self.extra_definitions:
            candidate = f"{name}{suffix}"
            suffix += 1
        return candidate


def enum_type_name(key: str | None, parent_key: str | None) -> str:
    """Name an enumeration after its naming hints."""
    if not parent_key or parent_key == key:
        return ts_type_name(key)
    if not key:
        return ts_type_name(parent_key)
    return f"{ts_type_name(parent_key)}{ts_type_name(key)}"


def _is_enum_value(value: Any) -> bool:  # noqa: ANN401
    return isinstance(value, str | int | float) and not isinstance(value, bool)


class SchemaTypeResolver:
    """Resolves one schema fragment into a TypeScript type expression."""

    @classmethod
    def of(
        cls,
        context: ResolutionContext,
        schema: dict[str, Any] | None,
        key: str | None = None,
        parent_key: str | None = None,
    ) -> SchemaTypeResolver:
        return cls(context, schema, key, parent_key)

    def __init__(
        self,
        context: ResolutionContext,
        schema: dict[str, Any] | None,
        key: str | None = None,
        parent_key: str | None = None,
    ) -> None:
        self.context = context
        self.schema = schema
        self.key = key
        self.parent_key = parent_key

    def resolve(self) -> str:
        """Resolve the schema; an empty string means there is no type."""
        return self._resolve(self.schema, self.key, self.parent_key)

    def _resolve(self, schema: Any, key: str | None, parent_key: str | None) -> str:  # noqa: ANN401
        if not schema:
            return ""
        if not isinstance(schema, dict):
            return TS_ANY

        if "$ref" in schema:
            return self._resolve_reference(schema["$ref"])

        type_expression = self._resolve_structure(schema, key, parent_key)
        if schema.get("nullable") and type_expression not in (TS_ANY, TS_NULL):
            return join_types([type_expression, TS_NULL], "|")
        return type_expression

    def _resolve_structure(self, schema: dict[str, Any], key: str | None, parent_key: str | None) -> str:
        if "enum" in schema:
            return self._resolve_enum(schema, key, parent_key)
        if "allOf" in schema:
            return join_types((self._resolve(part, key, parent_key) for part in schema["allOf"]), "&")
        for composite in ("oneOf", "anyOf"):
            if composite in schema:
                return join_types((self._resolve(part, key, parent_key) for part in schema[composite]), "|")

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            return join_types((self._resolve({**schema, "type": item}, key, parent_key) for item in schema_type), "|")
        if schema_type == "array" or "items" in schema:
            items_type = self._resolve(schema.get("items"), key, parent_key) or TS_ANY
            return f"{wrap_type(items_type)}[]"
        if schema_type == "object" or "properties" in schema or "additionalProperties" in schema:
            return self._resolve_object(schema, key)

        return _PRIMITIVE_TYPES.get(schema_type, TS_ANY)

    def _resolve_object(self, schema: dict[str, Any], key: str | None) -> str:
        """Render an anonymous object schema as an inline object literal type."""
        required = set(schema.get("required", []))
        members = [
            f"{ts_property_key(name)}{'' if name in required else '?'}: {self._resolve(prop, name, key) or TS_ANY}"
            for name, prop in (schema.get("properties") or {}).items()
        ]

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict) and additional:
            members.append(f"{_INDEX_SIGNATURE}: {self._resolve(additional, key, key) or TS_ANY}")
        elif additional is True or (not members and additional is None) or additional == {}:
            members.append(f"{_INDEX_SIGNATURE}: {TS_ANY}")

        if not members:
            return "{}"
        return "{ " + "; ".join(members) + " }"

    def _resolve_enum(self, schema: dict[str, Any], key: str | None, parent_key: str | None) -> str:
        values = list(schema["enum"])
        if not (key or parent_key) or not values or not all(_is_enum_value(value) for value in values):
            return join_types((ts_literal(value) for value in values), "|")

        name = enum_type_name(key, parent_key)
        return self._register_enum(name, values, schema.get("description"))

    def _register_enum(self, name: str, values: list[Any], description: str | None) -> str:
        """Register an enumeration, reusing an identical one already registered under the name."""
        candidate = name
        suffix = 2
        while candidate in self.context.extra_definitions:
            existing = self.context.extra_definitions[candidate]
            if existing.kind == ENUM_KIND and existing.enum_values == values:
                return candidate
            candidate = f"{name}{suffix}"
            suffix += 1

        if candidate != name:
            logger.warning("Enum name %s is taken by a different declaration, using %s", name, candidate)
        self.context.extra_definitions[candidate] = TypeDefinition(
            name=candidate,
            kind=ENUM_KIND,
            description=description,
            enum_values=values,
        )
        return candidate

    def _resolve_reference(self, ref: str) -> str:
        """Resolve a local schema reference to a registered named type."""
        if ref in self.context.references:
            return self.context.references[ref]

        target = self._lookup_reference(ref)
        if target is None:
            self.context.report.record_error(
                UnresolvedReferenceError(f"Cannot resolve schema reference {ref!r}", operation_id=self.context.operation_id)
            )
            return TS_ANY

        name = self.context.unique_name(ts_type_name(ref.rsplit("/", 1)[-1]))
        # Register before descending so recursive schemas resolve to the name
        self.context.references[ref] = name
        self.context.extra_definitions[name] = TypeDefinition(name=name)
        self.context.extra_definitions[name] = self._build_definition(name, target)
        logger.debug("Registered %s for %s", name, ref)
        return name

    def _lookup_reference(self, ref: str) -> dict[str, Any] | None:
        for prefix in _SCHEMA_REF_PREFIXES:
            if ref.startswith(prefix):
                target = self.context.definitions.get(ref[len(prefix) :])
                return target if isinstance(target, dict) else None
        return None

    def _build_definition(self, name: str, schema: dict[str, Any]) -> TypeDefinition:
        description = schema.get("description")

        if "enum" in schema and all(_is_enum_value(value) for value in schema["enum"]) and schema["enum"]:
            return TypeDefinition(name=name, kind=ENUM_KIND, description=description, enum_values=list(schema["enum"]))

        is_plain_object = "properties" in schema and not any(k in schema for k in ("allOf", "oneOf", "anyOf"))
        if is_plain_object and not schema.get("additionalProperties"):
            required = set(schema.get("required", []))
            properties = [
                PropertyDefinition(
                    name=prop_name,
                    type_expression=self._resolve(prop_schema, prop_name, name) or TS_ANY,
                    required=prop_name in required,
                    description=prop_schema.get("description") if isinstance(prop_schema, dict) else None,
                )
                for prop_name, prop_schema in (schema.get("properties") or {}).items()
            ]
            return TypeDefinition(name=name, kind=INTERFACE_KIND, description=description, properties=properties)

        if schema.get("type") == "array" or "items" in schema:
            key, parent_key = _ARRAY_ITEM_KEY, name
        else:
            key, parent_key = name, None
        type_expression = self._resolve(schema, key, parent_key) or TS_ANY
        return TypeDefinition(name=name, kind=ALIAS_KIND, description=description, type_expression=type_expression)


def resolve_schema_type(
    context: ResolutionContext,
    schema: dict[str, Any] | None,
    key: str | None = None,
    parent_key: str | None = None,
) -> str:
    """Functional form of ``SchemaTypeResolver.of(...).resolve()``."""
    return SchemaTypeResolver.of(context, schema, key, parent_key).resolve()
