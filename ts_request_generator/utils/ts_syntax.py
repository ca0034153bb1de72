"""Helpers for writing TypeScript literals, keys and object types."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from typing import Any, Final

from ts_request_generator.constants import TS_ANY

_PROPERTY_KEY_PATTERN: Final = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_COMPOUND_TYPE_MARKERS: Final = (" | ", " & ")


def ts_literal(value: Any) -> str:  # noqa: ANN401
    """Render a JSON-compatible scalar as a TypeScript literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return repr(value)
    return json.dumps(str(value))


def ts_property_key(name: str) -> str:
    """Quote a property key unless it is a plain identifier.

    Reserved words are valid property keys, so only the character set matters.
    """
    return name if _PROPERTY_KEY_PATTERN.match(name) else json.dumps(name)


def wrap_type(type_expression: str) -> str:
    """Parenthesize union and intersection types so they can be suffixed with ``[]``."""
    if any(marker in type_expression for marker in _COMPOUND_TYPE_MARKERS) and not (
        type_expression.startswith("{") and type_expression.endswith("}")
    ):
        return f"({type_expression})"
    return type_expression


def join_types(type_expressions: Iterable[str], operator: str) -> str:
    """Join member types with ``|`` or ``&``, dropping empty and repeated members."""
    members: list[str] = []
    for type_expression in type_expressions:
        if type_expression and type_expression not in members:
            members.append(type_expression)
    if not members:
        return TS_ANY
    if len(members) == 1:
        return members[0]
    return f" {operator} ".join(wrap_type(member) for member in members)


def render_object_type(fields: Iterable[tuple[str, str, bool]], indent: int = 0) -> str:
    """Render ``(name, type, required)`` triples as a multi-line object type.

    Returns an empty string when there are no fields.
    """
    pad = " " * indent
    lines = [f"{pad}  {ts_property_key(name)}{'' if required else '?'}: {type_expression};" for name, type_expression, required in fields]
    if not lines:
        return ""
    return "{\n" + "\n".join(lines) + f"\n{pad}}}"
