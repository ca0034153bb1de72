"""
Jinja2 filters for TypeScript code generation.

This module provides the custom filters used by the request templates to
render identifiers, string literals, enum members and doc comments.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from typing import Any, Final

from ts_request_generator.utils.string_case import ts_identifier
from ts_request_generator.utils.ts_syntax import ts_literal, ts_property_key

_DOC_COMMENT_TERMINATOR: Final = "*/"
_ENUM_MEMBER_PATTERN: Final = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def ts_doc_comment(text: str, indent: int = 0) -> str:
    """Convert text to a TSDoc comment.

    Args:
        text: The text to convert to a doc comment.
        indent: Number of spaces for base indentation.

    Returns:
        Formatted doc comment string.

    Example:
        >>> ts_doc_comment("Find pet by ID")
        '/** Find pet by ID */'
        >>> ts_doc_comment("Line 1\\nLine 2")
        '/**\\n * Line 1\\n * Line 2\\n */'
    """
    if not text:
        return ""

    lines = [line.strip().replace(_DOC_COMMENT_TERMINATOR, "*\\/") for line in text.strip().split("\n")]
    indent_str = " " * indent

    if len(lines) == 1:
        return f"{indent_str}/** {lines[0]} */"

    body = "\n".join(f"{indent_str} * {line}".rstrip() for line in lines)
    return f"{indent_str}/**\n{body}\n{indent_str} */"


def ts_string(text: str) -> str:
    """Format text as a double-quoted TypeScript string literal."""
    return json.dumps(text)


def ts_template_literal(text: str) -> str:
    """Escape text for use inside a template literal, keeping ``${...}`` markers."""
    return text.replace("\\", "\\\\").replace("`", "\\`")


def ts_binding_object(names: Iterable[str]) -> str:
    """Render names as ``{ a, b }``, usable both as a destructuring pattern and an object literal.

    Names that are not identifiers are bound to their converted identifier,
    e.g. ``{ "pet-id": petId }``. Repeated names are listed once.

    Example:
        >>> ts_binding_object(["id", "pet-id", "id"])
        '{ id, "pet-id": petId }'
        >>> ts_binding_object([])
        ''
    """
    entries: list[str] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        identifier = ts_identifier(name)
        entries.append(name if identifier == name else f"{ts_property_key(name)}: {identifier}")

    if not entries:
        return ""
    return "{ " + ", ".join(entries) + " }"


def _numeric_member_name(text: str) -> str:
    return "_" + text.replace("-", "minus").replace(".", "_")


def _is_numeric_text(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


def ts_enum_member(value: Any) -> str:  # noqa: ANN401
    """Derive an enum member name from an enum value.

    TypeScript rejects enum members with numeric names, quoted or not, so
    numbers and numeric strings get an underscore-prefixed name instead.

    Example:
        >>> ts_enum_member("available")
        'available'
        >>> ts_enum_member("in-stock")
        '"in-stock"'
        >>> ts_enum_member(-1)
        '_minus1'
        >>> ts_enum_member("200")
        '_200'
    """
    text = value if isinstance(value, str) else str(value)
    if isinstance(value, str) and _ENUM_MEMBER_PATTERN.match(value):
        return value
    if not isinstance(value, str) or _is_numeric_text(value):
        member = _numeric_member_name(text)
        if _ENUM_MEMBER_PATTERN.match(member):
            return member
    return json.dumps(text)


def _suffixed_member(member: str, suffix: int) -> str:
    if member.startswith('"'):
        return json.dumps(f"{json.loads(member)}_{suffix}")
    return f"{member}_{suffix}"


def ts_enum_members(values: Iterable[Any]) -> list[tuple[str, Any]]:
    """Pair each distinct enum value with a member name unique within the enum.

    Example:
        >>> ts_enum_members([-1, "_minus1", -1])
        [('_minus1', -1), ('_minus1_2', '_minus1')]
    """
    members: list[tuple[str, Any]] = []
    seen_values: set[tuple[bool, Any]] = set()
    used_names: set[str] = set()
    for value in values:
        value_key = (isinstance(value, str), value)
        if value_key in seen_values:
            continue
        seen_values.add(value_key)

        base = ts_enum_member(value)
        member = base
        suffix = 2
        while member in used_names:
            member = _suffixed_member(base, suffix)
            suffix += 1
        used_names.add(member)
        members.append((member, value))
    return members


# Register filters that will be available in Jinja templates
FILTERS = {
    "ts_doc_comment": ts_doc_comment,
    "ts_string": ts_string,
    "ts_template_literal": ts_template_literal,
    "ts_binding_object": ts_binding_object,
    "ts_enum_members": ts_enum_members,
    "ts_literal": ts_literal,
    "ts_property_key": ts_property_key,
    "ts_identifier": ts_identifier,
}
