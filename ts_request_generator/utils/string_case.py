"""
String case conversion utilities for TypeScript code generation.

This module provides the case conversions used to derive TypeScript type
names, identifiers and enum members from names found in API descriptions.

Based on https://github.com/okunishinishi/python-stringcase
with additional TypeScript-specific naming conventions.
"""

import re
from collections.abc import Callable
from typing import Final

# Regex patterns for case conversion
_SNAKE_CASE_DELIMITER_PATTERN: Final = re.compile(r"[\-\.\s\[\]]+")
_ACRONYM_PATTERN: Final = re.compile(r"([A-Z])([A-Z][a-z])")
_LOWER_UPPER_PATTERN: Final = re.compile(r"([a-z0-9])([A-Z])")
_NON_IDENTIFIER_PATTERN: Final = re.compile(r"[^a-zA-Z0-9_$]")
_IDENTIFIER_PATTERN: Final = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_WORD_SPLIT_PATTERN: Final = re.compile(r"[\-\.\s\[\]_]+")

# Reserved words that cannot be used as binding names in TypeScript
TS_RESERVED_WORDS: Final = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "null",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        # Strict mode reserved words
        "implements",
        "interface",
        "let",
        "package",
        "private",
        "protected",
        "public",
        "static",
        "yield",
    }
)


def _convert_if_not_empty(string: str | None, conversion_func: Callable[[str], str]) -> str:
    """Safely convert a string, returning empty string if input is None or empty."""
    return conversion_func(string) if string else ""


def snakecase(string: str | None) -> str:
    """Convert string into snake_case.

    Handles various formats including camelCase with acronyms.

    Args:
        string: String to convert.

    Returns:
        Snake case string.

    Examples:
        >>> snakecase("HelloWorld")
        'hello_world'
        >>> snakecase("hello-world")
        'hello_world'
        >>> snakecase("getHTTPResponse")
        'get_http_response'
    """

    def _snakecase(s: str) -> str:
        s = _SNAKE_CASE_DELIMITER_PATTERN.sub("_", s).strip("_")
        s = _ACRONYM_PATTERN.sub(r"\1_\2", s)
        s = _LOWER_UPPER_PATTERN.sub(r"\1_\2", s)
        return s.lower()

    return _convert_if_not_empty(string, _snakecase)


def camelcase(string: str | None) -> str:
    """Convert string into camel case.

    Args:
        string: String to convert.

    Returns:
        Camel case string.

    Examples:
        >>> camelcase("hello_world")
        'helloWorld'
        >>> camelcase("pet-id")
        'petId'
    """

    def _camelcase(s: str) -> str:
        words = [word for word in snakecase(s).split("_") if word]
        if not words:
            return ""
        return words[0] + "".join(word.capitalize() for word in words[1:])

    return _convert_if_not_empty(string, _camelcase)


def capitalcase(string: str | None) -> str:
    """Convert string into capital case (first letter uppercase).

    Unlike :func:`pascalcase` the rest of the string is left untouched, so
    ``capitalcase("petStatus")`` is ``'PetStatus'``.
    """

    def _capitalcase(s: str) -> str:
        return s[0].upper() + s[1:]

    return _convert_if_not_empty(string, _capitalcase)


def pascalcase(string: str | None) -> str:
    """Convert string into PascalCase.

    Args:
        string: String to convert.

    Returns:
        PascalCase string.

    Examples:
        >>> pascalcase("hello_world")
        'HelloWorld'
        >>> pascalcase("pet.Category")
        'PetCategory'
    """

    def _pascalcase(s: str) -> str:
        return "".join(capitalcase(word) for word in _WORD_SPLIT_PATTERN.split(s) if word)

    return _convert_if_not_empty(string, _pascalcase)


def is_valid_ts_identifier(name: str) -> bool:
    """Check if a string can be used as-is as a TypeScript binding name."""
    return bool(_IDENTIFIER_PATTERN.match(name)) and name not in TS_RESERVED_WORDS


def ts_identifier(name: str | None) -> str:
    """Normalize name to be a valid TypeScript identifier.

    Valid identifiers are returned unchanged. Anything else is converted to
    camelCase, stripped of invalid characters and prefixed with an underscore
    if it would start with a digit or collide with a reserved word.

    Examples:
        >>> ts_identifier("petId")
        'petId'
        >>> ts_identifier("pet-id")
        'petId'
        >>> ts_identifier("2fa")
        '_2fa'
        >>> ts_identifier("default")
        '_default'
    """

    def _normalize(s: str) -> str:
        if is_valid_ts_identifier(s):
            return s
        normalized = _NON_IDENTIFIER_PATTERN.sub("", camelcase(s)) or "_"
        if normalized[0].isdigit() or normalized in TS_RESERVED_WORDS:
            normalized = f"_{normalized}"
        return normalized

    return _convert_if_not_empty(name, _normalize)


def ts_type_name(name: str | None) -> str:
    """Build a PascalCase TypeScript type name from a schema or parameter name.

    Examples:
        >>> ts_type_name("pet")
        'Pet'
        >>> ts_type_name("order-status")
        'OrderStatus'
        >>> ts_type_name("1stPlace")
        '_1stPlace'
    """

    def _type_name(s: str) -> str:
        normalized = _NON_IDENTIFIER_PATTERN.sub("", pascalcase(s)) or "_"
        if normalized[0].isdigit():
            normalized = f"_{normalized}"
        return normalized

    return _convert_if_not_empty(name, _type_name)
