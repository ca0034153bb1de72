"""
Resolver Module

This module turns parsed operations into resolved request descriptions and
collects the named types discovered along the way.
"""

from .parameters import ParameterClassifier, ParameterGroups, RequestField, TypeDeriver
from .path_resolver import (
    PathResolver,
    ResolvedOperation,
    derive_base_path_from_server,
    get_request_url,
)
from .schema_resolver import (
    PropertyDefinition,
    ResolutionContext,
    SchemaTypeResolver,
    TypeDefinition,
    resolve_schema_type,
)

__all__ = [
    "ParameterClassifier",
    "ParameterGroups",
    "PathResolver",
    "PropertyDefinition",
    "RequestField",
    "ResolutionContext",
    "ResolvedOperation",
    "SchemaTypeResolver",
    "TypeDefinition",
    "TypeDeriver",
    "derive_base_path_from_server",
    "get_request_url",
    "resolve_schema_type",
]
