"""
TypeScript Request Generator

A Jinja2-based generator that produces typed ``createRequestAction``
declarations, plus the enums and interfaces they reference, from Swagger
and OpenAPI descriptions.
"""

from .errors import (
    ConfigurationError,
    DuplicateOperationIdError,
    GenerationError,
    GenerationReport,
    MissingOperationIdError,
    ParameterClassificationWarning,
    UnresolvedReferenceError,
)
from .generator import RequestCodeGenerator, TSTemplateEngine
from .parser import OASParser, ParsedSpec
from .resolver import PathResolver, ResolvedOperation, SchemaTypeResolver

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "DuplicateOperationIdError",
    "GenerationError",
    "GenerationReport",
    "MissingOperationIdError",
    "OASParser",
    "ParameterClassificationWarning",
    "ParsedSpec",
    "PathResolver",
    "RequestCodeGenerator",
    "ResolvedOperation",
    "SchemaTypeResolver",
    "TSTemplateEngine",
    "UnresolvedReferenceError",
]
