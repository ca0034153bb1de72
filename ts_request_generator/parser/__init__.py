"""
API Description Parser Module

This module loads Swagger 2.0 / OpenAPI 3.x documents into the data model
consumed by the request resolvers.
"""

from .oas_parser import OASParser, Operation, Parameter, ParsedSpec, Server, is_http_method

__all__ = [
    "OASParser",
    "Operation",
    "Parameter",
    "ParsedSpec",
    "Server",
    "is_http_method",
]
