"""
TypeScript Code Generator Module

This module provides Jinja2-based emission of request declarations and
type declarations from resolved operations.
"""

from .template_engine import RequestCodeGenerator, TSTemplateEngine

__all__ = [
    "RequestCodeGenerator",
    "TSTemplateEngine",
]
