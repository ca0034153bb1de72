"""
Error taxonomy for request generation.

Validation-class problems are not raised while walking a document. They are
collected on a :class:`GenerationReport` so a single bad operation does not
prevent the rest of the module from being generated.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field


class GenerationError(Exception):
    """Base class for problems found while generating request declarations."""

    def __init__(self, message: str, *, operation_id: str | None = None, location: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation_id = operation_id
        self.location = location

    def __str__(self) -> str:
        context = [part for part in (self.location, self.operation_id) if part]
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class ConfigurationError(GenerationError):
    """The document lacks something the whole pass depends on, e.g. a server."""


class UnresolvedReferenceError(GenerationError):
    """A parameter, response or schema reference could not be resolved."""


class DuplicateOperationIdError(GenerationError):
    """Two operations share an operationId and would emit the same declaration."""


class MissingOperationIdError(GenerationError):
    """An operation has no operationId to name its declaration after."""


class ParameterClassificationWarning(UserWarning):
    """A parameter was dropped because its location is not recognized."""


@dataclass
class GenerationReport:
    """Errors and warnings collected during one resolution and emission pass."""

    errors: list[GenerationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def record_error(self, error: GenerationError) -> None:
        self.errors.append(error)

    def record_warning(self, message: str, category: type[Warning] = ParameterClassificationWarning) -> None:
        self.warnings.append(message)
        warnings.warn(message, category, stacklevel=3)

    def errors_for(self, operation_id: str) -> list[GenerationError]:
        return [error for error in self.errors if error.operation_id == operation_id]
