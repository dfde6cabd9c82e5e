"""Pydantic domain models for errorgen."""

from errorgen.models.definition import ErrorDefinition
from errorgen.models.errors import Diagnostic, DiagnosticError, DiagnosticKind, SourceSpan
from errorgen.models.options import DuplicateIdPolicy, ExpansionOptions, Visibility

__all__ = [
    "Diagnostic",
    "DiagnosticError",
    "DiagnosticKind",
    "DuplicateIdPolicy",
    "ErrorDefinition",
    "ExpansionOptions",
    "SourceSpan",
    "Visibility",
]
