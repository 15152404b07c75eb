"""Diagnostic system for localization errors.

Provides structured error diagnostics with codes, hints and locations.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    LocalizationError,
    LocalizedStringNotFoundError,
    MalformedSourceError,
    SourceMalfunctionError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "LocalizationError",
    "LocalizedStringNotFoundError",
    "MalformedSourceError",
    "OutputFormat",
    "SourceMalfunctionError",
]
