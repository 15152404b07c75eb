"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Compiler-style multi-line output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent leaking large document fragments
            (control characters are always escaped)
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> diagnostic = ErrorTemplate.duplicate_code("hw", "en-US")
        >>> print(DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic))
        DUPLICATE_CODE: Localization code 'hw' is defined twice for locale 'en-US'
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic."""
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"
        parts = [f"{severity}[{diagnostic.code.name}]: {self._maybe_sanitize(diagnostic.message)}"]

        location = self._location(diagnostic)
        if location:
            parts.append(f"  --> {location}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._maybe_sanitize(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        return f"{diagnostic.code.name}: {self._maybe_sanitize(diagnostic.message)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        if diagnostic.localization_code is not None:
            data["localization_code"] = diagnostic.localization_code
        if diagnostic.locale is not None:
            data["locale"] = diagnostic.locale
        if diagnostic.source_path is not None:
            data["source_path"] = diagnostic.source_path
        if diagnostic.line is not None:
            data["line"] = diagnostic.line
            data["column"] = diagnostic.column
        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    @staticmethod
    def _location(diagnostic: Diagnostic) -> str | None:
        position = None
        if diagnostic.line is not None:
            position = f"line {diagnostic.line}, column {diagnostic.column}"
        if diagnostic.source_path:
            path = DiagnosticFormatter._escape_control(diagnostic.source_path)
            return f"{path}, {position}" if position else path
        return position

    @staticmethod
    def _escape_control(text: str) -> str:
        # repr() escapes control characters (no ANSI or newline injection) but keeps
        # non-ASCII letters readable
        return "".join(repr(ch)[1:-1] if unicodedata.category(ch) == "Cc" else ch for ch in text)

    def _maybe_sanitize(self, text: str) -> str:
        text = self._escape_control(text)
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
