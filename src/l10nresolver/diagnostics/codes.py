"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Not-found errors (absent localization code or locale)
        2000-2999: Malformed source errors (raised while building a source)
        3000-3999: Source malfunction errors (backing medium unusable at lookup)
    """

    # Not-found errors (1000-1999)
    STRING_NOT_FOUND = 1001
    STRING_NOT_IN_SOURCE = 1002

    # Malformed source errors (2000-2999)
    XML_SYNTAX_ERROR = 2001
    LOCALE_NAME_MISSING = 2002
    DUPLICATE_CODE = 2003
    DUPLICATE_LOCALE = 2004
    SOURCE_TOO_LARGE = 2005
    SOURCE_UNDECODABLE = 2006

    # Source malfunction errors (3000-3999)
    CATALOG_MISSING = 3001
    CATALOG_UNREADABLE = 3002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        localization_code: Localization code involved (lookup errors)
        locale: Locale involved (lookup and locale-group errors)
        source_path: Document or catalog location (source errors)
        line: 1-indexed line of a syntax error, when the parser reports one
        column: 1-indexed column of a syntax error, when the parser reports one
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    localization_code: str | None = None
    locale: str | None = None
    source_path: str | None = None
    line: int | None = None
    column: int | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[DUPLICATE_CODE]: Localization code 'hw' is defined twice for locale 'en-US'
              --> line 4, column 8
              = help: Remove or rename one of the duplicate elements

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
