"""Localization exception hierarchy with structured diagnostics.

Three outcomes are distinguished:
    LocalizedStringNotFoundError - no source produced a value (throwing API only)
    MalformedSourceError - a source document could not be built into a table
    SourceMalfunctionError - a source's backing medium could not be consulted

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LocalizationError(Exception):
    """Base exception for all localization errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizationError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class LocalizedStringNotFoundError(LocalizationError):
    """No value exists for the requested (code, locale) pair.

    Raised by the strict lookup forms only. Non-throwing forms report the
    same outcome as ``(False, None)``.

    Attributes:
        code: Localization code that was requested
        locale: Locale that was requested
        sources_tried: Number of sources consulted before giving up
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        code: str = "",
        locale: str = "",
        sources_tried: int = 0,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.locale = locale
        self.sources_tried = sources_tried


class MalformedSourceError(LocalizationError):
    """Source document is syntactically invalid or violates table constraints.

    Covers markup syntax errors, a locale group without a name, duplicate
    codes within one locale and duplicate locale names. The low-level cause,
    when there is one, is available as ``__cause__``.

    Attributes:
        source_path: Description of the document, if the caller supplied one
    """

    def __init__(self, message: str | Diagnostic, *, source_path: str | None = None) -> None:
        super().__init__(message)
        self.source_path = source_path


class SourceMalfunctionError(LocalizationError):
    """A source's backing medium cannot be consulted during lookup.

    Distinct from absence: the resolution engine never treats this as
    "try the next source" and lets it propagate to the caller.

    Attributes:
        locale: Locale being looked up when the medium failed
        source_path: Location of the unusable resource, if known
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale: str = "",
        source_path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.locale = locale
        self.source_path = source_path
