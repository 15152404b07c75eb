"""Lookup capability every localization source implements.

Python 3.13+. Zero external dependencies.
"""

from typing import Protocol, runtime_checkable

from l10nresolver.types import LocaleCode, LocalizationCode, LocalizedString

__all__ = ["LocalizationSource"]


@runtime_checkable
class LocalizationSource(Protocol):
    """Protocol for stores that map (code, locale) to a localized string.

    This is a Protocol (structural typing) rather than ABC so that wrappers
    around third-party mechanisms can participate without inheriting from
    anything in this package.

    The two lookup forms must agree: if ``try_get_localized_string`` returns
    ``(True, value)``, ``get_localized_string`` returns ``value``; if it
    returns ``(False, None)``, ``get_localized_string`` raises
    LocalizedStringNotFoundError.

    Lookups are pure queries. Absence is a normal outcome, not an error.
    Either form may raise SourceMalfunctionError when the backing medium
    itself cannot be consulted.

    Example:
        >>> class DictSource:
        ...     def __init__(self, table):
        ...         self._table = table
        ...     def try_get_localized_string(self, code, locale):
        ...         value = self._table.get((code, locale))
        ...         return (value is not None, value)
        ...     def get_localized_string(self, code, locale):
        ...         found, value = self.try_get_localized_string(code, locale)
        ...         if not found:
        ...             raise LocalizedStringNotFoundError(...)
        ...         return value
        >>> manager = LocalizationManager(DictSource({("hw", "en-US"): "Hello"}))
    """

    def try_get_localized_string(
        self, code: LocalizationCode, locale: LocaleCode
    ) -> tuple[bool, LocalizedString | None]:
        """Look up a localized string without raising on absence.

        Args:
            code: Localization code (e.g., 'hw')
            locale: Locale identifier (e.g., 'en-US')

        Returns:
            ``(True, value)`` if present, ``(False, None)`` otherwise

        Raises:
            SourceMalfunctionError: If the backing medium cannot be consulted
        """
        ...

    def get_localized_string(self, code: LocalizationCode, locale: LocaleCode) -> LocalizedString:
        """Look up a localized string, raising on absence.

        Args:
            code: Localization code
            locale: Locale identifier

        Returns:
            The localized string

        Raises:
            LocalizedStringNotFoundError: If the source has no such entry
            SourceMalfunctionError: If the backing medium cannot be consulted
        """
        ...
