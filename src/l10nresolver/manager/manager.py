"""Ordered-fallback resolution across localization sources.

LocalizationManager owns a prioritized list of LocalizationSource objects and
answers lookups with the value from the earliest-registered source that has
one. Sources never know they are registered.

Registration policy:
    register_source() is a plain append. Registering the same instance twice
    produces two registry entries; the later entry can never change a result
    because the earlier one answers first. No identity tracking is done.

Thread safety:
    Lookups do not mutate the registry and may run concurrently. Registration
    is not synchronized: callers that register sources after sharing a
    manager across threads must provide their own lock.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from l10nresolver.diagnostics import ErrorTemplate, LocalizedStringNotFoundError
from l10nresolver.locale_utils import get_current_locale
from l10nresolver.manager.source import LocalizationSource

if TYPE_CHECKING:
    from l10nresolver.types import (
        LocaleCode,
        LocaleProvider,
        LocalizationCode,
        LocalizedString,
    )

__all__ = ["LocalizationManager"]

logger = logging.getLogger(__name__)


class LocalizationManager:
    """Resolve localized strings from registered sources, first match wins.

    Example:
        >>> xml_source = await XmlFileLocalizationSource.create(stream)
        >>> manager = (
        ...     LocalizationManager()
        ...     .register_source(CatalogLocalizationSource("locale"))
        ...     .register_source(xml_source)
        ... )
        >>> manager.get_string("hw", "de-DE")
        'Hallo Welt!'
        >>> manager.try_get_string("missing", "de-DE")
        (False, None)

    Attributes:
        sources: Registered sources in priority order (immutable snapshot)
    """

    __slots__ = ("_locale_provider", "_registered_sources")

    def __init__(
        self,
        source: LocalizationSource | None = None,
        *,
        locale_provider: LocaleProvider = get_current_locale,
    ) -> None:
        """Initialize the manager, optionally seeded with one source.

        Args:
            source: First source to register (optional)
            locale_provider: Called once per lookup that omits a locale.
                Defaults to the OS/environment locale in BCP-47 form.
        """
        self._registered_sources: list[LocalizationSource] = []
        self._locale_provider = locale_provider
        if source is not None:
            self.register_source(source)

    @property
    def sources(self) -> tuple[LocalizationSource, ...]:
        """Registered sources in priority order."""
        return tuple(self._registered_sources)

    def __len__(self) -> int:
        """Number of registry entries (duplicates included)."""
        return len(self._registered_sources)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        names = ", ".join(type(s).__name__ for s in self._registered_sources)
        return f"LocalizationManager(sources=[{names}])"

    def register_source(self, source: LocalizationSource) -> Self:
        """Append a source with the lowest priority so far.

        Args:
            source: Object implementing the LocalizationSource protocol

        Returns:
            This manager, for chaining

        Raises:
            TypeError: If source does not implement the lookup methods
        """
        if not isinstance(source, LocalizationSource):
            msg = (
                "source must implement try_get_localized_string() and "
                f"get_localized_string(), got {type(source).__name__}"
            )
            raise TypeError(msg)

        self._registered_sources.append(source)
        logger.debug(
            "Registered %s at priority %d",
            type(source).__name__,
            len(self._registered_sources) - 1,
        )
        return self

    def get_string(self, code: LocalizationCode, locale: LocaleCode | None = None) -> LocalizedString:
        """Resolve a localized string, raising if no source has it.

        Args:
            code: Localization code
            locale: Locale identifier; the locale provider is consulted if omitted

        Returns:
            Value from the earliest-registered source that has the entry

        Raises:
            LocalizedStringNotFoundError: If every source reports absence
            SourceMalfunctionError: Propagated unchanged from a failing source
        """
        resolved_locale = self._resolve_locale(locale)
        found, value = self._search(code, resolved_locale)
        if found:
            return value  # type: ignore[return-value]

        tried = len(self._registered_sources)
        raise LocalizedStringNotFoundError(
            ErrorTemplate.string_not_found(code, resolved_locale, tried),
            code=code,
            locale=resolved_locale,
            sources_tried=tried,
        )

    def try_get_string(
        self, code: LocalizationCode, locale: LocaleCode | None = None
    ) -> tuple[bool, LocalizedString | None]:
        """Resolve a localized string, reporting absence as ``(False, None)``.

        Same search order and result as get_string(); only the absence
        signalling differs.

        Args:
            code: Localization code
            locale: Locale identifier; the locale provider is consulted if omitted

        Returns:
            ``(True, value)`` or ``(False, None)``

        Raises:
            SourceMalfunctionError: Propagated unchanged from a failing source
        """
        return self._search(code, self._resolve_locale(locale))

    def _resolve_locale(self, locale: LocaleCode | None) -> LocaleCode:
        if locale is not None:
            return locale
        return self._locale_provider()

    def _search(
        self, code: LocalizationCode, locale: LocaleCode
    ) -> tuple[bool, LocalizedString | None]:
        # Only the non-throwing form is called; SourceMalfunctionError propagates.
        for priority, source in enumerate(self._registered_sources):
            found, value = source.try_get_localized_string(code, locale)
            if found:
                logger.debug(
                    "Resolved '%s' for %s from %s at priority %d",
                    code,
                    locale,
                    type(source).__name__,
                    priority,
                )
                return True, value

        logger.debug(
            "'%s' for %s not found in %d source(s)",
            code,
            locale,
            len(self._registered_sources),
        )
        return False, None
