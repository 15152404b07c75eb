"""Localization source backed by compiled gettext catalogs (.mo files).

Catalogs are read with Babel and laid out the gettext way:

    {directory}/{locale}/LC_MESSAGES/{domain}.mo

The source does its own locale matching, which the manager never sees: for
a requested locale it tries the locale as given, its POSIX form, then its
bare language, and uses the first catalog that exists. So a lookup for
"de-DE" is answered from ``de_DE/`` or ``de/`` when ``de-DE/`` is absent.

Thread safety:
    Catalogs are loaded on first use and cached under a lock. The cache is
    not observable through lookups, which remain safe for concurrent callers.

Python 3.13+.
"""

from __future__ import annotations

import logging
import struct
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from babel.messages.mofile import read_mo

from l10nresolver.constants import CATALOG_SUBDIRECTORY, DEFAULT_CATALOG_DOMAIN
from l10nresolver.diagnostics import (
    ErrorTemplate,
    LocalizedStringNotFoundError,
    SourceMalfunctionError,
)
from l10nresolver.locale_utils import language_of, normalize_locale

if TYPE_CHECKING:
    from babel.messages.catalog import Catalog

    from l10nresolver.types import LocaleCode, LocalizationCode, LocalizedString

__all__ = ["CatalogLocalizationSource"]

logger = logging.getLogger(__name__)


class CatalogLocalizationSource:
    """Localization source reading gettext ``.mo`` catalogs from a directory.

    Example:
        >>> source = CatalogLocalizationSource("locale", domain="app")
        >>> source.try_get_localized_string("hw", "ru-RU")
        (True, 'Привет, мир!')

    Args:
        directory: Root directory containing one subdirectory per locale
        domain: gettext domain (catalog file stem)
        require_catalog: If True, a locale with no catalog at all raises
            SourceMalfunctionError instead of reporting absence
    """

    __slots__ = ("_catalogs", "_directory", "_domain", "_lock", "_require_catalog")

    def __init__(
        self,
        directory: str | Path,
        domain: str = DEFAULT_CATALOG_DOMAIN,
        *,
        require_catalog: bool = False,
    ) -> None:
        self._directory = Path(directory)
        self._domain = domain
        self._require_catalog = require_catalog
        # Candidate locale directory -> parsed catalog, or None if no file exists
        self._catalogs: dict[str, Catalog | None] = {}
        self._lock = threading.Lock()

    @property
    def directory(self) -> Path:
        """Catalog root directory."""
        return self._directory

    @property
    def domain(self) -> str:
        """gettext domain."""
        return self._domain

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"CatalogLocalizationSource(directory={str(self._directory)!r}, "
            f"domain={self._domain!r}, require_catalog={self._require_catalog})"
        )

    def try_get_localized_string(
        self, code: LocalizationCode, locale: LocaleCode
    ) -> tuple[bool, LocalizedString | None]:
        """Look up a message id in the best catalog for ``locale``.

        Raises:
            SourceMalfunctionError: If a catalog file is unreadable, or no
                catalog exists and require_catalog is set
        """
        catalog = self._catalog_for(locale)
        if catalog is None:
            return False, None

        message = catalog.get(code)
        if message is None:
            return False, None

        value = message.string
        # Plural entries store one string per form; the singular form answers
        if isinstance(value, (list, tuple)):
            value = value[0] if value else ""
        if not value:
            return False, None
        return True, value

    def get_localized_string(self, code: LocalizationCode, locale: LocaleCode) -> LocalizedString:
        """Look up a message id, raising on absence.

        Raises:
            LocalizedStringNotFoundError: If no catalog entry exists
            SourceMalfunctionError: If the catalog cannot be consulted
        """
        found, value = self.try_get_localized_string(code, locale)
        if not found:
            raise LocalizedStringNotFoundError(
                ErrorTemplate.string_not_in_source(code, locale, type(self).__name__),
                code=code,
                locale=locale,
                sources_tried=1,
            )
        return value  # type: ignore[return-value]

    def _candidates(self, locale: LocaleCode) -> list[str]:
        candidates = [locale]
        posix = normalize_locale(locale)
        if posix not in candidates:
            candidates.append(posix)
        language = language_of(locale)
        if language and language not in candidates:
            candidates.append(language)
        return candidates

    def _catalog_path(self, locale_dir: str) -> Path:
        return self._directory / locale_dir / CATALOG_SUBDIRECTORY / f"{self._domain}.mo"

    def _catalog_for(self, locale: LocaleCode) -> Catalog | None:
        # Reject names that would escape the catalog directory
        if not locale or "/" in locale or "\\" in locale or ".." in locale:
            return self._missing(locale)

        for candidate in self._candidates(locale):
            catalog = self._load(locale, candidate)
            if catalog is not None:
                return catalog
        return self._missing(locale)

    def _missing(self, locale: LocaleCode) -> None:
        if self._require_catalog:
            raise SourceMalfunctionError(
                ErrorTemplate.catalog_missing(locale, self._domain, str(self._directory)),
                locale=locale,
                source_path=str(self._directory),
            )
        logger.debug("No '%s' catalog for locale %s", self._domain, locale)

    def _load(self, locale: LocaleCode, locale_dir: str) -> Catalog | None:
        with self._lock:
            if locale_dir in self._catalogs:
                return self._catalogs[locale_dir]

            path = self._catalog_path(locale_dir)
            if not path.is_file():
                self._catalogs[locale_dir] = None
                return None

            try:
                with path.open("rb") as f:
                    catalog = read_mo(f)
            except (OSError, LookupError, ValueError, struct.error) as e:
                # Failures are not cached; a repaired file is picked up next time
                logger.warning("Cannot read catalog %s: %s", path, e)
                raise SourceMalfunctionError(
                    ErrorTemplate.catalog_unreadable(locale, str(path), str(e)),
                    locale=locale,
                    source_path=str(path),
                ) from e

            logger.debug("Loaded catalog %s (%d messages)", path, len(catalog))
            self._catalogs[locale_dir] = catalog
            return catalog
