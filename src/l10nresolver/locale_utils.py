"""Locale utilities: BCP-47/POSIX conversion and current-locale detection.

The resolution engine treats locales as opaque strings. These helpers sit at
its edges: ``get_current_locale`` is the default locale provider, and the
catalog source uses the conversion helpers for its own directory matching.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from l10nresolver.constants import DEFAULT_LOCALE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_current_locale",
    "language_of",
    "normalize_locale",
    "to_bcp47",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def to_bcp47(locale_code: str) -> str:
    """Convert POSIX locale code to BCP-47 format.

    Example:
        >>> to_bcp47("de_DE")
        'de-DE'
    """
    return locale_code.replace("_", "-")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def language_of(locale_code: str) -> str | None:
    """Return the language subtag of a locale, or None if Babel rejects it.

    Example:
        >>> language_of("de-DE")
        'de'
        >>> language_of("not a locale") is None
        True
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        return get_babel_locale(locale_code).language
    except (UnknownLocaleError, ValueError, TypeError):
        return None


def get_current_locale() -> str:
    """Detect the current locale from the OS and environment variables.

    Default locale provider for LocalizationManager. Called once per lookup
    that omits an explicit locale; never cached, so changes to the process
    environment are picked up by the next call.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    "C" and "POSIX" pseudo-locales are skipped; encoding suffixes are
    stripped.

    Returns:
        Locale in BCP-47 form (e.g., "de-DE"), DEFAULT_LOCALE if undeterminable.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        code = (system_locale or "").split(".")[0]
        if code and code not in ("C", "POSIX"):
            return to_bcp47(code)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        code = os.environ.get(var, "").split(".")[0]
        if code and code not in ("C", "POSIX"):
            return to_bcp47(code)

    return DEFAULT_LOCALE
