"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating LocalizationManager call sites.

Python 3.13+.
"""

from collections.abc import Callable
from typing import TypeAlias

__all__ = [
    "LocaleCode",
    "LocaleProvider",
    "LocalizationCode",
    "LocalizedString",
]

LocaleCode: TypeAlias = str
"""Opaque locale identifier (e.g., 'en-US', 'de-DE'). Compared by exact equality."""

LocalizationCode: TypeAlias = str
"""Identifier of a single localizable string within a locale (e.g., 'hw')."""

LocalizedString: TypeAlias = str
"""Resolved human-readable text."""

LocaleProvider: TypeAlias = Callable[[], LocaleCode]
"""Zero-argument callable returning the current locale, consulted per call."""
