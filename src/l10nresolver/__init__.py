"""l10nresolver - ordered-fallback resolution of localized strings.

Looks up a human-readable string for a (code, locale) pair by consulting
registered sources in registration order; the first source that has the
entry wins.

Public API:
    LocalizationManager - Resolution engine (get_string / try_get_string)
    LocalizationSource - Protocol every source implements
    XmlFileLocalizationSource - Source parsed from an XML document
    CatalogLocalizationSource - Source backed by compiled gettext catalogs

Exceptions:
    LocalizationError - Base exception class
    LocalizedStringNotFoundError - No source has the requested string
    MalformedSourceError - Source document is invalid
    SourceMalfunctionError - Source's backing medium cannot be consulted

Submodules:
    l10nresolver.diagnostics - Diagnostic codes, templates and formatting
    l10nresolver.locale_utils - Locale conversion and current-locale detection
    l10nresolver.types - Type aliases for annotations
"""

from .diagnostics import (
    LocalizationError,
    LocalizedStringNotFoundError,
    MalformedSourceError,
    SourceMalfunctionError,
)
from .manager import LocalizationManager, LocalizationSource
from .sources import CatalogLocalizationSource, XmlFileLocalizationSource

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("l10n-resolver")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CatalogLocalizationSource",
    "LocalizationError",
    "LocalizationManager",
    "LocalizationSource",
    "LocalizedStringNotFoundError",
    "MalformedSourceError",
    "SourceMalfunctionError",
    "XmlFileLocalizationSource",
    "__version__",
]
