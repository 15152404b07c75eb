"""Concrete localization sources.

Submodules:
    xml_file - XmlFileLocalizationSource (immutable table parsed from XML)
    catalog  - CatalogLocalizationSource (compiled gettext catalogs via Babel)

Python 3.13+.
"""

from l10nresolver.sources.catalog import CatalogLocalizationSource
from l10nresolver.sources.xml_file import SupportsRead, XmlFileLocalizationSource

__all__ = [
    "CatalogLocalizationSource",
    "SupportsRead",
    "XmlFileLocalizationSource",
]
