"""Shared constants for l10nresolver.

Centralizes construction-time defaults so sources and the manager agree on
one value for each setting.

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # XML document layout
    "DEFAULT_GROUP_TAG",
    "DEFAULT_NAME_ATTRIBUTE",
    # Input limits
    "DEFAULT_READ_CHUNK_SIZE",
    "MAX_SOURCE_SIZE",
    # Catalog layout
    "DEFAULT_CATALOG_DOMAIN",
    "CATALOG_SUBDIRECTORY",
    # Locale defaults
    "DEFAULT_LOCALE",
]

# ============================================================================
# XML DOCUMENT LAYOUT
# ============================================================================

# Direct children of the root with this tag are locale groups:
#   <localization><culture name="en-US"><hw>Hello</hw></culture></localization>
DEFAULT_GROUP_TAG: str = "culture"

# Attribute on a locale group carrying the locale identifier.
DEFAULT_NAME_ATTRIBUTE: str = "name"

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Characters (or bytes, for binary streams) requested per read() call.
DEFAULT_READ_CHUNK_SIZE: int = 64 * 1024

# Upper bound on total document size. Larger inputs are rejected as malformed
# before the parser sees the excess.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# CATALOG LAYOUT
# ============================================================================

# gettext domain; catalogs live at {directory}/{locale}/LC_MESSAGES/{domain}.mo
DEFAULT_CATALOG_DOMAIN: str = "messages"
CATALOG_SUBDIRECTORY: str = "LC_MESSAGES"

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Returned by get_current_locale() when the OS locale cannot be determined.
DEFAULT_LOCALE: str = "en-US"
