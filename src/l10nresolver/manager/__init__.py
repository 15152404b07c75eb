"""Resolution engine and the source capability it depends on.

Submodules:
    source  - LocalizationSource protocol (structural typing)
    manager - LocalizationManager (ordered first-match-wins resolution)

Python 3.13+.
"""

from l10nresolver.manager.manager import LocalizationManager
from l10nresolver.manager.source import LocalizationSource

__all__ = [
    "LocalizationManager",
    "LocalizationSource",
]
