from __future__ import annotations

from omnibox.models.cache import RepositoryListEntry
from omnibox.models.suggestion import Suggestion

__all__ = [
    # cache
    "RepositoryListEntry",
    # suggestions
    "Suggestion",
]
