from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class RepositoryListEntry(BaseModel):
    """Cached repository names for an organization."""

    organization_url: str
    repositories: list[str]
    fetched_at: datetime
    expires_at: datetime
    stale: bool = False
