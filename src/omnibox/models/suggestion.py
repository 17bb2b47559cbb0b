from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Suggestion(BaseModel):
    """A navigable option shown under the typed text."""

    model_config = ConfigDict(frozen=True)

    destination: str  # URL opened when the suggestion is chosen
    description: str  # Display text, may carry <match> markup
