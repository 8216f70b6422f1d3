"""
Pydantic request and response bodies for the Sengoku Chronicles API.

Domain models (``Character``, ``AgeEvent``, ``LifeRules``...) are reused
as-is from ``sengoku.models``; this module only adds the shapes that exist
purely at the HTTP boundary.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from sengoku.creation import Profession
from sengoku.models import AgeEvent, Character, LifeRules, TimeSnapshot


# ---------------------------------------------------------------------------
#  Requests
# ---------------------------------------------------------------------------


class CreateCharacterRequest(BaseModel):
    """Body of POST /characters."""

    name: str = Field(min_length=1, max_length=60)
    clan: str = Field(min_length=1, description="Origin province, e.g. 'owari'")
    profession: Profession = Profession.BLACKSMITH
    user_id: str | None = None
    travel_reason: str = Field("", max_length=500)


class ChoiceRequest(BaseModel):
    """Body of POST /characters/{id}/choices."""

    choice_index: int = Field(ge=0)


class AdvanceRequest(BaseModel):
    """Body of POST /characters/{id}/advance."""

    months: int = Field(12, ge=0, le=12 * 100)


class TravelRequest(BaseModel):
    """Body of POST /characters/{id}/travel."""

    location_id: str = Field(min_length=1)


# ---------------------------------------------------------------------------
#  Responses
# ---------------------------------------------------------------------------


class PendingEventResponse(BaseModel):
    time: TimeSnapshot
    event: AgeEvent | None = None


class TurnResponse(BaseModel):
    character: Character
    log: list[str] = Field(default_factory=list)
    died: bool = False
    death_reason: str | None = None
    next_event: AgeEvent | None = None


class SecretPathSummary(BaseModel):
    id: str
    name: str
    type: str
    description: str
    accessible: bool


# PUT /config/rules accepts the full rules object.
RulesConfig = LifeRules
