from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScreeningCriteria(BaseModel):
    """Seller-configured requirements attached to a listing."""

    min_credit_score: int = Field(default=0, ge=0)
    no_evictions: bool = False
    no_bankruptcy: bool = False
    no_criminal: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)


class ListingCriteria(BaseModel):
    """Listing identifier paired with its screening criteria."""

    listing_id: str
    criteria: ScreeningCriteria = Field(default_factory=ScreeningCriteria)

    model_config = ConfigDict(extra="allow")
