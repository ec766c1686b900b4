"""Pydantic request/response schemas for the scheduler API."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ---- Review state ----

class ReviewStateSchema(BaseModel):
    easiness_factor: float
    interval_days: int = Field(..., ge=0)
    repetition_count: int = Field(..., ge=0)
    next_review_at: date
    last_reviewed_at: Optional[datetime] = None
    lapse_count: int = Field(default=0, ge=0)
    review_count: int = Field(default=0, ge=0)
    # derived from the fields above; ignored on input
    status: Optional[str] = None


# ---- Stateless engine ----

class NextStateRequest(BaseModel):
    state: ReviewStateSchema
    # Range is checked by the engine so the error message is consistent
    rating: int
    reviewed_at: Optional[datetime] = None


class PreviewRequest(BaseModel):
    state: ReviewStateSchema
    now: Optional[datetime] = None


class PreviewItem(BaseModel):
    rating: int
    name: str
    label: str
    state: ReviewStateSchema
    due_at: date


class PreviewResponse(BaseModel):
    previews: List[PreviewItem]


# ---- Stored cards ----

class CardStateResponse(BaseModel):
    card_id: str
    state: ReviewStateSchema
    relative_due: str


class CardReviewRequest(BaseModel):
    rating: int
    reviewed_at: Optional[datetime] = None


class DueCardsResponse(BaseModel):
    as_of: date
    due_count: int
    cards: List[CardStateResponse]


class HealthResponse(BaseModel):
    ok: bool
