"""Review state model: the per-card SM-2 scheduling record."""

from dataclasses import dataclass, asdict, fields
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, NamedTuple, Optional

from srs.constants import DEFAULT_CONFIG, SchedulerConfig
from srs.ratings import Rating
from srs.timeutil import Instant, as_utc, parse_datetime, utc_date


class CardStatus(str, Enum):
    """Where a card sits in the review cycle, derived from its state."""
    NEW = "new"
    REVIEW = "review"
    RELEARNING = "relearning"  # last review was a lapse


@dataclass(frozen=True)
class ReviewState:
    """
    Immutable scheduling state for one card.

    next_review_at is a UTC calendar day; the card is due once the UTC date
    reaches it. last_reviewed_at is None until the first review.
    Transitions return new instances (see srs.scheduler).
    """
    easiness_factor: float
    interval_days: int
    repetition_count: int
    next_review_at: date
    last_reviewed_at: Optional[datetime] = None
    lapse_count: int = 0
    review_count: int = 0

    def __post_init__(self):
        if isinstance(self.easiness_factor, bool) or not isinstance(self.easiness_factor, (int, float)):
            raise ValueError(f"easiness_factor must be a number, got {self.easiness_factor!r}")
        if self.easiness_factor <= 0:
            raise ValueError(f"easiness_factor must be positive, got {self.easiness_factor}")
        for name in ('interval_days', 'repetition_count', 'lapse_count', 'review_count'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        if isinstance(self.next_review_at, datetime) or not isinstance(self.next_review_at, date):
            raise ValueError(f"next_review_at must be a date, got {self.next_review_at!r}")
        if self.last_reviewed_at is not None:
            if not isinstance(self.last_reviewed_at, datetime):
                raise ValueError(f"last_reviewed_at must be a datetime, got {self.last_reviewed_at!r}")
            # frozen: bypass __setattr__ to store the normalised value
            object.__setattr__(self, 'last_reviewed_at', as_utc(self.last_reviewed_at))

    @property
    def is_new(self) -> bool:
        return self.last_reviewed_at is None

    @property
    def status(self) -> CardStatus:
        if self.is_new:
            return CardStatus.NEW
        if self.repetition_count == 0:
            return CardStatus.RELEARNING
        return CardStatus.REVIEW

    def is_due(self, now: Optional[Instant] = None) -> bool:
        return utc_date(now) >= self.next_review_at

    def to_dict(self) -> Dict:
        d = asdict(self)
        d['next_review_at'] = self.next_review_at.isoformat()
        d['last_reviewed_at'] = (
            self.last_reviewed_at.isoformat() if self.last_reviewed_at else None
        )
        # derived; ignored by from_dict
        d['status'] = self.status.value
        return d

    @classmethod
    def from_dict(cls, data: Dict) -> 'ReviewState':
        known = {f.name for f in fields(cls)}
        data = {k: v for k, v in data.items() if k in known}
        if isinstance(data.get('next_review_at'), str):
            data['next_review_at'] = date.fromisoformat(data['next_review_at'])
        if isinstance(data.get('last_reviewed_at'), str):
            data['last_reviewed_at'] = parse_datetime(data['last_reviewed_at'])
        try:
            return cls(**data)
        except TypeError as e:
            # missing required fields
            raise ValueError(str(e)) from None


class ReviewEvent(NamedTuple):
    """One learner rating; the input that drives a single transition."""
    card_id: str
    rating: Rating
    reviewed_at: datetime


def create_initial_state(
    now: Optional[Instant] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> ReviewState:
    """State for a never-reviewed card, due immediately."""
    return ReviewState(
        easiness_factor=config.initial_ease,
        interval_days=0,
        repetition_count=0,
        next_review_at=utc_date(now),
        last_reviewed_at=None,
    )


def due_date_after(reviewed_at: datetime, interval_days: int) -> date:
    """UTC calendar day that is interval_days after reviewed_at."""
    return as_utc(reviewed_at).date() + timedelta(days=interval_days)
