"""SM-2 spaced repetition scheduling engine."""

from srs.constants import ALGORITHM_VERSION, DEFAULT_CONFIG, SchedulerConfig
from srs.display import interval_display, relative_due
from srs.models import CardStatus, ReviewEvent, ReviewState, create_initial_state
from srs.ratings import InvalidRating, Rating
from srs.scheduler import (
    Projection,
    compute_next_state,
    preview_intervals,
    preview_labels,
)

__all__ = [
    "ALGORITHM_VERSION",
    "CardStatus",
    "DEFAULT_CONFIG",
    "InvalidRating",
    "Projection",
    "Rating",
    "ReviewEvent",
    "ReviewState",
    "SchedulerConfig",
    "compute_next_state",
    "create_initial_state",
    "interval_display",
    "preview_intervals",
    "preview_labels",
    "relative_due",
]
