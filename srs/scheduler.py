"""SM-2 spaced repetition scheduler."""

import math
from dataclasses import replace
from datetime import date
from typing import Any, Dict, NamedTuple, Optional

from srs.constants import DEFAULT_CONFIG, SchedulerConfig
from srs.display import interval_display
from srs.models import ReviewState, due_date_after
from srs.ratings import Rating
from srs.timeutil import Instant, resolve_now


class Projection(NamedTuple):
    """Outcome of one hypothetical rating."""
    state: ReviewState
    due_at: date


def round_half_up(value: float) -> int:
    """Round to the nearest whole day, ties away from zero (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def next_ease(ease_factor: float, rating: int, config: SchedulerConfig = DEFAULT_CONFIG) -> float:
    """
    SM-2 ease adjustment:
        EF' = EF + (0.1 - (5-q) * (0.08 + (5-q) * 0.02))
    clamped to the configured floor. No ceiling.
    """
    miss = 5 - rating
    new_ease = ease_factor + (0.1 - miss * (0.08 + miss * 0.02))
    return max(config.minimum_ease, round(new_ease, config.ease_precision))


def next_interval(state: ReviewState, rating: Rating, config: SchedulerConfig = DEFAULT_CONFIG) -> int:
    """Interval in days after rating, using the pre-update ease and interval."""
    if rating < config.lapse_threshold:
        return config.lapse_interval_days

    if state.repetition_count == 0:
        interval = config.first_interval_days
    elif state.repetition_count == 1:
        interval = config.second_interval_days
    else:
        interval = round_half_up(state.interval_days * state.easiness_factor)

    if config.maximum_interval_days is not None:
        # A cap lowered after scheduling stops growth but never shortens a success
        cap = max(config.maximum_interval_days, state.interval_days)
        interval = min(interval, cap)
    return interval


def compute_next_state(
    state: ReviewState,
    rating: Any,
    reviewed_at: Optional[Instant] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> ReviewState:
    """
    Apply one review to state and return the resulting state.

    Args:
        state:       Current review state (may be the initial state)
        rating:      Recall quality 0-5 (Rating or int)
        reviewed_at: Review instant; wall clock if omitted. May precede
                     state.last_reviewed_at (backfill).
        config:      Scheduler constants

    Returns:
        A new ReviewState; the input is not modified.

    Raises:
        InvalidRating if rating is not an integer in 0-5.
    """
    grade = Rating.coerce(rating)
    when = resolve_now(reviewed_at)

    interval = next_interval(state, grade, config)
    lapsed = grade < config.lapse_threshold

    return replace(
        state,
        easiness_factor=next_ease(state.easiness_factor, grade, config),
        interval_days=interval,
        repetition_count=0 if lapsed else state.repetition_count + 1,
        next_review_at=due_date_after(when, interval),
        last_reviewed_at=when,
        lapse_count=state.lapse_count + 1 if lapsed else state.lapse_count,
        review_count=state.review_count + 1,
    )


def preview_intervals(
    state: ReviewState,
    now: Optional[Instant] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Dict[Rating, Projection]:
    """
    Project the outcome of every rating without committing any of them.

    "now" is sampled once so all six projections share the same instant.
    """
    when = resolve_now(now)
    previews = {}
    for rating in Rating:
        projected = compute_next_state(state, rating, when, config)
        previews[rating] = Projection(projected, projected.next_review_at)
    return previews


def preview_labels(
    state: ReviewState,
    now: Optional[Instant] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Dict[Rating, str]:
    """Short interval labels per rating, e.g. {Rating.GOOD: '6d'}, for rating buttons."""
    return {
        rating: interval_display(p.state.interval_days)
        for rating, p in preview_intervals(state, now, config).items()
    }
