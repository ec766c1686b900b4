"""Scheduler service wrappers -- all return JSON-serializable dicts."""

import logging
from datetime import date, datetime
from typing import Dict, Optional

from srs.constants import DEFAULT_CONFIG, SchedulerConfig
from srs.display import interval_display, relative_due
from srs.models import ReviewState, create_initial_state
from srs.ratings import InvalidRating
from srs.scheduler import compute_next_state, preview_intervals
from srs.storage import ReviewStateStore
from srs.timeutil import utc_date

logger = logging.getLogger("pluckk.schedule")


def _card_to_summary(card_id: str, state: ReviewState, today: Optional[date] = None) -> Dict:
    return {
        'card_id': card_id,
        'state': state.to_dict(),
        'relative_due': relative_due(state.next_review_at, today),
    }


def _serialize_previews(state: ReviewState, now: Optional[datetime], config: SchedulerConfig) -> Dict:
    previews = []
    for rating, projection in preview_intervals(state, now, config).items():
        previews.append({
            'rating': int(rating),
            'name': rating.name.lower(),
            'label': interval_display(projection.state.interval_days),
            'state': projection.state.to_dict(),
            'due_at': projection.due_at.isoformat(),
        })
    return {'previews': previews}


# ---- Stateless engine ----

def initial_state(now: Optional[datetime] = None, config: SchedulerConfig = DEFAULT_CONFIG) -> Dict:
    return create_initial_state(now, config).to_dict()


def next_state(
    state_data: Dict,
    rating: int,
    reviewed_at: Optional[datetime] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Dict:
    """
    Run one transition on a caller-held state.

    Raises:
        ValueError (incl. InvalidRating) for a malformed state or rating.
    """
    state = ReviewState.from_dict(state_data)
    try:
        return compute_next_state(state, rating, reviewed_at, config).to_dict()
    except InvalidRating:
        logger.warning("Rejected rating %r", rating)
        raise


def preview(
    state_data: Dict,
    now: Optional[datetime] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Dict:
    state = ReviewState.from_dict(state_data)
    return _serialize_previews(state, now, config)


# ---- Stored cards ----

def add_card(store: ReviewStateStore, card_id: str) -> Dict:
    return _card_to_summary(card_id, store.add_card(card_id))


def get_card(store: ReviewStateStore, card_id: str) -> Dict:
    """Raises KeyError if card_id is unknown."""
    state = store.get_state(card_id)
    if state is None:
        raise KeyError(f"Card not found: {card_id}")
    return _card_to_summary(card_id, state)


def preview_card(store: ReviewStateStore, card_id: str, now: Optional[datetime] = None) -> Dict:
    state = store.get_state(card_id)
    if state is None:
        raise KeyError(f"Card not found: {card_id}")
    return _serialize_previews(state, now, store.config)


def review_card(
    store: ReviewStateStore,
    card_id: str,
    rating: int,
    reviewed_at: Optional[datetime] = None,
) -> Dict:
    """
    Apply a rating to a stored card.

    Raises:
        KeyError if card_id not found.
        InvalidRating if rating is outside 0-5.
    """
    state = store.record_review(card_id, rating, reviewed_at)
    return _card_to_summary(card_id, state, utc_date(reviewed_at))


def get_due_cards(store: ReviewStateStore, as_of: Optional[date] = None) -> Dict:
    if as_of is None:
        as_of = utc_date()
    due = store.get_due(as_of)
    return {
        'as_of': as_of.isoformat(),
        'due_count': len(due),
        'cards': [_card_to_summary(cid, s, as_of) for cid, s in due],
    }


def remove_card(store: ReviewStateStore, card_id: str) -> None:
    store.remove_card(card_id)
    logger.info("Removed card %s", card_id)
