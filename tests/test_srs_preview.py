"""Tests for preview_intervals / preview_labels -- projecting every rating."""

import copy
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from srs.constants import SchedulerConfig
from srs.models import ReviewState, create_initial_state
from srs.ratings import Rating
from srs.scheduler import compute_next_state, preview_intervals, preview_labels

NOW = datetime(2026, 5, 11, 14, 0, tzinfo=timezone.utc)

STATES = [
    create_initial_state(NOW),
    ReviewState(2.5, 1, 1, date(2026, 5, 11), NOW - timedelta(days=1)),
    ReviewState(2.5, 6, 2, date(2026, 5, 11), NOW - timedelta(days=6), review_count=2),
    ReviewState(1.3, 40, 7, date(2026, 5, 1), NOW - timedelta(days=50), lapse_count=3, review_count=12),
]


def test_preview_covers_all_six_ratings():
    previews = preview_intervals(create_initial_state(NOW), NOW)
    assert list(previews) == list(Rating)


@pytest.mark.parametrize("state", STATES)
def test_preview_matches_commit(state):
    previews = preview_intervals(state, NOW)
    for rating in Rating:
        committed = compute_next_state(state, rating, NOW)
        assert previews[rating].state == committed
        assert previews[rating].due_at == committed.next_review_at


def test_preview_matches_commit_with_config():
    config = SchedulerConfig(maximum_interval_days=10)
    state = STATES[2]
    previews = preview_intervals(state, NOW, config)
    assert previews[Rating.PERFECT].state == compute_next_state(state, 5, NOW, config)
    assert previews[Rating.PERFECT].state.interval_days == 10


def test_preview_does_not_mutate_state():
    state = STATES[2]
    snapshot = copy.deepcopy(state)
    preview_intervals(state, NOW)
    assert state == snapshot


def test_preview_from_second_review():
    previews = preview_intervals(STATES[1], NOW)
    assert previews[Rating.INCORRECT].due_at == date(2026, 5, 12)
    assert previews[Rating.GOOD].due_at == date(2026, 5, 17)


def test_preview_labels():
    labels = preview_labels(STATES[2], NOW)
    assert labels[Rating.BLACKOUT] == '1d'
    assert labels[Rating.HARD] == '2w'
    assert labels[Rating.PERFECT] == '2w'


def test_preview_defaults_to_now():
    previews = preview_intervals(create_initial_state())
    today = datetime.now(timezone.utc).date()
    assert previews[Rating.GOOD].due_at in (today + timedelta(days=1), today + timedelta(days=2))
