"""JSONL-backed review-state storage, keyed by card id."""

import json
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from srs.constants import DEFAULT_CONFIG, SchedulerConfig
from srs.models import ReviewEvent, ReviewState, create_initial_state
from srs.ratings import InvalidRating, Rating
from srs.scheduler import compute_next_state
from srs.timeutil import Instant, utc_date

logger = logging.getLogger("pluckk.store")


class ReviewStateStore:
    """
    JSONL-backed store: one {"card_id", "state"} record per line.

    Loads the entire file into memory on init (fine for <10k cards).
    Writes are atomic: rewrite to a temp file, then rename over the original.
    """

    def __init__(self, db_path, config: SchedulerConfig = DEFAULT_CONFIG):
        self.db_path = Path(db_path)
        self.config = config
        self._states: Dict[str, ReviewState] = {}
        self._lock = threading.Lock()
        self._load()

    def _load(self) -> None:
        if not self.db_path.exists():
            return
        with open(self.db_path, 'r', encoding='utf-8') as f:
            for lineno, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                record = json.loads(line)
                try:
                    self._states[record['card_id']] = ReviewState.from_dict(record['state'])
                except (KeyError, ValueError) as e:
                    raise ValueError(f"{self.db_path}:{lineno}: bad review state record: {e}") from e
        logger.debug("Loaded %d review states from %s", len(self._states), self.db_path)

    def _save(self, states: Dict[str, ReviewState]) -> None:
        """Write states to disk; on failure the temp file is removed and the file is untouched."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.db_path.with_suffix(self.db_path.suffix + '.tmp')
        try:
            with tmp.open('w', encoding='utf-8') as f:
                for card_id, state in states.items():
                    record = {'card_id': card_id, 'state': state.to_dict()}
                    f.write(json.dumps(record, ensure_ascii=False) + '\n')
            tmp.replace(self.db_path)
        except OSError:
            logger.exception("Failed to save review states to %s", self.db_path)
            tmp.unlink(missing_ok=True)
            raise

    def _commit(self, states: Dict[str, ReviewState]) -> None:
        """Persist the new mapping, then swap it in. Caller holds the lock."""
        self._save(states)
        self._states = states

    def add_card(self, card_id: str, now: Optional[Instant] = None) -> ReviewState:
        """Create the initial state for card_id if absent. Returns the stored state."""
        with self._lock:
            state = self._states.get(card_id)
            if state is None:
                state = create_initial_state(now, self.config)
                self._commit({**self._states, card_id: state})
                logger.info("Added card %s (due %s)", card_id, state.next_review_at)
            return state

    def get_state(self, card_id: str) -> Optional[ReviewState]:
        with self._lock:
            return self._states.get(card_id)

    def put_state(self, card_id: str, state: ReviewState) -> None:
        """Insert or replace the state for card_id."""
        with self._lock:
            self._commit({**self._states, card_id: state})

    def remove_card(self, card_id: str) -> None:
        with self._lock:
            if card_id not in self._states:
                raise KeyError(f"Card not found: {card_id}")
            self._commit({cid: s for cid, s in self._states.items() if cid != card_id})

    def get_due(self, as_of: Optional[date] = None) -> List[Tuple[str, ReviewState]]:
        """Return (card_id, state) for states due on or before as_of, sorted by due date ASC."""
        if as_of is None:
            as_of = utc_date()
        with self._lock:
            items = list(self._states.items())
        due = [(cid, s) for cid, s in items if s.next_review_at <= as_of]
        due.sort(key=lambda item: (item[1].next_review_at, item[0]))
        return due

    def record_review(
        self,
        card_id: str,
        rating: Any,
        reviewed_at: Optional[Instant] = None,
    ) -> ReviewState:
        """
        Apply a rating to the stored state and persist the result.

        Raises:
            KeyError if card_id is unknown.
            InvalidRating if rating is not 0-5; the store is left unchanged.
        """
        with self._lock:
            state = self._states.get(card_id)
            if state is None:
                raise KeyError(f"Card not found: {card_id}")
            try:
                new_state = compute_next_state(state, rating, reviewed_at, self.config)
            except InvalidRating:
                logger.warning("Rejected rating %r for card %s", rating, card_id)
                raise
            self._commit({**self._states, card_id: new_state})
        logger.info(
            "Reviewed card %s: rating=%d interval=%dd ease=%.4f due=%s",
            card_id, Rating.coerce(rating), new_state.interval_days,
            new_state.easiness_factor, new_state.next_review_at,
        )
        return new_state

    def apply_event(self, event: ReviewEvent) -> ReviewState:
        return self.record_review(event.card_id, event.rating, event.reviewed_at)

    def all_states(self) -> Dict[str, ReviewState]:
        with self._lock:
            return dict(self._states)

    def count(self) -> int:
        with self._lock:
            return len(self._states)
