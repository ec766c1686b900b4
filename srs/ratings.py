"""Recall-quality ratings (SM-2 0-5 scale) and rating validation."""

from enum import IntEnum
from typing import Any


class InvalidRating(ValueError):
    """Raised when a rating is not an integer in 0-5."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Rating must be an integer 0-5, got {value!r}")


class Rating(IntEnum):
    """
    Learner's self-reported recall quality.

    0-2 are lapses (forgotten), 3-5 are successful recalls.
    """
    BLACKOUT = 0        # complete blackout
    INCORRECT = 1       # wrong, but recognised the answer
    INCORRECT_EASY = 2  # wrong, but the answer seemed easy once shown
    HARD = 3            # correct with serious difficulty
    GOOD = 4            # correct after hesitation
    PERFECT = 5         # perfect, effortless recall

    @property
    def is_lapse(self) -> bool:
        return self < Rating.HARD

    @classmethod
    def coerce(cls, value: Any) -> 'Rating':
        """
        Validate value as a rating.

        Accepts Rating members and plain ints; bools, floats, strings and
        out-of-range ints raise InvalidRating.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRating(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidRating(value) from None

    @classmethod
    def from_button(cls, name: str) -> 'Rating':
        """Map a four-button UI label (again/hard/good/easy) to a rating."""
        try:
            return BUTTON_RATINGS[name.strip().lower()]
        except (KeyError, AttributeError):
            raise InvalidRating(name) from None

    @classmethod
    def parse(cls, text: str) -> 'Rating':
        """Parse CLI/form input: a digit 0-5 or a button name."""
        text = str(text).strip()
        if text.lstrip('-').isdigit():
            return cls.coerce(int(text))
        return cls.from_button(text)


BUTTON_RATINGS = {
    'again': Rating.INCORRECT,
    'hard': Rating.HARD,
    'good': Rating.GOOD,
    'easy': Rating.PERFECT,
}
