"""Default configuration for the SM-2 scheduler."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Tunable constants for the SM-2 transition.

    The defaults follow the classical SuperMemo-2 formulation.
    """
    # Ease factor for a never-reviewed card
    initial_ease: float = 2.5
    # Hard floor; ease never drops below this
    minimum_ease: float = 1.3
    # Ratings below this are lapses
    lapse_threshold: int = 3
    lapse_interval_days: int = 1
    first_interval_days: int = 1
    second_interval_days: int = 6
    # None = uncapped
    maximum_interval_days: Optional[int] = None
    # Decimal places kept on the ease factor after each update
    ease_precision: int = 4

    def __post_init__(self):
        if self.minimum_ease <= 0:
            raise ValueError(f"minimum_ease must be positive, got {self.minimum_ease}")
        if self.initial_ease < self.minimum_ease:
            raise ValueError(
                f"initial_ease ({self.initial_ease}) is below minimum_ease ({self.minimum_ease})"
            )
        if not (0 < self.lapse_threshold <= 5):
            raise ValueError(f"lapse_threshold must be 1-5, got {self.lapse_threshold}")
        for name in ('lapse_interval_days', 'first_interval_days', 'second_interval_days'):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.first_interval_days > self.second_interval_days:
            raise ValueError("first_interval_days must not exceed second_interval_days")
        if self.maximum_interval_days is not None and self.maximum_interval_days < self.second_interval_days:
            raise ValueError(
                f"maximum_interval_days must be >= {self.second_interval_days}, "
                f"got {self.maximum_interval_days}"
            )


DEFAULT_CONFIG = SchedulerConfig()

# Algorithm version for logging and analysis
ALGORITHM_VERSION = 'sm2-v1.0'
