"""Human-readable interval and due-date labels for review UIs."""

from datetime import date
from typing import Optional

from srs.timeutil import utc_date


def interval_display(days: float) -> str:
    """
    Compact interval label: "<1m", "10m", "1h", "1d", "5d", "2w", "3mo", "1.5y".
    """
    if days < 0.0007:
        # under a minute
        return '<1m'

    minutes = days * 24 * 60
    if minutes < 60:
        return f"{round(minutes)}m"

    hours = minutes / 60
    if hours < 24:
        return f"{round(hours)}h"

    if days < 7:
        return f"{round(days)}d"

    weeks = days / 7
    if weeks < 4:
        return f"{round(weeks)}w"

    months = days / 30
    if months < 12:
        return f"{round(months)}mo"

    return f"{days / 365:.1f}y"


def _plural(n: int, unit: str) -> str:
    return f"in 1 {unit}" if n == 1 else f"in {n} {unit}s"


def relative_due(next_review_at: Optional[date], today: Optional[date] = None) -> str:
    """
    Relative due label: "new", "due", "today", "tomorrow", "in 3 days", "in 2 weeks", ...
    Day differences are computed on UTC calendar days.
    """
    if next_review_at is None:
        return 'new'
    if today is None:
        today = utc_date()

    diff_days = (next_review_at - today).days
    if diff_days < 0:
        return 'due'
    if diff_days == 0:
        return 'today'
    if diff_days == 1:
        return 'tomorrow'
    if diff_days < 7:
        return f"in {diff_days} days"

    weeks = round(diff_days / 7)
    if weeks < 4:
        return _plural(weeks, 'week')

    months = round(diff_days / 30)
    if months < 12:
        return _plural(months, 'month')

    return _plural(round(diff_days / 365), 'year')
