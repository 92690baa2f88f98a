"""
Default time boundaries for searches.

Searches usually arrive without explicit time arguments, so the window
defaults to the last DEFAULT_SEARCH_WINDOW_DAYS days ending now.
"""

from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional

from infino_gateway.config import DEFAULT_SEARCH_WINDOW_DAYS
from infino_gateway.core.models import TimeWindow


def format_instant(moment: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC instant, e.g. 2024-01-01T00:00:00Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def resolve_time_window(
    params: Mapping[str, str],
    now: Optional[datetime] = None,
    window_days: int = DEFAULT_SEARCH_WINDOW_DAYS,
) -> TimeWindow:
    """
    Resolve the search window from request parameters.

    Args:
        params: Request parameters; start_time and end_time are read
        now: Instant to resolve against. Defaults to the current time.
        window_days: Length of the default window in days

    Returns:
        TimeWindow with both boundaries populated
    """
    now = now or datetime.now(timezone.utc)

    start_time = params.get("start_time")
    end_time = params.get("end_time")

    if not start_time:
        start_time = format_instant(now - timedelta(days=window_days))
    if not end_time:
        end_time = format_instant(now)

    return TimeWindow(start_time=start_time, end_time=end_time)
