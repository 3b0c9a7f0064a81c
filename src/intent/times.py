"""Clock-time parsing utilities (minutes past midnight).

All times are local wall-clock times expressed as an integer number of minutes in `[0, 1440)`.
"""

from __future__ import annotations

import re

MINUTES_PER_DAY = 24 * 60

# Word boundaries keep the hour from being carved out of a longer digit run such as "2000".
CLOCK_TIME_RE = re.compile(
    r"\b(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?(?:\s*(?P<meridiem>am|pm))?\b",
    flags=re.IGNORECASE,
)


def clock_to_minutes(hour: int, minute: int = 0, meridiem: str | None = None) -> int | None:
    """Convert a 12h/24h clock reading to minutes past midnight.

    Returns:
        Minutes in `[0, 1440)`, or `None` when the reading is not a valid clock time.
    """

    if hour < 0 or hour > 24 or minute < 0 or minute > 59:
        return None

    meridiem = (meridiem or "").lower()
    if meridiem == "am":
        hour = hour % 12
    elif meridiem == "pm":
        hour = hour % 12 + 12
    elif hour == 24:
        hour = 0

    return (hour * 60 + minute) % MINUTES_PER_DAY


def parse_clock_match(match: re.Match[str]) -> int | None:
    """Parse a `CLOCK_TIME_RE` match into minutes past midnight."""

    minute = match.group("minute")
    return clock_to_minutes(
        int(match.group("hour")),
        int(minute) if minute is not None else 0,
        match.group("meridiem"),
    )


def format_minutes(minutes: int) -> str:
    """Render minutes past midnight as `HH:MM`."""

    hour, minute = divmod(minutes % MINUTES_PER_DAY, 60)
    return f"{hour:02d}:{minute:02d}"
