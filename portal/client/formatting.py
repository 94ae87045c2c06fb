"""알림 표시용 날짜/시간 포맷터.

Display formatters for notification timestamps: the pending table shows
the submission date and time separately, the header dropdown shows how long
ago a notification was created.
"""

from datetime import datetime, timezone

INVALID_DATE = "Invalid Date"
INVALID_TIME = "Invalid Time"


def format_date(value: str | None) -> str:
    """`2024-01-02` → `02 January 2024`."""
    if not value:
        return INVALID_DATE
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return INVALID_DATE
    return parsed.strftime("%d %B %Y")


def format_time(value: str | None) -> str:
    """`13:05:09` → `1:05:09 PM` (12-hour clock, minutes and seconds kept as given)."""
    if not value:
        return INVALID_TIME
    parts = value.split(":")
    if len(parts) != 3:
        return INVALID_TIME
    hours, minutes, seconds = parts
    try:
        hour = int(hours)
    except ValueError:
        return INVALID_TIME
    if not 0 <= hour <= 23:
        return INVALID_TIME

    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minutes}:{seconds} {suffix}"


def time_ago(created_at: datetime, now: datetime | None = None) -> str:
    """상대 시간 표시 — e.g. `5 minutes ago`, `about 2 hours ago`, `3 days ago`.

    Same buckets as date-fns `formatDistanceToNow`: under 30 s, 1 minute
    (< 1.5 min), N minutes (< 45 min), about 1 hour (< 90 min), about N hours
    (< 24 h), 1 day (< 42 h), N days (< 30 days), months (< 1 year), then
    years. Naive timestamps are treated as UTC.
    """
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = (now - created_at).total_seconds()
    suffix = "ago" if seconds >= 0 else "from now"
    seconds = abs(seconds)
    minutes = round(seconds / 60)

    if seconds < 30:
        phrase = "less than a minute"
    elif minutes < 2:
        phrase = "1 minute"
    elif minutes < 45:
        phrase = f"{minutes} minutes"
    elif minutes < 90:
        phrase = "about 1 hour"
    elif minutes < 24 * 60:
        phrase = f"about {round(minutes / 60)} hours"
    elif minutes < 42 * 60:
        phrase = "1 day"
    elif minutes < 30 * 24 * 60:
        phrase = f"{round(minutes / (24 * 60))} days"
    elif minutes < 365 * 24 * 60:
        months = max(1, round(minutes / (30 * 24 * 60)))
        phrase = "about 1 month" if months == 1 else f"{months} months"
    else:
        years = round(minutes / (365 * 24 * 60))
        phrase = "about 1 year" if years == 1 else f"about {years} years"

    return f"{phrase} {suffix}"
