"""표시용 시간대 유틸리티 — 태평양 시간 기준 날짜 포맷.

Display timezone helpers. Stored timestamps are UTC; everything rendered
to people (pages, email template data) goes through these helpers so it
shows in DISPLAY_TIMEZONE (America/Los_Angeles by default).
Naive datetimes are treated as UTC.
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from erp_hub.config import settings


def display_zone() -> ZoneInfo:
    return ZoneInfo(settings.DISPLAY_TIMEZONE)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_display_time(value: datetime | str) -> datetime:
    """UTC(또는 ISO 문자열) 시각을 표시 시간대로 변환합니다."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(display_zone())


def _hour12(dt: datetime) -> str:
    return f"{dt.hour % 12 or 12}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"


def format_date(value: datetime | str) -> str:
    """'Mar 5, 2025' 형식."""
    dt = to_display_time(value)
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_datetime(value: datetime | str) -> str:
    """'Mar 5, 2025 at 3:07 PM' 형식."""
    dt = to_display_time(value)
    return f"{format_date(dt)} at {_hour12(dt)}"


def format_meeting_title_date(value: datetime | None = None) -> str:
    """'3/5/2025' 형식 — 기본값은 현재 시각."""
    dt = to_display_time(value or now_utc())
    return f"{dt.month}/{dt.day}/{dt.year}"


def format_long_date(value: datetime | None = None) -> str:
    """'Wednesday, March 5, 2025' 형식 — 기본값은 현재 시각."""
    dt = to_display_time(value or now_utc())
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_relative(value: datetime | str, now: datetime | None = None) -> str:
    """상대 시간 표기 — '5 minutes ago', 'about 2 hours ago', 'in 3 days'.

    Thresholds follow the common "distance in words" buckets:
    <1 min, minutes up to 45, hours up to a day, days up to 30,
    months up to a year, then years.
    """
    target = to_display_time(value)
    reference = to_display_time(now or now_utc())
    seconds = (reference - target).total_seconds()
    future = seconds < 0
    minutes = round(abs(seconds) / 60)

    if minutes < 1:
        words = "less than a minute"
    elif minutes < 45:
        words = _plural(minutes, "minute")
    elif minutes < 90:
        words = "about 1 hour"
    elif minutes < 1440:
        words = f"about {round(minutes / 60)} hours"
    elif minutes < 2520:
        words = "1 day"
    elif minutes < 43200:
        words = _plural(round(minutes / 1440), "day")
    elif minutes < 86400:
        words = f"about {_plural(round(minutes / 43200), 'month')}"
    else:
        months = round(minutes / 43200)
        if months < 12:
            words = _plural(months, "month")
        else:
            years, remainder = divmod(months, 12)
            if remainder < 3:
                words = f"about {_plural(years, 'year')}"
            elif remainder < 9:
                words = f"over {_plural(years, 'year')}"
            else:
                words = f"almost {_plural(years + 1, 'year')}"

    return f"in {words}" if future else f"{words} ago"


def week_bounds(value: datetime | None = None) -> tuple[datetime, datetime]:
    """표시 시간대 기준 이번 주(일요일 시작) 범위를 UTC로 반환합니다.

    Returns (start, end) where start is Sunday 00:00 and end is the following
    Sunday 00:00 in the display zone, both converted to UTC.
    """
    local = to_display_time(value or now_utc())
    days_since_sunday = (local.weekday() + 1) % 7
    start_day: date = local.date() - timedelta(days=days_since_sunday)
    start = datetime(start_day.year, start_day.month, start_day.day, tzinfo=local.tzinfo)
    end = start + timedelta(days=7)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def format_week_range(value: datetime | None = None) -> str:
    """'Mar 2, 2025 - Mar 8, 2025' 형식의 주간 범위."""
    start, end = week_bounds(value)
    return f"{format_date(start)} - {format_date(end - timedelta(seconds=1))}"
