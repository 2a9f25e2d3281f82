from datetime import date, datetime, timezone
from typing import Optional
import time


MALAY_MONTHS = (
    "Januari", "Februari", "Mac", "April", "Mei", "Jun",
    "Julai", "Ogos", "September", "Oktober", "November", "Disember",
)


def today_iso(now: Optional[datetime] = None) -> str:
    """Current UTC date as YYYY-MM-DD."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).date().isoformat()


def format_malay_date(day: date) -> str:
    """Long Malay date, e.g. '18 Oktober 2026'."""
    return f"{day.day} {MALAY_MONTHS[day.month - 1]} {day.year}"


def epoch_millis() -> int:
    return int(time.time() * 1000)
