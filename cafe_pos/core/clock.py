import time
from datetime import datetime, timedelta
from typing import Optional, Tuple


def now_millis() -> int:
    return int(time.time() * 1000)


def local_midnight(now: Optional[datetime] = None) -> datetime:
    """Start of the current calendar day in local time."""
    now = now or datetime.now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def day_window(day_start: datetime) -> Tuple[int, int]:
    """[start, end) of one local day in epoch milliseconds."""
    return to_millis(day_start), to_millis(day_start + timedelta(days=1))
