# src/core/time.py
from datetime import datetime, timezone

from dateutil.relativedelta import relativedelta


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def add_months(start: datetime, months: int) -> datetime:
    """Calendar-month addition. Jan 31 + 1 month lands on the last day of February."""
    return start + relativedelta(months=months)
