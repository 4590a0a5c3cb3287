"""Point expiration policy

Turns a program's expiration_months into an expiry timestamp at accrual time.
"""

from calendar import monthrange
from datetime import datetime, timedelta
from typing import Optional


def add_calendar_months(moment: datetime, months: int) -> datetime:
    """
    Add calendar months to a timestamp, keeping the time of day.

    Days past the end of the target month roll over into the following
    month, so Jan 31 + 1 month is Mar 3 (Mar 2 in a leap year).
    """
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    _, last_day = monthrange(year, month)
    if moment.day <= last_day:
        return moment.replace(year=year, month=month)
    overflow = moment.day - last_day
    return moment.replace(year=year, month=month, day=last_day) + timedelta(days=overflow)


def compute_expires_at(expiration_months: Optional[int], now: datetime) -> Optional[datetime]:
    """
    Expiry timestamp for points earned at ``now``.

    Args:
        expiration_months: Program policy (None or 0 = points never expire)
        now: Accrual time

    Returns:
        Expiry timestamp, or None when points never expire
    """
    if not expiration_months:
        return None
    return add_calendar_months(now, expiration_months)
