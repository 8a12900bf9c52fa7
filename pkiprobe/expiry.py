import datetime as dt
from typing import Optional

from .common import SECONDS_PER_DAY, as_utc, utc_now

MICROS_PER_DAY = SECONDS_PER_DAY * 1_000_000


def days_left(expires_at: dt.datetime, now: Optional[dt.datetime] = None) -> int:
    """Whole days between ``now`` and ``expires_at``, truncated toward zero.

    Both instants are compared in UTC. Naive values are taken as UTC, so the
    result never depends on the local timezone of the process. The result is
    negative once the certificate has expired and 0 when it expires within
    the next 24 hours (or expired less than 24 hours ago).
    """
    if now is None:
        now = utc_now()
    delta = as_utc(expires_at) - as_utc(now)
    micros = (delta.days * SECONDS_PER_DAY + delta.seconds) * 1_000_000 + delta.microseconds
    # // arrondit vers -inf, on veut une troncature vers zéro
    if micros < 0:
        return -(-micros // MICROS_PER_DAY)
    return micros // MICROS_PER_DAY
