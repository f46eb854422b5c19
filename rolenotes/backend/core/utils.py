"""
Core Utilities.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Current UTC time without tzinfo.

    Timestamp columns are naive and always hold UTC, so every value written
    to them comes from here.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
