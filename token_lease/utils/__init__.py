"""Utility helpers for time sources."""

from .time import ManualClock, SystemClock, TimeSource, utc_now

__all__ = ["ManualClock", "SystemClock", "TimeSource", "utc_now"]
