"""Candidate date enumeration and fixed-stride downsampling."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from dateutil.relativedelta import relativedelta

T = TypeVar("T")


def enumerate_dates(start: datetime, end: datetime, step: relativedelta) -> list[datetime]:
    """Every date from `start` to `end` inclusive, `step` apart.

    The k-th date is `start + k * step`, so month steps stay anchored to the start day
    (Jan 31 -> Feb 28 -> Mar 31).
    """
    dates: list[datetime] = []
    index = 0
    current = start
    while current <= end:
        dates.append(current)
        index += 1
        current = start + step * index
    return dates


def sample_dates(dates: Sequence[T], max_count: int) -> list[T]:
    """
    Downsample to `max_count` items by fixed stride, keeping the last item.

    With more than `max_count` items, takes every `len // max_count`-th item starting at
    the first (at most `max_count` of them), then appends the final item unless it was
    already taken. The result holds at most `max_count + 1` items and contains the final
    item exactly once.
    """
    if max_count <= 0:
        raise ValueError("max_count must be positive")
    if len(dates) <= max_count:
        return list(dates)

    step = len(dates) // max_count
    sampled = list(dates[::step])[:max_count]
    if sampled[-1] != dates[-1]:
        sampled.append(dates[-1])
    return sampled
