"""Merged "up" intervals and observed span for a single station."""
from __future__ import annotations

import logging
from bisect import bisect_left
from dataclasses import dataclass
from operator import attrgetter
from typing import Iterator, List, Tuple

from .errors import DegenerateSpan, InvalidRange, NoData

logger = logging.getLogger(__name__)

_START = attrgetter("start")


@dataclass(frozen=True)
class Interval:
    """Closed time range during which a station was confirmed up."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def as_tuple(self) -> Tuple[int, int]:
        return (self.start, self.end)


class IntervalStore:
    """Keep a sorted, strictly disjoint set of up intervals.

    Every resolved report widens the observed span, whether the charger was
    up or down. Only up reports are stored; down time is whatever the stored
    intervals leave uncovered inside the observed span.
    """

    def __init__(self) -> None:
        self._intervals: List[Interval] = []
        self.observed_min: int | None = None
        self.observed_max: int | None = None

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._intervals)

    def __repr__(self) -> str:
        return (
            f"IntervalStore(intervals={self.as_tuples()!r}, "
            f"observed_min={self.observed_min!r}, observed_max={self.observed_max!r})"
        )

    @property
    def intervals(self) -> Tuple[Interval, ...]:
        return tuple(self._intervals)

    def as_tuples(self) -> List[Tuple[int, int]]:
        return [i.as_tuple() for i in self._intervals]

    @property
    def uptime(self) -> int:
        """Total time covered by the merged up intervals."""
        return sum(i.duration for i in self._intervals)

    @property
    def span(self) -> int | None:
        if self.observed_min is None or self.observed_max is None:
            return None
        return self.observed_max - self.observed_min

    def resolve(self, start: int, end: int, up: bool) -> None:
        """Record one availability report.

        Raises :class:`InvalidRange` without touching the store when
        ``end < start``.
        """
        if end < start:
            raise InvalidRange(start, end)

        if self.observed_min is None or start < self.observed_min:
            self.observed_min = start
        if self.observed_max is None or end > self.observed_max:
            self.observed_max = end

        if up:
            self._insert(Interval(start, end))

    def _insert(self, new: Interval) -> None:
        intervals = self._intervals
        pos = bisect_left(intervals, new.start, key=_START)

        # Widen [lo, hi) over every interval that overlaps or touches ``new``.
        lo = pos
        while lo > 0 and intervals[lo - 1].end >= new.start:
            lo -= 1
        hi = pos
        while hi < len(intervals) and intervals[hi].start <= new.end:
            hi += 1

        if lo == hi:
            intervals.insert(pos, new)
            return

        merged = Interval(
            min(new.start, intervals[lo].start),
            max(new.end, intervals[hi - 1].end),
        )
        logger.debug("Merged %s with %d interval(s) into %s", new, hi - lo, merged)
        intervals[lo:hi] = [merged]

    def percent_uptime(self) -> int:
        """Return the floored uptime percentage over the observed span."""
        span = self.span
        if span is None:
            raise NoData("No availability reports were resolved")
        if span <= 0:
            raise DegenerateSpan(
                f"Observed span is empty: [{self.observed_min}, {self.observed_max}]"
            )
        percent = (100 * self.uptime) // span
        return min(100, max(0, percent))
