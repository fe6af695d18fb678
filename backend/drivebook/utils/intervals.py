"""
Sorted, disjoint interval sets.

Used to derive a driver's open windows (union of open sources minus closed
ranges), but deliberately free of any time or travel concern: the bounds
only need to be ordered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, List, TypeVar

T = TypeVar("T", bound=Any)


@dataclass(frozen=True)
class Interval(Generic[T]):
    """Half-open range ``[start, end)``."""

    start: T
    end: T

    @property
    def is_empty(self) -> bool:
        return not self.start < self.end

    def overlaps(self, other: "Interval[T]") -> bool:
        return self.start < other.end and other.start < self.end


class IntervalSet(Generic[T]):
    """
    Immutable collection of non-empty, non-touching intervals in start order.

    Construction normalizes any input: empty or inverted intervals are
    dropped, overlapping or adjacent intervals are merged.
    """

    __slots__ = ("_intervals",)

    def __init__(self, intervals: Iterable[Interval[T]] = ()) -> None:
        self._intervals: tuple[Interval[T], ...] = tuple(self._normalize(intervals))

    @staticmethod
    def _normalize(intervals: Iterable[Interval[T]]) -> List[Interval[T]]:
        ordered = sorted(
            (interval for interval in intervals if not interval.is_empty),
            key=lambda interval: interval.start,
        )
        merged: List[Interval[T]] = []
        for interval in ordered:
            if merged and not interval.start > merged[-1].end:
                last = merged[-1]
                if interval.end > last.end:
                    merged[-1] = Interval(last.start, interval.end)
            else:
                merged.append(interval)
        return merged

    @property
    def intervals(self) -> tuple[Interval[T], ...]:
        return self._intervals

    def union(self, other: Iterable[Interval[T]]) -> "IntervalSet[T]":
        return IntervalSet([*self._intervals, *other])

    def subtract(self, removal: Interval[T]) -> "IntervalSet[T]":
        """Remove ``removal`` from every interval, splitting where it falls inside."""
        if removal.is_empty:
            return self
        remaining: List[Interval[T]] = []
        for interval in self._intervals:
            if not interval.overlaps(removal):
                remaining.append(interval)
                continue
            if removal.start > interval.start:
                remaining.append(Interval(interval.start, removal.start))
            if removal.end < interval.end:
                remaining.append(Interval(removal.end, interval.end))
        return IntervalSet(remaining)

    def subtract_all(self, removals: Iterable[Interval[T]]) -> "IntervalSet[T]":
        result = self
        for removal in removals:
            result = result.subtract(removal)
        return result

    def __iter__(self) -> Iterator[Interval[T]]:
        return iter(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def __bool__(self) -> bool:
        return bool(self._intervals)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IntervalSet):
            return self._intervals == other._intervals
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._intervals)

    def __repr__(self) -> str:
        inner = ", ".join(f"[{i.start!r}, {i.end!r})" for i in self._intervals)
        return f"IntervalSet({inner})"
