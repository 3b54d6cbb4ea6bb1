"""Thread-safe per-category accumulation of scan totals."""

import threading
from typing import Iterable, Optional

from arcstat.models import Category, ReportRow, ScanResult


def lower_median(sizes: list[int]) -> Optional[int]:
    """Median of sizes, taking the lower-middle element for even lengths."""
    if not sizes:
        return None
    ordered = sorted(sizes)
    return ordered[(len(ordered) - 1) // 2]


class _Tally:
    """Mutable counters for one category, guarded by their own lock."""

    __slots__ = ("lock", "item_count", "total_bytes", "sizes")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.item_count = 0
        self.total_bytes = 0
        self.sizes: list[int] = []


class Aggregator:
    """
    Shared table of running totals keyed by category.

    Each category has its own lock, so scanners for different categories
    never contend; updates to one category are serialized. Snapshots are
    always returned in the order of the categories given at construction,
    whatever order the scans finish in.
    """

    def __init__(self, categories: Iterable[Category], track_sizes: bool = False) -> None:
        self._order = list(categories)
        self._track_sizes = track_sizes
        self._tallies: dict[Category, _Tally] = {}
        self._table_lock = threading.Lock()

    def _tally(self, category: Category) -> _Tally:
        tally = self._tallies.get(category)
        if tally is None:
            with self._table_lock:
                tally = self._tallies.get(category)
                if tally is None:
                    tally = _Tally()
                    self._tallies[category] = tally
        return tally

    def initialize(self, category: Category) -> None:
        """Create a zero entry for category if it has none yet."""
        self._tally(category)

    def record(
        self,
        category: Category,
        size_delta: int = 0,
        count_delta: int = 0,
        sample: Optional[int] = None,
    ) -> None:
        """
        Add to a category's totals.

        Args:
            category: Category being updated
            size_delta: Bytes to add
            count_delta: Items to add
            sample: One file size, kept for the median when tracking sizes
        """
        tally = self._tally(category)
        with tally.lock:
            tally.total_bytes += size_delta
            tally.item_count += count_delta
            if sample is not None and self._track_sizes:
                tally.sizes.append(sample)

    def sizes(self, category: Category) -> list[int]:
        """Copy of the file sizes sampled for category."""
        tally = self._tallies.get(category)
        if tally is None:
            return []
        with tally.lock:
            return list(tally.sizes)

    def result(self, category: Category) -> ScanResult:
        """Consistent copy of one category's totals (zero if never recorded)."""
        tally = self._tallies.get(category)
        if tally is None:
            return ScanResult()
        with tally.lock:
            return ScanResult(
                item_count=tally.item_count,
                total_bytes=tally.total_bytes,
                median_bytes=lower_median(tally.sizes) if self._track_sizes else None,
            )

    def snapshot(self) -> list[ReportRow]:
        """
        Rows for every category with an entry, in registry order.

        Only complete once every scan feeding this aggregator has joined;
        earlier calls return partial but well-formed rows.
        """
        with self._table_lock:
            present = [c for c in self._order if c in self._tallies]
        return [ReportRow(category=c, result=self.result(c)) for c in present]
