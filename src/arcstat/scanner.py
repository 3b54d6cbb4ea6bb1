"""Archive scanning for arcstat."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Optional

from arcstat.aggregator import Aggregator, lower_median
from arcstat.classifier import classify_entry, is_excluded
from arcstat.errors import CategoryScanError
from arcstat.models import Category, Report, ReportRow, ScanResult

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]  # (label, completed, total)


def _item_file_sizes(path: str) -> list[int]:
    """
    Sizes of the files directly inside a directory item.

    Nested directories are not entered. Unreadable files are skipped; a
    directory that cannot be listed raises OSError.
    """
    sizes = []
    with os.scandir(path) as entries:
        for entry in entries:
            if is_excluded(entry.path):
                continue
            try:
                if entry.is_file():
                    sizes.append(entry.stat().st_size)
            except OSError as e:
                log.debug("Skipping %s: %s", entry.path, e)
                continue
    return sizes


def _list_category(directory: Path, category: Category) -> list[os.DirEntry]:
    """
    Top-level entries of a category directory.

    Only failing to open the directory is fatal; a read error part way
    through keeps the entries listed so far.
    """
    try:
        listing = os.scandir(directory)
    except OSError as e:
        raise CategoryScanError(category, f"cannot read {directory}: {e.strerror or e}") from e

    entries = []
    with listing:
        try:
            for entry in listing:
                entries.append(entry)
        except OSError as e:
            log.debug("Stopped listing %s after %d entries: %s", directory, len(entries), e)
    return entries


def scan_category(
    archive_root: Path,
    category: Category,
    aggregator: Optional[Aggregator] = None,
    track_sizes: bool = False,
) -> ScanResult:
    """
    Scan one category directory and record its totals.

    Args:
        archive_root: Root of the archive
        category: Category to scan
        aggregator: Shared aggregator to record into; a private one is used if None
        track_sizes: Keep per-file sizes for the median; only valid without
            an aggregator, which carries its own setting

    Returns:
        ScanResult for this category

    Raises:
        CategoryScanError: If the category directory cannot be opened
        ValueError: If both aggregator and track_sizes are given
    """
    if aggregator is not None and track_sizes:
        raise ValueError("track_sizes is set on the aggregator, not per scan")
    if aggregator is None:
        aggregator = Aggregator([category], track_sizes=track_sizes)

    directory = Path(archive_root) / category.relative_path
    aggregator.initialize(category)

    for entry in _list_category(directory, category):
        try:
            is_dir = entry.is_dir()
            if not is_dir and not entry.is_file():
                continue

            action = classify_entry(entry.path, is_dir, category.items_are_directories)
            if action.excluded:
                continue

            if action.descend:
                sizes = _item_file_sizes(entry.path)
            elif action.sizes_self:
                sizes = [entry.stat().st_size]
            else:
                sizes = []
        except OSError as e:
            # unreadable entries count toward nothing
            log.debug("Skipping %s: %s", entry.path, e)
            continue

        for size in sizes:
            aggregator.record(category, size_delta=size, sample=size)
        if action.counts_as_item:
            aggregator.record(category, count_delta=1)

    return aggregator.result(category)


def build_report(rows: list[ReportRow], overall_sizes: Optional[list[int]] = None) -> Report:
    """Attach the grand total row to per-category rows."""
    total = ScanResult(
        item_count=sum(r.result.item_count for r in rows),
        total_bytes=sum(r.result.total_bytes for r in rows),
        median_bytes=lower_median(overall_sizes) if overall_sizes is not None else None,
    )
    return Report(rows=rows, total=total)


def scan_all_categories(
    archive_root: Path,
    categories: list[Category],
    progress_callback: Optional[ProgressCallback] = None,
    max_workers: Optional[int] = None,
    sequential: bool = False,
    track_sizes: bool = False,
) -> Report:
    """
    Scan categories concurrently and build an ordered report.

    One task is started per category. A category whose directory cannot be
    opened keeps a zero row carrying the error; any other failure aborts
    the whole run.

    Args:
        archive_root: Root of the archive
        categories: Categories to scan, in registry order
        progress_callback: Optional callback(label, completed, total)
        max_workers: Thread pool size (default: one worker per category)
        sequential: Scan one category at a time in the calling thread
        track_sizes: Compute median file sizes

    Returns:
        Report with rows in the given category order plus a grand total
    """
    categories = list(dict.fromkeys(categories))
    aggregator = Aggregator(categories, track_sizes=track_sizes)
    for category in categories:
        aggregator.initialize(category)

    failures: dict[Category, str] = {}
    total = len(categories)
    log.info("Scanning %d categories under %s", total, archive_root)

    def _handle_failure(error: CategoryScanError) -> None:
        log.warning("Could not scan %s", error)
        failures[error.category] = error.message

    if sequential or total <= 1:
        for i, category in enumerate(categories):
            try:
                scan_category(archive_root, category, aggregator)
            except CategoryScanError as e:
                _handle_failure(e)
            if progress_callback:
                progress_callback(category.label, i + 1, total)
    else:
        with ThreadPoolExecutor(max_workers=max_workers or total) as executor:
            future_to_category = {
                executor.submit(scan_category, archive_root, cat, aggregator): cat
                for cat in categories
            }

            for i, future in enumerate(as_completed(future_to_category)):
                category = future_to_category[future]
                try:
                    future.result()
                except CategoryScanError as e:
                    _handle_failure(e)
                if progress_callback:
                    progress_callback(category.label, i + 1, total)

    rows = []
    for row in aggregator.snapshot():
        if row.category in failures:
            row = ReportRow(
                category=row.category,
                result=row.result.model_copy(update={"error": failures[row.category]}),
            )
        rows.append(row)

    overall_sizes = None
    if track_sizes:
        overall_sizes = [size for category in categories for size in aggregator.sizes(category)]

    report = build_report(rows, overall_sizes)
    log.info(
        "Scan finished: %d games, %d bytes, %d failed categories",
        report.total.item_count,
        report.total.total_bytes,
        len(failures),
    )
    return report
