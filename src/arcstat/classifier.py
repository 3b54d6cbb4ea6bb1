"""Decide how a directory entry contributes to a category's totals."""

from typing import NamedTuple

# Path segment marking firmware dumps, which are never games
BIOS_MARKER = "!bios"


class EntryAction(NamedTuple):
    """What the scanner should do with one top-level entry."""

    excluded: bool = False
    counts_as_item: bool = False
    sizes_self: bool = False
    descend: bool = False


SKIP = EntryAction(excluded=True)


def is_excluded(path: str) -> bool:
    """Whether a path lies inside (or is) BIOS content."""
    return BIOS_MARKER in path


def classify_entry(path: str, is_dir: bool, items_are_directories: bool) -> EntryAction:
    """
    Classify a top-level entry of a category directory.

    Single-file categories count every file as a game and ignore
    directories. Directory categories count every top-level directory as
    one game and size the files directly inside it; stray top-level files
    add to the size but not to the count.

    Args:
        path: Entry path
        is_dir: Whether the entry is a directory (False means a regular file)
        items_are_directories: The owning category's shape

    Returns:
        EntryAction for the scanner
    """
    if is_excluded(path):
        return SKIP

    if is_dir:
        if items_are_directories:
            return EntryAction(counts_as_item=True, descend=True)
        return EntryAction()

    return EntryAction(counts_as_item=not items_are_directories, sizes_self=True)
