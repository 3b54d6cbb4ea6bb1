"""Category registry for arcstat."""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from arcstat.errors import RegistryError
from arcstat.models import Category

log = logging.getLogger(__name__)

# Registry file picked up from the archive root when no explicit one is given
REGISTRY_FILENAME = "arcstat.json"

# Built-in systems, in display order
CATEGORIES: list[Category] = [
    Category(label="3DS", relative_path="3ds", color="rgb(215,0,0)"),
    Category(label="DS", relative_path="ds", color="rgb(135,215,255)"),
    Category(label="GB", relative_path="gb", color="rgb(95,135,95)"),
    Category(label="GBA", relative_path="gba", color="rgb(255,175,255)"),
    Category(label="GCN", relative_path="games", items_are_directories=True, color="rgb(135,95,255)"),
    Category(label="GEN", relative_path="gen", color="rgb(88,88,88)"),
    Category(label="N64", relative_path="n64", color="rgb(0,215,135)"),
    Category(label="NES", relative_path="nes", color="rgb(215,0,0)"),
    Category(label="PS1", relative_path="ps1", items_are_directories=True, color="rgb(178,178,178)"),
    Category(label="PS2", relative_path="ps2", color="rgb(102,102,102)"),
    Category(label="PSP", relative_path="psp", color="rgb(95,135,255)"),
    Category(label="SNES", relative_path="snes", color="rgb(95,0,255)"),
    Category(label="WII", relative_path="wbfs", items_are_directories=True, color="rgb(0,215,255)"),
]

_registry_adapter = TypeAdapter(list[Category])


def get_all_categories() -> list[Category]:
    """Get all built-in categories."""
    return list(CATEGORIES)


def parse_category_filter(text: Optional[str]) -> list[str] | None:
    """
    Split a comma- and/or space-separated label list.

    Returns None when there is nothing to filter on.
    """
    if text is None:
        return None
    labels = [part for part in re.split(r"[,\s]+", text) if part]
    return labels or None


def select_categories(categories: list[Category], labels: list[str] | None) -> list[Category]:
    """
    Filter categories by label, keeping registry order.

    A category matches when a label equals its display label or its
    directory name exactly. ``None`` selects everything.
    """
    if labels is None:
        return list(categories)
    wanted = set(labels)
    return [c for c in categories if c.label in wanted or c.relative_path in wanted]


def load_registry(path: Path) -> list[Category]:
    """
    Load categories from a JSON registry file.

    The file holds a list of objects with ``label``, ``relative_path`` and
    optionally ``items_are_directories`` and ``color``.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise RegistryError(f"Could not read registry {path}: {e}") from e

    try:
        categories = _registry_adapter.validate_python(raw)
    except ValidationError as e:
        raise RegistryError(f"Invalid registry {path}: {e}") from e

    if len(set(categories)) != len(categories):
        raise RegistryError(f"Invalid registry {path}: duplicate category directories")

    log.info("Loaded %d categories from %s", len(categories), path)
    return categories


def resolve_registry(archive_root: Path, registry_path: Optional[Path] = None) -> list[Category]:
    """Pick the explicit registry, the archive's own registry file, or the built-ins."""
    if registry_path is not None:
        return load_registry(registry_path)

    candidate = archive_root / REGISTRY_FILENAME
    if candidate.is_file():
        return load_registry(candidate)

    return get_all_categories()
