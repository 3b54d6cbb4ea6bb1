"""Shared test fixtures."""

from pathlib import Path

import pytest


def _write_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * size)
    return path


@pytest.fixture
def write_file():
    """Create a file of the given size, making parent directories."""
    return _write_file


@pytest.fixture
def archive(tmp_path):
    """
    A small archive:

    snes/  two cartridges plus a BIOS folder
    nes/   three cartridges
    ps1/   two multi-file discs, a stray cue sheet and a BIOS folder
    gb/    empty
    """
    root = tmp_path / "archive"
    _write_file(root / "snes" / "Chrono Trigger.sfc", 4000)
    _write_file(root / "snes" / "Earthbound.sfc", 3000)
    _write_file(root / "snes" / "!bios" / "st010.bin", 500)
    _write_file(root / "nes" / "Metroid.nes", 100)
    _write_file(root / "nes" / "Zelda.nes", 200)
    _write_file(root / "nes" / "Kirby.nes", 300)
    _write_file(root / "ps1" / "Vagrant Story" / "disc.bin", 7000)
    _write_file(root / "ps1" / "Vagrant Story" / "disc.cue", 10)
    _write_file(root / "ps1" / "Xenogears" / "disc1.bin", 6000)
    _write_file(root / "ps1" / "Xenogears" / "disc2.bin", 5000)
    _write_file(root / "ps1" / "Xenogears" / "extras" / "manual.pdf", 999)
    _write_file(root / "ps1" / "stray.cue", 20)
    _write_file(root / "ps1" / "!bios" / "scph1001.bin", 512)
    (root / "gb").mkdir(parents=True)
    return root


@pytest.fixture
def distinct_archive(tmp_path):
    """
    Three systems whose counts and sizes all differ:

    gba/  1 cartridge, 100 bytes
    nes/  2 cartridges, 500 bytes
    ps1/  3 discs, 6010 bytes
    """
    root = tmp_path / "distinct"
    _write_file(root / "gba" / "Metroid Fusion.gba", 100)
    _write_file(root / "nes" / "Zelda.nes", 200)
    _write_file(root / "nes" / "Metroid.nes", 300)
    _write_file(root / "ps1" / "Silent Hill" / "disc.bin", 1000)
    _write_file(root / "ps1" / "Parasite Eve" / "disc1.bin", 2000)
    _write_file(root / "ps1" / "Parasite Eve" / "disc1.cue", 10)
    _write_file(root / "ps1" / "Suikoden" / "disc.bin", 3000)
    return root
