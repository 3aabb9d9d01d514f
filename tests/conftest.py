"""Shared fixtures for the tarutil test suite."""

from __future__ import annotations

import io
import os
import sys
import tarfile
from pathlib import Path

import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A small directory tree with nested files and an empty directory."""
    root = tmp_path / "src"
    (root / "docs").mkdir(parents=True)
    (root / "docs" / "guide.txt").write_text("guide\n", encoding="utf-8")
    (root / "build" / "obj").mkdir(parents=True)
    (root / "build" / "obj" / "main.o").write_bytes(b"\x00\x01\x02\xff")
    (root / "hello.txt").write_text("hello world\n", encoding="utf-8")
    (root / "empty").mkdir()
    return root


@pytest.fixture
def make_raw_tar(tmp_path: Path):
    """Write a hand-crafted tar file from (name, payload) pairs.

    A payload of None produces a directory entry.
    """

    def _make(name: str, members) -> Path:
        path = tmp_path / name
        with tarfile.open(path, "w", format=tarfile.USTAR_FORMAT) as tar:
            for member_name, payload in members:
                info = tarfile.TarInfo(member_name)
                if payload is None:
                    info.type = tarfile.DIRTYPE
                    info.mode = 0o755
                    tar.addfile(info)
                else:
                    info.size = len(payload)
                    info.mode = 0o644
                    tar.addfile(info, io.BytesIO(payload))
        return path

    return _make
