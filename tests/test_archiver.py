from __future__ import annotations

import logging
import os
import tarfile

import pytest

from tarutil.common.errors import (
    ArchiveFormatError,
    ArchiveIOError,
    InvalidExtensionError,
    SourceNotFoundError,
)
from tarutil.core import archiver
from tarutil.core.archiver import ArchiveEntry, archive, iter_entries

EXPECTED_TREE = [
    "build",
    "build/obj",
    "build/obj/main.o",
    "docs",
    "docs/guide.txt",
    "empty",
    "hello.txt",
]


def read_names(path):
    with tarfile.open(path, "r:*") as tar:
        return tar.getnames()


def test_iter_entries_walks_depth_first_in_lexical_order(sample_tree):
    entries = list(iter_entries(sample_tree))

    assert [entry.name for entry in entries] == EXPECTED_TREE
    by_name = {entry.name: entry for entry in entries}
    assert by_name["build/obj"].is_dir
    assert by_name["build/obj/main.o"].size == 4
    assert not by_name["hello.txt"].is_dir


def test_iter_entries_single_file_uses_base_name(sample_tree):
    entries = list(iter_entries(sample_tree / "hello.txt"))

    assert len(entries) == 1
    assert entries[0].name == "hello.txt"
    assert entries[0].size == len("hello world\n")


def test_entry_to_tarinfo_for_directory():
    entry = ArchiveEntry(name="docs", path="/tmp/docs", mode=0o750, is_dir=True, size=99)
    info = entry.to_tarinfo()

    assert info.isdir()
    assert info.size == 0
    assert info.mode == 0o750


@pytest.mark.parametrize("suffix", [".tar", ".tar.gz"])
def test_archive_single_file(sample_tree, tmp_path, suffix):
    dst = tmp_path / f"out{suffix}"
    archive(sample_tree / "hello.txt", dst)

    with tarfile.open(dst, "r:*") as tar:
        members = tar.getmembers()
        assert [m.name for m in members] == ["hello.txt"]
        assert tar.extractfile(members[0]).read() == b"hello world\n"


@pytest.mark.parametrize("suffix", [".tar", ".tar.gz"])
def test_archive_directory_uses_relative_names(sample_tree, tmp_path, suffix):
    dst = tmp_path / f"tree{suffix}"
    archive(str(sample_tree), str(dst))

    assert read_names(dst) == EXPECTED_TREE
    with tarfile.open(dst, "r:*") as tar:
        assert tar.getmember("empty").isdir()
        assert tar.extractfile("build/obj/main.o").read() == b"\x00\x01\x02\xff"


def test_archive_compression_follows_suffix(sample_tree, tmp_path):
    plain = tmp_path / "plain.tar"
    packed = tmp_path / "packed.tar.gz"
    archive(sample_tree, plain)
    archive(sample_tree, packed)

    assert packed.read_bytes()[:2] == b"\x1f\x8b"
    assert plain.read_bytes()[257:262] == b"ustar"


def test_archive_preserves_file_mode(sample_tree, tmp_path):
    target = sample_tree / "hello.txt"
    os.chmod(target, 0o640)
    dst = tmp_path / "mode.tar"
    archive(target, dst)

    with tarfile.open(dst) as tar:
        assert tar.getmember("hello.txt").mode & 0o777 == 0o640


def test_archive_excludes_matching_entries(sample_tree, tmp_path):
    dst = tmp_path / "excluded.tar"
    archive(sample_tree, dst, "docs", "main.o")

    assert read_names(dst) == ["build", "build/obj", "empty", "hello.txt"]


def test_archive_exclusion_only_drops_literal_match(sample_tree, tmp_path):
    dst = tmp_path / "excluded.tar"
    archive(sample_tree, dst, "obj/main.o")

    names = read_names(dst)
    assert "build/obj" in names
    assert "build/obj/main.o" not in names


def test_archive_ignores_empty_exclusion(sample_tree, tmp_path):
    dst = tmp_path / "all.tar"
    archive(sample_tree, dst, "")

    assert read_names(dst) == EXPECTED_TREE


def test_archive_missing_source(tmp_path):
    dst = tmp_path / "out.tar"
    with pytest.raises(SourceNotFoundError):
        archive(tmp_path / "nonexistent", dst)
    assert not dst.exists()


def test_archive_invalid_extension_fails_before_io(sample_tree, tmp_path):
    dst = tmp_path / "fresh" / "out.zip"
    with pytest.raises(InvalidExtensionError):
        archive(sample_tree, dst)
    assert not dst.parent.exists()


def test_archive_creates_missing_parent_directories(sample_tree, tmp_path):
    dst = tmp_path / "a" / "b" / "out.tar.gz"
    archive(sample_tree, dst)

    assert dst.is_file()
    assert read_names(dst) == EXPECTED_TREE


def test_archive_overwrites_existing_destination(sample_tree, tmp_path):
    dst = tmp_path / "out.tar"
    dst.write_bytes(b"garbage" * 1000)
    archive(sample_tree / "hello.txt", dst)

    assert read_names(dst) == ["hello.txt"]


def test_archive_never_includes_itself(sample_tree):
    dst = sample_tree / "self.tar"
    archive(sample_tree, dst)

    assert read_names(dst) == EXPECTED_TREE


def test_archive_read_failure_is_io_error(sample_tree, tmp_path, monkeypatch):
    def broken_open(self):
        raise PermissionError(13, "Permission denied", self.path)

    monkeypatch.setattr(archiver.ArchiveEntry, "open", broken_open)

    with pytest.raises(ArchiveIOError, match="failed to open"):
        archive(sample_tree, tmp_path / "out.tar")


def test_archive_header_failure_is_format_error(sample_tree, tmp_path, monkeypatch):
    original = archiver.ArchiveEntry.to_tarinfo

    def negative_mtime(self):
        info = original(self)
        info.mtime = -1
        return info

    monkeypatch.setattr(archiver.ArchiveEntry, "to_tarinfo", negative_mtime)

    with pytest.raises(ArchiveFormatError):
        archive(sample_tree, tmp_path / "out.tar")


def test_archive_logs_summary(sample_tree, tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="tarutil")
    archive(sample_tree, tmp_path / "out.tar")

    assert "Archived 7 entries" in caplog.text
