"""Tests for file checksum and OSDb fingerprint."""

from __future__ import annotations

import struct
from collections.abc import Callable
from pathlib import Path

import pytest

from subscout.domain.exceptions import FileTooSmallError
from subscout.infrastructure.media.hashing import (
    CHUNK_SIZE,
    MIN_FINGERPRINT_SIZE,
    file_checksum,
    osdb_fingerprint,
)


class TestFileChecksum:
    def test_md5_of_known_content(self, make_file: Callable[..., Path]) -> None:
        path = make_file("sub.srt", content=b"hello")
        assert file_checksum(path) == "5d41402abc4b2a76b9719d911017c592"

    def test_empty_file(self, make_file: Callable[..., Path]) -> None:
        path = make_file("empty.srt", content=b"")
        assert file_checksum(path) == "d41d8cd98f00b204e9800998ecf8427e"

    def test_missing_file_raises_oserror(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            file_checksum(tmp_path / "nope.srt")


class TestOsdbFingerprint:
    def test_zero_file_hash_is_its_size(self, make_file: Callable[..., Path]) -> None:
        path = make_file("zero.mkv", size=MIN_FINGERPRINT_SIZE)
        assert osdb_fingerprint(path) == f"{MIN_FINGERPRINT_SIZE:016x}"
        assert osdb_fingerprint(path) == "0000000000020000"

    def test_words_read_little_endian(self, make_file: Callable[..., Path]) -> None:
        head = struct.pack("<Q", 1) + bytes(CHUNK_SIZE - 8)
        tail = bytes(CHUNK_SIZE - 8) + struct.pack("<Q", 2)
        path = make_file("le.mkv", content=head + tail)
        assert osdb_fingerprint(path) == f"{MIN_FINGERPRINT_SIZE + 3:016x}"

    def test_middle_of_file_is_ignored(self, make_file: Callable[..., Path]) -> None:
        middle = b"\xff" * CHUNK_SIZE
        path = make_file(
            "mid.mkv", content=bytes(CHUNK_SIZE) + middle + bytes(CHUNK_SIZE)
        )
        assert osdb_fingerprint(path) == f"{3 * CHUNK_SIZE:016x}"

    def test_sum_wraps_at_64_bits(self, make_file: Callable[..., Path]) -> None:
        max_word = struct.pack("<Q", 0xFFFF_FFFF_FFFF_FFFF)
        head = max_word + bytes(CHUNK_SIZE - 8)
        path = make_file("wrap.mkv", content=head + bytes(CHUNK_SIZE))
        # size + (2**64 - 1) wraps to size - 1
        assert osdb_fingerprint(path) == f"{MIN_FINGERPRINT_SIZE - 1:016x}"

    def test_is_deterministic(self, make_file: Callable[..., Path]) -> None:
        path = make_file("det.mkv", content=bytes(range(256)) * 1024)
        assert osdb_fingerprint(path) == osdb_fingerprint(path)
        assert len(osdb_fingerprint(path)) == 16

    @pytest.mark.parametrize("size", [0, 1, CHUNK_SIZE, MIN_FINGERPRINT_SIZE - 1])
    def test_small_file_rejected(
        self, make_file: Callable[..., Path], size: int
    ) -> None:
        path = make_file("small.mkv", size=size)
        with pytest.raises(FileTooSmallError) as exc_info:
            osdb_fingerprint(path)
        assert exc_info.value.size == size

    def test_missing_file_raises_oserror(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            osdb_fingerprint(tmp_path / "gone.mkv")
