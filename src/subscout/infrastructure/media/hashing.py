"""Content hashing for videos and subtitles.

Two independent digests:

- ``file_checksum``: MD5 over the whole file, used to de-duplicate subtitles.
- ``osdb_fingerprint``: the OpenSubtitles "movie hash": file size plus the
  sum of the first and last 64 KiB read as little-endian uint64 words,
  modulo 2**64. A lookup key, not a cryptographic digest.
"""

from __future__ import annotations

import hashlib
import os
import struct
from pathlib import Path

from subscout.domain.exceptions import FileTooSmallError

CHUNK_SIZE = 65_536
MIN_FINGERPRINT_SIZE = CHUNK_SIZE * 2

_WORDS_PER_CHUNK = CHUNK_SIZE // 8
# "<" pins little-endian regardless of the host byte order.
_CHUNK_STRUCT = struct.Struct(f"<{_WORDS_PER_CHUNK}Q")
_UINT64_MASK = 0xFFFF_FFFF_FFFF_FFFF
_READ_BLOCK = 1 << 20


def file_checksum(path: str | Path) -> str:
    """Return the lowercase hex MD5 digest of the file at *path*."""
    digest = hashlib.md5()
    with open(path, "rb") as fh:
        for block in iter(lambda: fh.read(_READ_BLOCK), b""):
            digest.update(block)
    return digest.hexdigest()


def _read_exact(fh, size: int, path: str | Path) -> bytes:
    data = fh.read(size)
    if len(data) != size:
        raise OSError(f"short read from '{path}': got {len(data)} of {size} bytes")
    return data


def osdb_fingerprint(path: str | Path) -> str:
    """Return the 16-char hex OSDb movie hash of the file at *path*.

    Raises:
        FileTooSmallError: file is smaller than two chunks.
        OSError: file cannot be opened or read.
    """
    with open(path, "rb") as fh:
        size = os.fstat(fh.fileno()).st_size
        if size < MIN_FINGERPRINT_SIZE:
            raise FileTooSmallError(str(path), size, MIN_FINGERPRINT_SIZE)

        head = _read_exact(fh, CHUNK_SIZE, path)
        fh.seek(size - CHUNK_SIZE)
        tail = _read_exact(fh, CHUNK_SIZE, path)

    total = size
    total += sum(_CHUNK_STRUCT.unpack(head))
    total += sum(_CHUNK_STRUCT.unpack(tail))
    return f"{total & _UINT64_MASK:016x}"
