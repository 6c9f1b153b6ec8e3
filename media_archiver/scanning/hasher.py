import hashlib
import os
from pathlib import Path
from typing import BinaryIO

from .. import config
from ..exceptions import FileHashError


class DigestStream:
    """
    File-like wrapper that hashes the content of `raw` as a side effect of
    reading it.

    Metadata decoders seek around freely, so the digest is kept over a
    contiguous prefix of the file: bytes [0, folded) are in the hash.
    A read that starts past that mark first folds the gap, a read that
    overlaps it folds only the new tail. Each byte enters the hash once,
    in file order, whatever the access pattern.

    Call read_remaining() before finalize() to cover the whole file.
    """

    def __init__(self, raw: BinaryIO):
        self._raw = raw
        self._hash = hashlib.new(config.HASH_ALGORITHM)
        self._folded = 0
        self._finalized = False

    # --- file-like surface used by decoders ---

    def read(self, size: int = -1) -> bytes:
        start = self._raw.tell()
        if start > self._folded:
            self._fold_gap(start)
        data = self._raw.read(size)
        self._fold(start, data)
        return data

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._raw.seek(offset, whence)

    def tell(self) -> int:
        return self._raw.tell()

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    # --- digest ---

    @property
    def folded(self) -> int:
        """Number of leading bytes already in the digest."""
        return self._folded

    def read_remaining(self):
        """Folds every byte after the high-water mark, up to EOF."""
        self._raw.seek(self._folded)
        while chunk := self._raw.read(config.HASH_CHUNK_SIZE):
            self._fold(self._folded, chunk)

    def finalize(self) -> bytes:
        if self._finalized:
            raise FileHashError("Digest already finalized")
        self._finalized = True
        return self._hash.digest()

    def _fold(self, start: int, data: bytes):
        end = start + len(data)
        if not data or end <= self._folded:
            return
        self._hash.update(memoryview(data)[self._folded - start:])
        self._folded = end

    def _fold_gap(self, target: int):
        """Reads and hashes [folded, target), then restores the position."""
        self._raw.seek(self._folded)
        while self._folded < target:
            chunk = self._raw.read(min(config.HASH_CHUNK_SIZE, target - self._folded))
            if not chunk:
                # Seeked past EOF; nothing left to fold
                break
            self._fold(self._folded, chunk)
        self._raw.seek(target)


def hash_file(path: Path) -> bytes:
    """Reads entire file. Reference digest for a plain sequential read."""
    h = hashlib.new(config.HASH_ALGORITHM)
    with open(path, 'rb') as f:
        while chunk := f.read(config.HASH_CHUNK_SIZE):
            h.update(chunk)
    return h.digest()
