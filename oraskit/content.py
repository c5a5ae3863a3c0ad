"""In-memory content storage and read-only target composition."""

from __future__ import annotations

import hashlib
import io
import threading
from typing import Any, BinaryIO, Protocol

from .descriptor import Descriptor, parse_digest


class NotFoundError(LookupError):
    """Raised when requested content or a reference does not exist."""


class Fetcher(Protocol):
    def fetch(self, desc: Descriptor) -> BinaryIO: ...


def _read_all(reader: Any) -> bytes:
    if isinstance(reader, (bytes, bytearray, memoryview)):
        return bytes(reader)
    return reader.read()


def _verify(desc: Descriptor, data: bytes) -> None:
    if len(data) != desc.size:
        raise ValueError(
            f"content size mismatch for {desc.digest}: "
            f"expected {desc.size}, got {len(data)}"
        )
    algorithm = parse_digest(desc.digest).partition(":")[0]
    actual = f"{algorithm}:{hashlib.new(algorithm, data).hexdigest()}"
    if actual != desc.digest:
        raise ValueError(f"content digest mismatch: expected {desc.digest}, got {actual}")


class MemoryStore:
    """A content-addressable store held in memory, with tags."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}
        self._tags: dict[str, Descriptor] = {}
        self._lock = threading.Lock()

    def push(self, desc: Descriptor, reader: Any) -> None:
        """Store the content read from ``reader`` under ``desc``."""
        data = _read_all(reader)
        _verify(desc, data)
        with self._lock:
            if desc.digest in self._blobs:
                raise ValueError(f"{desc.digest}: already exists")
            self._blobs[desc.digest] = data

    def fetch(self, desc: Descriptor) -> BinaryIO:
        """Return a reader over the content described by ``desc``."""
        with self._lock:
            data = self._blobs.get(desc.digest)
        if data is None:
            raise NotFoundError(f"{desc.digest}: not found")
        return io.BytesIO(data)

    def exists(self, desc: Descriptor) -> bool:
        with self._lock:
            return desc.digest in self._blobs

    def tag(self, desc: Descriptor, reference: str) -> None:
        """Point ``reference`` at already stored content."""
        with self._lock:
            if desc.digest not in self._blobs:
                raise NotFoundError(f"{desc.digest}: not found")
            self._tags[reference] = desc

    def resolve(self, reference: str) -> Descriptor:
        with self._lock:
            desc = self._tags.get(reference)
        if desc is None:
            raise NotFoundError(f"{reference}: not found")
        return desc


def fetch_all(fetcher: Fetcher, desc: Descriptor) -> bytes:
    """Fetch the whole content of ``desc`` and verify its size and digest."""
    reader = fetcher.fetch(desc)
    try:
        data = reader.read()
    finally:
        reader.close()
    _verify(desc, data)
    return data


class MultiReadOnlyTarget:
    """Combines several read-only targets, consulted in order."""

    def __init__(self, *targets: Any) -> None:
        self.targets = list(targets)

    def fetch(self, desc: Descriptor) -> BinaryIO:
        """Return the first content found; other errors stop the search."""
        last_error: NotFoundError = NotFoundError(f"{desc.digest}: not found")
        for target in self.targets:
            try:
                return target.fetch(desc)
            except NotFoundError as exc:
                last_error = exc
        raise last_error

    def exists(self, desc: Descriptor) -> bool:
        raise RuntimeError("MultiReadOnlyTarget.exists() is not supported")

    def resolve(self, reference: str) -> Descriptor:
        """Return the first descriptor found for ``reference``."""
        last_error: NotFoundError = NotFoundError(f"{reference}: not found")
        for target in self.targets:
            try:
                return target.resolve(reference)
            except NotFoundError as exc:
                last_error = exc
        raise last_error