"""Read-only targets that keep a local copy of what they fetch."""

from __future__ import annotations

from typing import Any, BinaryIO

from .descriptor import Descriptor


class _CachingReader:
    """Reads from a source and stores what was read in a cache on close.

    If the content was not read in full, the cache rejects it and
    ``close`` raises that error.
    """

    def __init__(self, source: BinaryIO, cache: Any, desc: Descriptor) -> None:
        self._source = source
        self._cache = cache
        self._desc = desc
        self._buffer = bytearray()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def readable(self) -> bool:
        return True

    def read(self, size: int | None = -1) -> bytes:
        if self._closed:
            raise ValueError("read from closed reader")
        data = self._source.read() if size is None or size < 0 else self._source.read(size)
        self._buffer += data
        return data

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        source_error: Exception | None = None
        try:
            self._source.close()
        except Exception as exc:  # reported after the cache push
            source_error = exc
        self._cache.push(self._desc, bytes(self._buffer))
        if source_error is not None:
            raise source_error

    def __enter__(self) -> "_CachingReader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class CachedTarget:
    """A read-only target that serves content from a cache when it can."""

    def __init__(self, source: Any, cache: Any) -> None:
        self.source = source
        self.cache = cache

    def _caching_reader(self, reader: BinaryIO, desc: Descriptor) -> _CachingReader:
        return _CachingReader(reader, self.cache, desc)

    def fetch(self, desc: Descriptor) -> Any:
        """Return the content from the cache, or from the source while caching it."""
        try:
            return self.cache.fetch(desc)
        except Exception:
            pass
        reader = self.source.fetch(desc)
        return self._caching_reader(reader, desc)

    def exists(self, desc: Descriptor) -> bool:
        """Tell whether the content exists in the cache or in the source."""
        try:
            if self.cache.exists(desc):
                return True
        except Exception:
            pass
        return self.source.exists(desc)

    def resolve(self, reference: str) -> Descriptor:
        """Resolve ``reference`` through the source."""
        return self.source.resolve(reference)


class CachedReferenceTarget(CachedTarget):
    """A cached target whose source can also fetch by reference."""

    def fetch_reference(self, reference: str) -> tuple[Descriptor, Any]:
        """Fetch by reference from the source, reading content from the cache if held.

        The reference is always resolved by the source; only the content may
        come from the cache.
        """
        desc, reader = self.source.fetch_reference(reference)
        if self.cache.exists(desc):
            reader.close()
            return desc, self.cache.fetch(desc)
        return desc, self._caching_reader(reader, desc)


def new_cached_target(source: Any, cache: Any) -> CachedTarget:
    """Wrap ``source`` so that fetched content is kept in ``cache``."""
    if callable(getattr(source, "fetch_reference", None)):
        return CachedReferenceTarget(source, cache)
    return CachedTarget(source, cache)