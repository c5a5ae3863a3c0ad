"""Preparing manifest and blob content from files or standard input."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import BinaryIO

from .descriptor import (
    Descriptor,
    InvalidDigestError,
    digest_from_reader,
    parse_digest,
)


def _stdin() -> BinaryIO:
    return getattr(sys.stdin, "buffer", sys.stdin)


def _wrap_os_error(exc: OSError, message: str) -> OSError:
    if exc.errno is None:
        return OSError(f"{message}: {exc}")
    # OSError picks the matching subclass (FileNotFoundError, ...) from errno.
    return OSError(exc.errno, f"{message}: {exc.strerror}")


def prepare_manifest_content(path: str) -> bytes:
    """Read manifest content from ``path``, or from standard input for ``-``."""
    if not path:
        raise ValueError("missing file name")
    try:
        if path == "-":
            return _stdin().read()
        return Path(path).read_bytes()
    except OSError as exc:
        raise _wrap_os_error(exc, f"failed to read {path}") from exc


def prepare_blob_content(
    path: str, media_type: str, digest: str = "", size: int = -1
) -> tuple[Descriptor, BinaryIO]:
    """Describe the blob at ``path`` (or standard input for ``-``).

    A given digest and a non-negative size are used as they are; content read
    from standard input must come with both. Returns the descriptor and an
    open reader positioned at the start of the content.
    """
    if not path:
        raise ValueError("missing file name")

    if digest:
        try:
            parse_digest(digest)
        except InvalidDigestError as exc:
            raise InvalidDigestError(f"invalid digest {digest}: {exc}") from exc

    if path == "-":
        if size < 0:
            raise ValueError("content size must be provided if it is read from stdin")
        if not digest:
            raise ValueError(
                "content digest must be provided if it is read from stdin"
            )
        return Descriptor(media_type=media_type, digest=digest, size=size), _stdin()

    try:
        file = open(path, "rb")
    except OSError as exc:
        raise _wrap_os_error(exc, f"failed to open {path}") from exc

    try:
        try:
            actual_size = os.fstat(file.fileno()).st_size
        except OSError as exc:
            raise _wrap_os_error(exc, f"failed to stat {path}") from exc
        if size >= 0 and size != actual_size:
            raise ValueError(
                f"input size {size} does not match the actual content size "
                f"{actual_size}"
            )
        if not digest:
            digest = digest_from_reader(file)
            file.seek(0)
    except BaseException:
        file.close()
        raise

    return Descriptor(media_type=media_type, digest=digest, size=actual_size), file