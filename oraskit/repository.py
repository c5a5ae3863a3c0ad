"""Registry references and repository paths."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .descriptor import InvalidDigestError, parse_digest

_REGISTRY_RE = re.compile(
    r"^(?:\[[0-9A-Fa-f:.]+\]|[A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?)(?::[0-9]*)?$"
)
_REPOSITORY_RE = re.compile(
    r"^[a-z0-9]+(?:(?:[._]|__|[-]*)[a-z0-9]+)*"
    r"(?:/[a-z0-9]+(?:(?:[._]|__|[-]*)[a-z0-9]+)*)*$"
)
_TAG_RE = re.compile(r"^\w[\w.-]{0,127}$", re.ASCII)


class InvalidReferenceError(ValueError):
    """Raised when a reference or repository path is malformed."""


@dataclass(frozen=True)
class Reference:
    """A reference to a repository, optionally pinned to a tag or digest."""

    registry: str
    repository: str
    reference: str = ""

    def __str__(self) -> str:
        base = f"{self.registry}/{self.repository}"
        if not self.reference:
            return base
        try:
            parse_digest(self.reference)
        except InvalidDigestError:
            return f"{base}:{self.reference}"
        return f"{base}@{self.reference}"


def _validate(ref: Reference, raw: str, is_tag: bool) -> None:
    if not _REGISTRY_RE.match(ref.registry):
        raise InvalidReferenceError(f"invalid reference: invalid registry: {raw!r}")
    if not _REPOSITORY_RE.match(ref.repository):
        raise InvalidReferenceError(f"invalid reference: invalid repository: {raw!r}")
    if not ref.reference:
        return
    if is_tag:
        if not _TAG_RE.match(ref.reference):
            raise InvalidReferenceError(f"invalid reference: invalid tag: {raw!r}")
        return
    try:
        parse_digest(ref.reference)
    except InvalidDigestError as exc:
        raise InvalidReferenceError(
            f"invalid reference: invalid digest: {raw!r}"
        ) from exc


def parse_reference(raw: str) -> Reference:
    """Parse ``registry/repository[:tag|@digest]``."""
    registry, sep, path = raw.partition("/")
    if not sep:
        raise InvalidReferenceError(f"invalid reference: missing repository: {raw!r}")

    is_tag = False
    if "@" in path:
        repository, _, reference = path.partition("@")
        repository = repository.partition(":")[0]
    elif ":" in path:
        repository, _, reference = path.partition(":")
        is_tag = True
    else:
        repository, reference = path, ""

    ref = Reference(registry=registry, repository=repository, reference=reference)
    _validate(ref, raw, is_tag)
    return ref


def parse_repo_path(raw_reference: str) -> tuple[str, str]:
    """Split ``host[/namespace]`` into the host name and a namespace ending in ``/``."""
    raw_reference = raw_reference.removesuffix("/")
    if "/" not in raw_reference:
        return raw_reference, ""
    ref = parse_reference(raw_reference)
    if ref.reference:
        raise InvalidReferenceError("tags or digests should not be provided")
    return ref.registry, ref.repository + "/"