"""Content descriptors, digests and well-known media types."""

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Mapping

MEDIA_TYPE_DOCKER_MANIFEST = "application/vnd.docker.distribution.manifest.v2+json"
MEDIA_TYPE_DOCKER_MANIFEST_LIST = (
    "application/vnd.docker.distribution.manifest.list.v2+json"
)
MEDIA_TYPE_IMAGE_MANIFEST = "application/vnd.oci.image.manifest.v1+json"
MEDIA_TYPE_IMAGE_INDEX = "application/vnd.oci.image.index.v1+json"
MEDIA_TYPE_IMAGE_CONFIG = "application/vnd.oci.image.config.v1+json"
MEDIA_TYPE_IMAGE_LAYER = "application/vnd.oci.image.layer.v1.tar"
MEDIA_TYPE_EMPTY_JSON = "application/vnd.oci.empty.v1+json"

_ENCODED_LENGTHS = {"sha256": 64, "sha384": 96, "sha512": 128}
_HEX_CHARS = frozenset("0123456789abcdef")
_CHUNK_SIZE = 64 * 1024


class InvalidDigestError(ValueError):
    """Raised when a digest string is malformed or uses an unknown algorithm."""


@dataclass
class Descriptor:
    """Describes a piece of content by media type, digest and size."""

    media_type: str = ""
    digest: str = ""
    size: int = 0
    urls: list[str] | None = None
    annotations: dict[str, str] | None = None
    data: bytes | None = None
    platform: dict[str, Any] | None = None
    artifact_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form, omitting empty optional fields."""
        result: dict[str, Any] = {
            "mediaType": self.media_type,
            "digest": self.digest,
            "size": self.size,
        }
        if self.urls:
            result["urls"] = list(self.urls)
        if self.annotations:
            result["annotations"] = dict(self.annotations)
        if self.data:
            result["data"] = base64.b64encode(self.data).decode("ascii")
        if self.platform:
            result["platform"] = dict(self.platform)
        if self.artifact_type:
            result["artifactType"] = self.artifact_type
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Descriptor":
        """Build a descriptor from its JSON object form."""
        raw = data.get("data")
        return cls(
            media_type=data.get("mediaType", ""),
            digest=data.get("digest", ""),
            size=int(data.get("size", 0)),
            urls=list(data["urls"]) if data.get("urls") else None,
            annotations=dict(data["annotations"]) if data.get("annotations") else None,
            data=base64.b64decode(raw) if raw else None,
            platform=dict(data["platform"]) if data.get("platform") else None,
            artifact_type=data.get("artifactType", ""),
        )


def parse_digest(value: str) -> str:
    """Validate a digest of the form ``algorithm:encoded`` and return it."""
    algorithm, sep, encoded = value.partition(":")
    if not sep or not algorithm or not encoded:
        raise InvalidDigestError(f"invalid checksum digest format: {value!r}")
    length = _ENCODED_LENGTHS.get(algorithm)
    if length is None:
        raise InvalidDigestError(f"unsupported digest algorithm: {value!r}")
    if len(encoded) != length:
        raise InvalidDigestError(f"invalid checksum digest length: {value!r}")
    if not set(encoded) <= _HEX_CHARS:
        raise InvalidDigestError(f"invalid checksum digest format: {value!r}")
    return value


def digest_from_bytes(data: bytes) -> str:
    """Return the sha256 digest of ``data``."""
    return "sha256:" + hashlib.sha256(data).hexdigest()


def digest_from_reader(reader: BinaryIO) -> str:
    """Return the sha256 digest of everything left in ``reader``."""
    hasher = hashlib.sha256()
    for chunk in iter(lambda: reader.read(_CHUNK_SIZE), b""):
        hasher.update(chunk)
    return "sha256:" + hasher.hexdigest()


def is_image_manifest(desc: Descriptor) -> bool:
    """Tell whether ``desc`` points at an OCI or Docker image manifest."""
    return desc.media_type in (MEDIA_TYPE_DOCKER_MANIFEST, MEDIA_TYPE_IMAGE_MANIFEST)