"""Walking the content graph: successors and predecessors of manifests."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from .content import fetch_all
from .descriptor import (
    MEDIA_TYPE_DOCKER_MANIFEST,
    MEDIA_TYPE_DOCKER_MANIFEST_LIST,
    MEDIA_TYPE_IMAGE_INDEX,
    MEDIA_TYPE_IMAGE_MANIFEST,
    Descriptor,
)

MEDIA_TYPE_ARTIFACT_MANIFEST = "application/vnd.oci.artifact.manifest.v1+json"


def _descriptors(items: Any) -> list[Descriptor]:
    return [Descriptor.from_dict(item) for item in items or []]


def _optional(item: Any) -> Descriptor | None:
    return Descriptor.from_dict(item) if item else None


@dataclass
class Artifact:
    """An artifact manifest, a manifest type of image-spec pre-releases."""

    media_type: str = MEDIA_TYPE_ARTIFACT_MANIFEST
    artifact_type: str = ""
    blobs: list[Descriptor] = field(default_factory=list)
    subject: Descriptor | None = None
    annotations: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "mediaType": self.media_type,
            "artifactType": self.artifact_type,
        }
        if self.blobs:
            result["blobs"] = [blob.to_dict() for blob in self.blobs]
        if self.subject is not None:
            result["subject"] = self.subject.to_dict()
        if self.annotations:
            result["annotations"] = dict(self.annotations)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Artifact":
        return cls(
            media_type=data.get("mediaType", ""),
            artifact_type=data.get("artifactType", ""),
            blobs=_descriptors(data.get("blobs")),
            subject=_optional(data.get("subject")),
            annotations=dict(data["annotations"]) if data.get("annotations") else None,
        )


def _load(fetcher: Any, node: Descriptor) -> dict[str, Any]:
    return json.loads(fetch_all(fetcher, node))


def successors(
    fetcher: Any, node: Descriptor
) -> tuple[list[Descriptor], Descriptor | None, Descriptor | None]:
    """Return the nodes ``node`` points at, with its subject and config picked out.

    For manifests the layers are returned as nodes and the config separately;
    subject and config are ``None`` where they do not apply.
    """
    media_type = node.media_type
    if media_type in (MEDIA_TYPE_DOCKER_MANIFEST, MEDIA_TYPE_IMAGE_MANIFEST):
        manifest = _load(fetcher, node)
        config = Descriptor.from_dict(manifest.get("config") or {})
        return (
            _descriptors(manifest.get("layers")),
            _optional(manifest.get("subject")),
            config,
        )
    if media_type == MEDIA_TYPE_ARTIFACT_MANIFEST:
        artifact = Artifact.from_dict(_load(fetcher, node))
        return artifact.blobs, artifact.subject, None
    if media_type == MEDIA_TYPE_IMAGE_INDEX:
        index = _load(fetcher, node)
        return (
            _descriptors(index.get("manifests")),
            _optional(index.get("subject")),
            None,
        )
    if media_type == MEDIA_TYPE_DOCKER_MANIFEST_LIST:
        return _descriptors(_load(fetcher, node).get("manifests")), None, None
    return [], None, None


def find_predecessors(
    src: Any,
    descs: Sequence[Descriptor],
    find: Callable[[Any, Descriptor], Sequence[Descriptor]],
    concurrency: int = 0,
) -> list[Descriptor]:
    """Call ``find(src, desc)`` for every descriptor concurrently and join the results.

    A non-positive ``concurrency`` means no limit. The first error raised is
    propagated.
    """
    descs = list(descs)
    if not descs:
        return []
    workers = concurrency if concurrency > 0 else len(descs)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(find, src, desc) for desc in descs]
        referrers: list[Descriptor] = []
        for future in futures:
            referrers.extend(future.result())
    return referrers