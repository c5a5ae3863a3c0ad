import io

import pytest

from oraskit.content import MemoryStore, MultiReadOnlyTarget, NotFoundError, fetch_all
from oraskit.descriptor import Descriptor, digest_from_bytes

BLOB = b"hello world"


def make_desc(blob=BLOB, media_type="test"):
    return Descriptor(media_type=media_type, digest=digest_from_bytes(blob), size=len(blob))


class RecordingTarget:
    def __init__(self, name, error=None, data=b"", desc=None):
        self.name = name
        self.error = error
        self.data = data
        self.desc = desc
        self.calls = 0

    def fetch(self, desc):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return io.BytesIO(self.data)

    def resolve(self, reference):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.desc


def test_push_fetch_round_trip():
    store = MemoryStore()
    desc = make_desc()
    assert store.exists(desc) is False
    store.push(desc, io.BytesIO(BLOB))
    assert store.exists(desc) is True
    assert store.fetch(desc).read() == BLOB
    assert fetch_all(store, desc) == BLOB


def test_push_accepts_bytes():
    store = MemoryStore()
    desc = make_desc()
    store.push(desc, BLOB)
    assert fetch_all(store, desc) == BLOB


def test_fetch_missing_raises():
    with pytest.raises(NotFoundError):
        MemoryStore().fetch(make_desc())


def test_push_rejects_wrong_size():
    desc = make_desc()
    bad = Descriptor(media_type=desc.media_type, digest=desc.digest, size=desc.size + 1)
    with pytest.raises(ValueError):
        MemoryStore().push(bad, BLOB)


def test_push_rejects_wrong_digest():
    desc = make_desc(b"other bytes")
    wrong = Descriptor(media_type="test", digest=desc.digest, size=len(BLOB))
    with pytest.raises(ValueError):
        MemoryStore().push(wrong, BLOB)


def test_push_twice_raises():
    store = MemoryStore()
    desc = make_desc()
    store.push(desc, BLOB)
    with pytest.raises(ValueError):
        store.push(desc, BLOB)


def test_tag_and_resolve():
    store = MemoryStore()
    desc = make_desc()
    store.push(desc, BLOB)
    store.tag(desc, "latest")
    assert store.resolve("latest") == desc


def test_tag_unknown_content_raises():
    with pytest.raises(NotFoundError):
        MemoryStore().tag(make_desc(), "latest")


def test_resolve_unknown_raises():
    with pytest.raises(NotFoundError):
        MemoryStore().resolve("missing")


def test_fetch_all_detects_corrupt_content():
    desc = make_desc()
    target = RecordingTarget("corrupt", data=b"hello w0rld")
    with pytest.raises(ValueError):
        fetch_all(target, desc)


def test_multi_fetch_returns_first_found():
    desc = make_desc()
    first = RecordingTarget("first", error=NotFoundError("missing"))
    second = RecordingTarget("second", data=BLOB)
    third = RecordingTarget("third", data=BLOB)
    multi = MultiReadOnlyTarget(first, second, third)
    assert multi.fetch(desc).read() == BLOB
    assert (first.calls, second.calls, third.calls) == (1, 1, 0)


def test_multi_fetch_with_stores():
    desc = make_desc()
    empty, full = MemoryStore(), MemoryStore()
    full.push(desc, BLOB)
    assert fetch_all(MultiReadOnlyTarget(empty, full), desc) == BLOB


def test_multi_fetch_not_found_everywhere():
    multi = MultiReadOnlyTarget(MemoryStore(), MemoryStore())
    with pytest.raises(NotFoundError):
        multi.fetch(make_desc())


def test_multi_fetch_without_targets_raises_not_found():
    with pytest.raises(NotFoundError):
        MultiReadOnlyTarget().fetch(make_desc())


def test_multi_fetch_propagates_other_errors():
    failing = RecordingTarget("failing", error=PermissionError("denied"))
    later = RecordingTarget("later", data=BLOB)
    with pytest.raises(PermissionError):
        MultiReadOnlyTarget(failing, later).fetch(make_desc())
    assert later.calls == 0


def test_multi_resolve_returns_first_found():
    desc = make_desc()
    store = MemoryStore()
    store.push(desc, BLOB)
    store.tag(desc, "v1")
    multi = MultiReadOnlyTarget(MemoryStore(), store)
    assert multi.resolve("v1") == desc
    with pytest.raises(NotFoundError):
        multi.resolve("v2")


def test_multi_resolve_propagates_other_errors():
    failing = RecordingTarget("failing", error=OSError("boom"))
    with pytest.raises(OSError):
        MultiReadOnlyTarget(failing).resolve("v1")


def test_multi_exists_is_unsupported():
    with pytest.raises(RuntimeError):
        MultiReadOnlyTarget(MemoryStore()).exists(make_desc())