# oraskit

Small pieces for handling content kept in OCI registries and image layouts.
The package has no dependencies outside the standard library.

## Modules

- `oraskit.descriptor` holds the `Descriptor` dataclass. It turns into the
  JSON object form with `to_dict` and is built back with `from_dict`. The
  module also has:
  - `parse_digest`, which checks an `algorithm:hex` digest and raises
    `InvalidDigestError` when it is wrong. It accepts sha256, sha384 and
    sha512.
  - `digest_from_bytes` and `digest_from_reader`, which give sha256 digests.
  - `is_image_manifest`, which is true for OCI and Docker image manifests.
  - Constants for the usual media types.
- `oraskit.content` has the following:
  - `MemoryStore` keeps content in memory, keyed by digest, and supports tags.
    It has `push`, `fetch`, `exists`, `tag` and `resolve`. `push` checks the
    size and the digest of the content.
  - `fetch_all` reads a whole blob and checks it.
  - `MultiReadOnlyTarget` asks several targets in order for `fetch` and
    `resolve`. It goes on to the next target only after a `NotFoundError`.
    Its `exists` is not supported and raises `RuntimeError`.
- `oraskit.cache` has `new_cached_target(source, cache)`. It returns a
  `CachedTarget`, or a `CachedReferenceTarget` when the source has
  `fetch_reference`.
  - A fetch is served from the cache when the content is there. Otherwise it
    comes from the source, and the bytes read are pushed into the cache when
    the reader is closed.
  - `fetch_reference` always resolves through the source. It reads the
    content from the cache when the cache already holds it.
- `oraskit.graph` has two functions and a dataclass:
  - `successors(fetcher, node)` returns `(nodes, subject, config)` for image
    manifests, artifact manifests, image indexes and Docker manifest lists.
  - `find_predecessors(src, descs, find, concurrency)` runs
    `find(src, desc)` for each descriptor on a thread pool and joins the
    results.
  - `Artifact` models the pre-release artifact manifest.
- `oraskit.file` reads content from a file, or from standard input when the
  path is `-`:
  - `prepare_manifest_content` returns the manifest bytes.
  - `prepare_blob_content(path, media_type, digest, size)` returns a
    descriptor and an open reader. Content from standard input must come with
    both a digest and a size.
- `oraskit.repository` splits registry references:
  - `parse_reference` parses `registry/repository[:tag|@digest]` into a
    `Reference`.
  - `parse_repo_path` splits `host[/namespace]` into a host and a namespace
    that ends in `/`. It rejects tags and digests.
- `oraskit.tree` draws trees. `Node` has `add`, `add_path` and `find`.
  `Printer` draws the tree with box-drawing characters to a text stream,
  standard output by default. `print_tree` is a shortcut for that default.
- `oraskit.trace` logs HTTP traffic:
  - `Transport` wraps another object that has `round_trip(request)`. It logs
    each `HTTPRequest` and `HTTPResponse` at debug level, and hides the
    `Authorization` and `Set-Cookie` values.
  - `format_headers` renders headers for those log lines.
  - `new_logger(debug, verbose)` creates the logger that writes to standard
    error and makes it the current one.
- `oraskit.netdial` has `Dialer`. `add` registers a rule that rewrites a
  `host:port` to a fixed `address:port`. `dial` connects to the address,
  using those rules.
- `oraskit.certs` has `load_cert_pool(path)`. It returns a client
  `ssl.SSLContext` that trusts the certificates in a PEM file, and raises
  `ValueError` when the file has none it can use.
- `oraskit.credential` has `credential(username, password)`, which builds a
  `Credential`. Without a username the password becomes the refresh token.
- `oraskit.lineio` has `read_line`. It reads one line from a binary stream,
  drops the trailing `\r`, and reads nothing past the newline.
- `oraskit.version` has `get_version` and the version constants.

## Example

```python
import io

from oraskit.content import MemoryStore, fetch_all
from oraskit.descriptor import Descriptor, digest_from_bytes
from oraskit.tree import Node, Printer

blob = b"hello world"
desc = Descriptor(media_type="test", digest=digest_from_bytes(blob), size=len(blob))

store = MemoryStore()
store.push(desc, io.BytesIO(blob))
assert fetch_all(store, desc) == blob

root = Node("root")
root.add_path("foo", "bar")
root.add(42)
Printer().print(root)
# root
# ├── foo
# │   └── bar
# └── 42
```

## What it does not do

This is a library of parts, not a registry tool:

- There is no command-line program.
- There is no HTTP client that talks to a registry. `Transport` only wraps a
  transport that you supply.
- There is no on-disk content store or image-layout store.
- There is no credential file storage.

## Running the tests

```
pip install -e ".[test]"
pytest
```