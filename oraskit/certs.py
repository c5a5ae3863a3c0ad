"""Loading trusted certificates from PEM files."""

from __future__ import annotations

import base64
import binascii
import os
import re
import ssl
from pathlib import Path

_PEM_BLOCK = re.compile(
    rb"-----BEGIN CERTIFICATE-----(.*?)-----END CERTIFICATE-----", re.DOTALL
)


def load_cert_pool(path: str | os.PathLike[str]) -> ssl.SSLContext:
    """Return a client TLS context trusting the certificates in the PEM file.

    Blocks that do not hold a usable certificate are skipped; a file without
    any usable certificate is an error.
    """
    pem = Path(path).read_bytes()
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    loaded = 0
    for match in _PEM_BLOCK.finditer(pem):
        try:
            der = base64.b64decode(b"".join(match.group(1).split()), validate=True)
        except binascii.Error:
            continue
        if not der:
            continue
        try:
            context.load_verify_locations(cadata=der)
        except ssl.SSLError:
            continue
        loaded += 1
    if not loaded:
        raise ValueError(f"Failed to load certificate in file: {path}")
    return context