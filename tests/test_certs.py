import ssl

import pytest

from oraskit.certs import load_cert_pool


def _der(tag, body):
    length = len(body)
    if length < 0x80:
        encoded = bytes([length])
    else:
        raw = length.to_bytes((length.bit_length() + 7) // 8, "big")
        encoded = bytes([0x80 | len(raw)]) + raw
    return bytes([tag]) + encoded + body


def _seq(*parts):
    return _der(0x30, b"".join(parts))


_ED25519 = _der(0x06, bytes([0x2B, 0x65, 0x70]))
_COMMON_NAME = _der(0x06, bytes([0x55, 0x04, 0x03]))


def _name(cn):
    return _seq(_der(0x31, _seq(_COMMON_NAME, _der(0x0C, cn.encode()))))


def _certificate_der():
    algorithm = _seq(_ED25519)
    tbs = _seq(
        _der(0xA0, _der(0x02, b"\x02")),
        _der(0x02, b"\x01"),
        algorithm,
        _name("oraskit test"),
        _seq(_der(0x17, b"240101000000Z"), _der(0x17, b"340101000000Z")),
        _name("oraskit test"),
        _seq(algorithm, _der(0x03, b"\x00" + bytes(range(32)))),
    )
    return _seq(tbs, algorithm, _der(0x03, b"\x00" + bytes(64)))


def test_load_cert_pool(tmp_path):
    path = tmp_path / "oras-test.pem"
    path.write_text(ssl.DER_cert_to_PEM_cert(_certificate_der()))
    context = load_cert_pool(path)
    assert context.cert_store_stats()["x509"] == 1
    assert context.verify_mode == ssl.CERT_REQUIRED


def test_load_cert_pool_skips_unusable_blocks(tmp_path):
    bad = "-----BEGIN CERTIFICATE-----\nbm90IGEgY2VydA==\n-----END CERTIFICATE-----\n"
    path = tmp_path / "mixed.pem"
    path.write_text(bad + ssl.DER_cert_to_PEM_cert(_certificate_der()))
    assert load_cert_pool(str(path)).cert_store_stats()["x509"] == 1


def test_load_cert_pool_invalid_pem(tmp_path):
    path = tmp_path / "invalid.pem"
    path.write_bytes(b"")
    with pytest.raises(ValueError, match="Failed to load certificate in file"):
        load_cert_pool(str(path))


def test_load_cert_pool_only_bad_blocks(tmp_path):
    path = tmp_path / "bad.pem"
    path.write_text(
        "-----BEGIN CERTIFICATE-----\nbm90IGEgY2VydA==\n-----END CERTIFICATE-----\n"
    )
    with pytest.raises(ValueError, match="Failed to load certificate in file"):
        load_cert_pool(str(path))


def test_load_cert_pool_pem_not_exist(tmp_path):
    with pytest.raises(OSError):
        load_cert_pool(str(tmp_path / "missing.pem"))