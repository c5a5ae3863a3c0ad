from oraskit.version import BUILD_METADATA, VERSION, get_version


def test_get_version_when_build_metadata_is_empty():
    assert get_version(VERSION, "") == VERSION


def test_get_version_default():
    assert get_version() == "1.2.0-beta.1+unreleased"
    assert get_version(VERSION, BUILD_METADATA) == VERSION + "+" + BUILD_METADATA