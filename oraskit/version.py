"""Version information of the package."""

VERSION = "1.2.0-beta.1"
BUILD_METADATA = "unreleased"
GIT_COMMIT = ""
GIT_TREE_STATE = ""


def get_version(version: str = VERSION, build_metadata: str = BUILD_METADATA) -> str:
    """Return the semantic version string, with build metadata if any."""
    if not build_metadata:
        return version
    return f"{version}+{build_metadata}"