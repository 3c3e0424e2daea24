"""Package version lookup."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "tableadmin"
UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """Version of the installed ``tableadmin`` distribution.

    A source tree that was never installed reports ``0.0.0``.
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
