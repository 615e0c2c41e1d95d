"""Version information for gwtr."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gwtr")
except PackageNotFoundError:
    # Running from a source checkout that was never installed
    __version__ = "0.1.0"
