"""GMod server tracker."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gmtracker")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
