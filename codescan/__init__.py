"""Static scanner for bad practices in custom Magento 2 modules."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("magento-codescan")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = ["__version__"]
