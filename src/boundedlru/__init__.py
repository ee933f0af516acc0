from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from boundedlru.cache import BoundedLRUCache
from boundedlru.errors import BoundedLRUError, InvalidCapacityError, ScenarioError
from boundedlru.ordered import OrderedLRUCache


def _package_version() -> str:
    try:
        return version("boundedlru")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "BoundedLRUCache",
    "BoundedLRUError",
    "InvalidCapacityError",
    "OrderedLRUCache",
    "ScenarioError",
    "__version__",
]
