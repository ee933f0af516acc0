"""boundedlru exception hierarchy.

Keep this module small and dependency-free: it is imported broadly across the
project and by tests.
"""


class BoundedLRUError(Exception):
    """Base exception for all boundedlru errors."""


class InvalidCapacityError(BoundedLRUError, ValueError):
    """Raised when a cache is constructed with a non-positive capacity."""


class ScenarioError(BoundedLRUError):
    """Raised for an invalid scenario file or operation string."""
