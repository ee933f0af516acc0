from __future__ import annotations

import boundedlru


def test_caches_are_exported() -> None:
    assert boundedlru.BoundedLRUCache(1).capacity == 1
    assert boundedlru.OrderedLRUCache(1).capacity == 1


def test_exceptions_are_exported() -> None:
    from boundedlru import (  # noqa: PLC0415
        BoundedLRUError,
        InvalidCapacityError,
        ScenarioError,
    )

    for exc in (BoundedLRUError, InvalidCapacityError, ScenarioError):
        assert issubclass(exc, Exception)


def test_version_is_a_string() -> None:
    assert isinstance(boundedlru.__version__, str)
    assert boundedlru.__version__
