"""Scenario file loading.

A scenario is a small TOML document naming a cache implementation, its
capacity and a list of operations to replay:

    version = 1
    capacity = 2
    implementation = "linked"
    operations = ["put 1 1", "put 2 2", "get 1"]
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from boundedlru.cache import BoundedLRUCache
from boundedlru.errors import ScenarioError
from boundedlru.ordered import OrderedLRUCache
from boundedlru.trace import Operation

IMPLEMENTATIONS = {
    "linked": BoundedLRUCache,
    "ordered": OrderedLRUCache,
}


@dataclass(frozen=True)
class Scenario:
    version: int
    capacity: int
    implementation: str
    operations: tuple[Operation, ...]


def make_cache(implementation: str, capacity: int) -> BoundedLRUCache | OrderedLRUCache:
    try:
        cls = IMPLEMENTATIONS[implementation]
    except KeyError:
        choices = ", ".join(sorted(IMPLEMENTATIONS))
        raise ScenarioError(
            f"Unknown implementation {implementation!r} (expected one of: {choices})."
        ) from None
    return cls(capacity)


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ScenarioError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise ScenarioError(f"Expected {name} to be a string.")
    return value


def _as_str_list(value: Any, *, name: str) -> list[str]:
    if not isinstance(value, list) or any(not isinstance(x, str) for x in value):
        raise ScenarioError(f"Expected {name} to be a list of strings.")
    return list(value)


def parse_scenario(data: dict[str, Any]) -> Scenario:
    version = data.get("version", None)
    if version is None:
        raise ScenarioError("Missing required `version = 1` in scenario.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise ScenarioError(f"Unsupported scenario version: {version_i} (expected 1).")

    if "capacity" not in data:
        raise ScenarioError("Missing required `capacity` in scenario.")
    capacity = _as_int(data["capacity"], name="capacity")
    if capacity < 1:
        raise ScenarioError("Invalid scenario: capacity must be >= 1.")

    if "implementation" in data:
        implementation = _as_str(data["implementation"], name="implementation")
    else:
        implementation = "linked"
    if implementation not in IMPLEMENTATIONS:
        choices = ", ".join(sorted(IMPLEMENTATIONS))
        raise ScenarioError(
            f"Invalid scenario: implementation must be one of: {choices}."
        )

    if "operations" in data:
        raw_ops = _as_str_list(data["operations"], name="operations")
    else:
        raw_ops = []

    operations: list[Operation] = []
    for i, text in enumerate(raw_ops, start=1):
        try:
            operations.append(Operation.parse(text))
        except ScenarioError as e:
            raise ScenarioError(f"operations[{i}]: {e}") from e

    return Scenario(
        version=version_i,
        capacity=capacity,
        implementation=implementation,
        operations=tuple(operations),
    )


def load_scenario(path: Path) -> Scenario:
    """Read and validate a scenario TOML file."""

    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise ScenarioError(f"Missing scenario file: {path}") from e
    except OSError as e:
        raise ScenarioError(f"Failed reading scenario file: {path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ScenarioError(f"Scenario is not valid UTF-8: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ScenarioError(f"Invalid TOML in {path}: {e}") from e

    return parse_scenario(data)


def build_cache(scenario: Scenario) -> BoundedLRUCache | OrderedLRUCache:
    return make_cache(scenario.implementation, scenario.capacity)
