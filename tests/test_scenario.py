from __future__ import annotations

from pathlib import Path

import pytest

from boundedlru.cache import BoundedLRUCache
from boundedlru.errors import ScenarioError
from boundedlru.ordered import OrderedLRUCache
from boundedlru.scenario import build_cache, load_scenario, make_cache, parse_scenario
from boundedlru.trace import Operation, run_trace


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "scenario.toml"
    p.write_text(text, encoding="utf-8")
    return p


def test_load_minimal_scenario_defaults_apply(tmp_path: Path) -> None:
    sc = load_scenario(_write(tmp_path, "version = 1\ncapacity = 3\n"))

    assert sc.version == 1
    assert sc.capacity == 3
    assert sc.implementation == "linked"
    assert sc.operations == ()
    assert isinstance(build_cache(sc), BoundedLRUCache)


def test_load_scenario_overrides_work(tmp_path: Path) -> None:
    p = _write(
        tmp_path,
        "\n".join(
            [
                "version = 1",
                "capacity = 2",
                'implementation = "ordered"',
                'operations = ["put 1 1", "get 1", "put a b"]',
            ]
        )
        + "\n",
    )
    sc = load_scenario(p)

    assert sc.implementation == "ordered"
    assert sc.operations == (
        Operation("put", 1, 1),
        Operation("get", 1),
        Operation("put", "a", "b"),
    )
    cache = build_cache(sc)
    assert isinstance(cache, OrderedLRUCache)
    assert cache.capacity == 2


def test_invalid_toml_raises(tmp_path: Path) -> None:
    with pytest.raises(ScenarioError, match="Invalid TOML"):
        load_scenario(_write(tmp_path, "version = \n"))


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ScenarioError, match="Missing scenario file"):
        load_scenario(tmp_path / "nope.toml")


@pytest.mark.parametrize(
    "data, match",
    [
        ({"capacity": 2}, "version"),
        ({"version": 2, "capacity": 2}, "Unsupported scenario version"),
        ({"version": 1}, "capacity"),
        ({"version": 1, "capacity": 0}, "capacity must be >= 1"),
        ({"version": 1, "capacity": True}, "capacity to be an integer"),
        ({"version": 1, "capacity": 2, "implementation": 3}, "implementation to be a string"),
        ({"version": 1, "capacity": 2, "implementation": "btree"}, "implementation must be"),
        ({"version": 1, "capacity": 2, "operations": "put 1 1"}, "list of strings"),
        ({"version": 1, "capacity": 2, "operations": ["get 1", "pop 1"]}, r"operations\[2\]"),
    ],
)
def test_parse_scenario_validation(data: dict, match: str) -> None:
    with pytest.raises(ScenarioError, match=match):
        parse_scenario(data)


def test_make_cache_rejects_unknown_implementation() -> None:
    with pytest.raises(ScenarioError, match="Unknown implementation"):
        make_cache("skiplist", 2)


def test_make_cache_builds_named_implementation() -> None:
    assert isinstance(make_cache("linked", 1), BoundedLRUCache)
    assert isinstance(make_cache("ordered", 1), OrderedLRUCache)


def test_bundled_example_scenario_loads_and_replays() -> None:
    path = Path(__file__).resolve().parents[1] / "examples" / "capacity_three.toml"
    sc = load_scenario(path)

    assert sc.capacity == 3
    assert sc.implementation == "linked"
    assert len(sc.operations) == 8

    steps = list(run_trace(build_cache(sc), sc.operations))
    assert [s.evicted for s in steps if s.evicted is not None] == [2]
    assert steps[-1].order == ((3, 30), (4, 4), (1, 1))
