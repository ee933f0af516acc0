"""Tests for boundedlru.watcher module."""

from __future__ import annotations

import asyncio
import sys
import types
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest

from boundedlru.watcher import (
    WatchCycleResult,
    build_cycle_runner,
    check_watchfiles_available,
    run_watch_loop,
    touches_scenario,
)


def test_check_watchfiles_available_raises_when_missing(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "watchfiles", None)

    with pytest.raises(ImportError, match="pip install boundedlru\\[watch\\]"):
        check_watchfiles_available()


def test_check_watchfiles_available_succeeds_when_installed(monkeypatch) -> None:
    fake = types.ModuleType("watchfiles")
    monkeypatch.setitem(sys.modules, "watchfiles", fake)

    check_watchfiles_available()  # no exception


def test_touches_scenario(tmp_path: Path) -> None:
    target = tmp_path / "s.toml"
    assert touches_scenario(frozenset({target}), target)
    assert not touches_scenario(frozenset({tmp_path / "other.toml"}), target)
    assert not touches_scenario(frozenset(), target)


async def _fake_changes(batches: list[set[tuple[Any, str]]]) -> AsyncIterator[set[tuple[Any, str]]]:
    for b in batches:
        yield b


def test_run_watch_loop_runs_only_for_scenario_changes(tmp_path: Path) -> None:
    target = tmp_path / "s.toml"
    batches = [
        {(1, str(tmp_path / "unrelated.txt"))},
        {(2, str(target))},
        {(2, str(target)), (1, str(tmp_path / "x"))},
    ]
    calls: list[int] = []
    events: list[str] = []

    def cycle() -> WatchCycleResult:
        calls.append(1)
        return WatchCycleResult(exit_code=0, duration_s=0.01)

    asyncio.run(
        run_watch_loop(
            changes_iter=_fake_changes(batches),
            scenario_path=target,
            run_cycle=cycle,
            on_event=events.append,
            on_error=lambda e: None,
        )
    )

    assert len(calls) == 2
    assert sum("change detected" in e for e in events) == 2
    assert any("done rc=0" in e for e in events)


def test_run_watch_loop_reports_errors_and_continues(tmp_path: Path) -> None:
    target = tmp_path / "s.toml"
    errors: list[BaseException] = []
    attempts: list[int] = []

    def cycle() -> WatchCycleResult:
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("boom")
        return WatchCycleResult(exit_code=2, duration_s=0.0)

    asyncio.run(
        run_watch_loop(
            changes_iter=_fake_changes([{(2, str(target))}, {(2, str(target))}]),
            scenario_path=target,
            run_cycle=cycle,
            on_event=lambda s: None,
            on_error=errors.append,
        )
    )

    assert len(attempts) == 2
    assert [str(e) for e in errors] == ["boom"]


def test_build_cycle_runner_wraps_exit_code() -> None:
    runner = build_cycle_runner(lambda: 2)
    result = runner()
    assert result.exit_code == 2
    assert result.duration_s >= 0
