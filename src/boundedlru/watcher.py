"""Watch mode: replay a scenario whenever its file changes."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class WatchCycleResult:
    """Result of a single replay triggered by a file change."""

    exit_code: int
    duration_s: float


def check_watchfiles_available() -> None:
    """Raise ImportError with a helpful message if watchfiles is not installed."""
    import importlib

    try:
        importlib.import_module("watchfiles")
    except ImportError:
        raise ImportError(
            "watchfiles is required for watch mode. Install it with: pip install boundedlru[watch]"
        ) from None


def touches_scenario(changed_paths: frozenset[Path], scenario_path: Path) -> bool:
    target = scenario_path.resolve()
    return any(p.resolve() == target for p in changed_paths)


async def run_watch_loop(
    *,
    changes_iter: AsyncIterator[set[tuple[Any, str]]],
    scenario_path: Path,
    run_cycle: Callable[[], WatchCycleResult],
    on_event: Callable[[str], None],
    on_error: Callable[[BaseException], None],
) -> None:
    """Consume changes_iter and call run_cycle for each change to the scenario file."""
    async for raw_changes in changes_iter:
        paths = frozenset(Path(p) for _, p in raw_changes)
        if not touches_scenario(paths, scenario_path):
            continue

        on_event(f"[watch] change detected: {scenario_path}")
        try:
            result = run_cycle()
        except Exception as exc:
            on_error(exc)
            continue
        on_event(f"[watch] done rc={result.exit_code} ({result.duration_s:.1f}s)")


def build_cycle_runner(run: Callable[[], int]) -> Callable[[], WatchCycleResult]:
    def runner() -> WatchCycleResult:
        t0 = time.monotonic()
        rc = run()
        return WatchCycleResult(exit_code=rc, duration_s=time.monotonic() - t0)

    return runner


def make_watchfiles_iter(scenario_path: Path) -> AsyncIterator[set[tuple[Any, str]]]:
    """Create an async iterator using watchfiles.awatch() on the scenario's directory."""
    import watchfiles  # type: ignore[import-untyped]

    # Editors often replace files on save; watch the parent so renames are seen.
    return watchfiles.awatch(scenario_path.resolve().parent, debounce=200)
