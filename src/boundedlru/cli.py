from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from boundedlru import __version__
from boundedlru.errors import BoundedLRUError
from boundedlru.scenario import IMPLEMENTATIONS, build_cache, load_scenario, make_cache
from boundedlru.trace import (
    DEMO_CAPACITY,
    DEMO_OPERATIONS,
    LRUCacheLike,
    Operation,
    format_step,
    run_trace,
)

EXIT_OK = 0
EXIT_SCENARIO_ERROR = 2


def _add_impl_flag(p: argparse.ArgumentParser, *, default: str | None) -> None:
    p.add_argument(
        "--impl",
        choices=sorted(IMPLEMENTATIONS),
        default=default,
        help="Cache implementation (linked list or OrderedDict).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="boundedlru")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log cache evictions to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    demo_p = subparsers.add_parser("demo", help="Trace the classic capacity-2 example.")
    _add_impl_flag(demo_p, default="linked")

    replay_p = subparsers.add_parser("replay", help="Trace the operations in a scenario file.")
    replay_p.add_argument("scenario", type=str, help="Path to a scenario TOML file.")
    _add_impl_flag(replay_p, default=None)
    replay_p.add_argument(
        "--watch",
        action="store_true",
        help="Replay again whenever the scenario file changes (needs watchfiles).",
    )

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _print_error(e: BaseException) -> None:
    msg = str(e) or type(e).__name__
    _eprint(f"error: {msg}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    logging.getLogger("boundedlru").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _print_trace(cache: LRUCacheLike, operations: Iterable[Operation]) -> None:
    print(f"{type(cache).__name__}(capacity={cache.capacity})")
    for step in run_trace(cache, operations):
        print(format_step(step))


def cmd_demo(args: argparse.Namespace) -> int:
    _print_trace(make_cache(args.impl, DEMO_CAPACITY), DEMO_OPERATIONS)
    return EXIT_OK


def _replay_once(args: argparse.Namespace) -> int:
    try:
        scenario = load_scenario(Path(args.scenario))
        cache = make_cache(args.impl, scenario.capacity) if args.impl else build_cache(scenario)
    except BoundedLRUError as e:
        _print_error(e)
        return EXIT_SCENARIO_ERROR

    _print_trace(cache, scenario.operations)
    return EXIT_OK


def cmd_replay(args: argparse.Namespace) -> int:
    rc = _replay_once(args)
    if not args.watch:
        return rc

    from boundedlru import watcher

    try:
        watcher.check_watchfiles_available()
    except ImportError as e:
        _print_error(e)
        return EXIT_SCENARIO_ERROR

    scenario_path = Path(args.scenario)
    watch_dir = scenario_path.resolve().parent
    if not watch_dir.is_dir():
        _eprint(f"error: cannot watch {scenario_path}: {watch_dir} is not a directory")
        return EXIT_SCENARIO_ERROR

    _eprint(f"[watch] watching {scenario_path} (Ctrl-C to stop)")
    try:
        asyncio.run(
            watcher.run_watch_loop(
                changes_iter=watcher.make_watchfiles_iter(scenario_path),
                scenario_path=scenario_path,
                run_cycle=watcher.build_cycle_runner(lambda: _replay_once(args)),
                on_event=_eprint,
                on_error=_print_error,
            )
        )
    except OSError as e:
        _print_error(e)
        return EXIT_SCENARIO_ERROR
    except KeyboardInterrupt:
        _eprint("[watch] stopped")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_SCENARIO_ERROR

    _configure_logging(bool(args.verbose))

    if args.command == "demo":
        return cmd_demo(args)
    if args.command == "replay":
        return cmd_replay(args)

    return EXIT_SCENARIO_ERROR


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
