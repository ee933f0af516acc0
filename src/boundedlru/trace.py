"""Step-by-step traces of cache operations, for the console demo and replays."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from boundedlru.cache import render_items
from boundedlru.errors import ScenarioError

OpKind = Literal["get", "put"]

MISS_DISPLAY = "-1"


class LRUCacheLike(Protocol):
    @property
    def capacity(self) -> int: ...

    @property
    def last_evicted(self) -> Any: ...

    def lookup(self, key: Any) -> tuple[bool, Any]: ...

    def put(self, key: Any, value: Any) -> None: ...

    def __contains__(self, key: object) -> bool: ...

    def items(self) -> list[tuple[Any, Any]]: ...


def coerce_token(token: str) -> int | str:
    """Canonical integers become ints ("-1" -> -1); anything else stays text.

    "007", "+7" and "1_0" are kept as written so distinct keys never collide.
    """

    try:
        value = int(token)
    except ValueError:
        return token
    return value if str(value) == token else token


@dataclass(frozen=True, slots=True)
class Operation:
    kind: OpKind
    key: Any
    value: Any = None

    @classmethod
    def parse(cls, text: str) -> Operation:
        """Parse ``"get KEY"`` or ``"put KEY VALUE"``."""

        parts = text.split()
        if not parts:
            raise ScenarioError("Empty operation.")
        kind = parts[0].lower()
        if kind == "get":
            if len(parts) != 2:
                raise ScenarioError(f"Expected `get KEY`, got: {text!r}")
            return cls("get", coerce_token(parts[1]))
        if kind == "put":
            if len(parts) != 3:
                raise ScenarioError(f"Expected `put KEY VALUE`, got: {text!r}")
            return cls("put", coerce_token(parts[1]), coerce_token(parts[2]))
        raise ScenarioError(f"Unknown operation {parts[0]!r} (expected get or put).")

    def __str__(self) -> str:
        if self.kind == "get":
            return f"get({self.key})"
        return f"put({self.key}, {self.value})"


@dataclass(frozen=True, slots=True)
class TraceStep:
    index: int
    operation: Operation
    # `found` is whether the key was present before the operation ran.
    found: bool
    result: Any
    evicted: Any
    order: tuple[tuple[Any, Any], ...]


def run_trace(cache: LRUCacheLike, operations: Iterable[Operation]) -> Iterator[TraceStep]:
    for i, op in enumerate(operations, start=1):
        if op.kind == "get":
            found, result = cache.lookup(op.key)
            evicted = None
        else:
            found = op.key in cache
            cache.put(op.key, op.value)
            result = None
            evicted = cache.last_evicted
        yield TraceStep(
            index=i,
            operation=op,
            found=found,
            result=result,
            evicted=evicted,
            order=tuple(cache.items()),
        )


def format_step(step: TraceStep) -> str:
    op = step.operation
    if op.kind == "get":
        head = f"{op} -> {step.result}" if step.found else f"{op} -> {MISS_DISPLAY} (miss)"
    elif step.evicted is not None:
        head = f"{op}  evicted {step.evicted}"
    else:
        head = str(op)
    return f"{step.index:>2}. {head}  {render_items(step.order)}"


DEMO_CAPACITY = 2

DEMO_OPERATIONS: tuple[Operation, ...] = (
    Operation("put", 1, 1),
    Operation("put", 2, 2),
    Operation("get", 1),
    Operation("put", 3, 3),
    Operation("get", 2),
    Operation("put", 4, 4),
    Operation("get", 1),
    Operation("get", 3),
    Operation("get", 4),
)
