from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, List, NamedTuple

from spotimeta.core import config
from spotimeta.core.tagged import Kind
from spotimeta.core.util import warn

# Kinds get() will hand back. Doubles are stored and dumped but never returned.
RETRIEVABLE = frozenset({Kind.STRING, Kind.INT32, Kind.UINT64})
RENDERABLE = RETRIEVABLE | {Kind.DOUBLE}


class Entry(NamedTuple):
    key: str
    kind: Kind
    value: Any


class Status(Enum):
    FOUND = "found"
    NOT_FOUND = "not found"
    WRONG_TYPE = "wrong type"


class Lookup(NamedTuple):
    status: Status
    value: Any = None

    @property
    def found(self) -> bool:
        return self.status is Status.FOUND


NOT_FOUND = Lookup(Status.NOT_FOUND)
WRONG_TYPE = Lookup(Status.WRONG_TYPE)


def render(entry: Entry) -> str:
    if entry.kind not in RENDERABLE:
        return f"{entry.key}\tunsupported ({entry.kind.label})"
    if entry.kind is Kind.DOUBLE:
        text = f"{entry.value:f}"
    elif entry.kind is Kind.STRING:
        text = entry.value
    else:
        text = str(int(entry.value))
    return f"{entry.key}\t{entry.kind.label}: {text}"


class Store:
    """
    Bounded, insertion-ordered (key, kind, value) store for one query.

    Keys repeat when a property holds an array; lookups see the first entry
    for a key only. Use it as a context manager so it is released on every
    exit path.
    """

    def __init__(self, capacity: int = config.STORE_CAPACITY):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._entries: List[Entry] = []
        self._closed = False

    # ---- lifecycle ----

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._entries.clear()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("operation on released store")

    # ---- writes ----

    def insert(self, key: str, kind: Kind, value: Any) -> None:
        self._check_open()
        if len(self._entries) >= self.capacity:
            warn(f"store full ({self.capacity} entries), dropping {key}")
            return
        self._entries.append(Entry(key, kind, value))

    # ---- reads ----

    def get(self, key: str, expected: Kind) -> Lookup:
        self._check_open()
        if expected not in RETRIEVABLE:
            return NOT_FOUND
        for entry in self._entries:
            if entry.key != key:
                continue
            if entry.kind is not expected:
                return WRONG_TYPE
            return Lookup(Status.FOUND, entry.value)
        return NOT_FOUND

    def dump(self) -> Iterator[str]:
        self._check_open()
        for entry in list(self._entries):
            yield render(entry)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
