from __future__ import annotations

from typing import Optional

from spotimeta.core.store import Store
from spotimeta.core.tagged import Kind, Tagged
from spotimeta.core.util import warn


def decode(tagged: Tagged, key: str, store: Store, max_depth: Optional[int] = None, _depth: int = 0) -> None:
    """
    Walk one dictionary value into the store.

    Every leaf primitive, at any depth, lands under `key`. An unrecognized
    kind stops only its own branch.
    """
    kind = tagged.kind

    if kind is None:
        warn(f"unhandled variant type {tagged.signature!r} under {key}")
        return

    if kind is not Kind.ARRAY:
        store.insert(key, kind, tagged.value)
        return

    if max_depth is not None and _depth >= max_depth:
        warn(f"array under {key} nested deeper than {max_depth}, skipped")
        return

    for item in tagged.value:
        decode(item, key, store, max_depth, _depth + 1)
