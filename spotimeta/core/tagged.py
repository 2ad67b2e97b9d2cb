from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Kind(Enum):
    """
    Value kinds the decoder understands, keyed by D-Bus signature code.
    """

    STRING = "s"
    INT32 = "i"
    UINT64 = "t"
    DOUBLE = "d"
    ARRAY = "a"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_signature(cls, sig: str) -> Optional["Kind"]:
        if not sig:
            return None
        if sig.startswith("a"):
            return cls.ARRAY
        try:
            return cls(sig)
        except ValueError:
            return None


_LABELS = {
    Kind.STRING: "String",
    Kind.INT32: "Int32",
    Kind.UINT64: "UInt64",
    Kind.DOUBLE: "Double",
    Kind.ARRAY: "Array",
}


@dataclass(frozen=True)
class Tagged:
    signature: str
    value: Any = None

    @property
    def kind(self) -> Optional[Kind]:
        return Kind.from_signature(self.signature)

    @classmethod
    def string(cls, value: str) -> "Tagged":
        return cls("s", value)

    @classmethod
    def int32(cls, value: int) -> "Tagged":
        return cls("i", value)

    @classmethod
    def uint64(cls, value: int) -> "Tagged":
        return cls("t", value)

    @classmethod
    def double(cls, value: float) -> "Tagged":
        return cls("d", value)

    @classmethod
    def array(cls, items, signature: str = "av") -> "Tagged":
        return cls(signature, tuple(items))


# ------------------------------------------------------------
# GLib.Variant -> Tagged
# ------------------------------------------------------------

_GETTERS = {
    Kind.STRING: "get_string",
    Kind.INT32: "get_int32",
    Kind.UINT64: "get_uint64",
    Kind.DOUBLE: "get_double",
}


def from_variant(variant) -> Tagged:
    """
    Convert a GLib.Variant into a Tagged tree.

    Only the variant's own accessors are used, so this needs no gi import.
    Nested variants and dict entries inside arrays are left as unrecognized
    leaves (value None); the decoder reports them.
    """
    sig = variant.get_type_string()
    kind = Kind.from_signature(sig)

    if kind is Kind.ARRAY:
        return Tagged(
            sig,
            tuple(from_variant(variant.get_child_value(i)) for i in range(variant.n_children())),
        )

    if kind is None:
        return Tagged(sig)

    return Tagged(sig, getattr(variant, _GETTERS[kind])())
