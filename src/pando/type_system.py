"""
Pando Type System
=================

The closed set of Pando primitive types, the Rust type each one is
translated to, and the widening table that decides which assignments are
legal.

Usage::

    from pando.type_system import is_compatible
    is_compatible("double", "float")   # True
    is_compatible("float", "double")   # False

The Rust mapping is documentation only (completion and hover details); it
never takes part in an analysis decision.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

# ---------------------------------------------------------------------------
# Primitive types
# ---------------------------------------------------------------------------

PANDO_TYPES: Tuple[str, ...] = (
    "int", "int8", "int16", "int32", "int64", "int128", "int_size",
    "uint8", "uint16", "uint32", "uint64", "uint128", "uint_size",
    "float", "double", "bool", "char", "str", "bytes", "bytearray", "string", "None",
)

RUST_TYPE_MAP: Dict[str, str] = {
    "int": "i32",
    "int8": "i8",
    "int16": "i16",
    "int32": "i32",
    "int64": "i64",
    "int128": "i128",
    "int_size": "isize",
    "uint8": "u8",
    "uint16": "u16",
    "uint32": "u32",
    "uint64": "u64",
    "uint128": "u128",
    "uint_size": "usize",
    "float": "f32",
    "double": "f64",
    "bool": "bool",
    "char": "char",
    "str": "&str",
    "bytes": "&[u8]",
    "bytearray": "Vec<u8>",
    "string": "String",
    "None": "()",
}


def is_valid_type(name: str) -> bool:
    return name in RUST_TYPE_MAP


def rust_type(name: str) -> Optional[str]:
    """Return the Rust counterpart of a Pando type, if there is one."""
    return RUST_TYPE_MAP.get(name)


# ---------------------------------------------------------------------------
# Widening table
# ---------------------------------------------------------------------------

# source type -> target types it may be assigned into (besides itself).
# ``int`` is the general integer type: integer literals classify as ``int``
# and may initialise any sized signed slot.
WIDENINGS: Dict[str, FrozenSet[str]] = {
    "int": frozenset({"int8", "int16", "int32", "int64", "int128", "int_size", "float", "double"}),
    "int8": frozenset({"int16", "int32", "int64", "int128", "int_size", "float", "double"}),
    "int16": frozenset({"int32", "int64", "int128", "int_size", "float", "double"}),
    "int32": frozenset({"int64", "int128", "float", "double"}),
    "int64": frozenset({"int128", "float", "double"}),
    "float": frozenset({"double"}),
}


def is_compatible(target: str, source: str) -> bool:
    """Check whether a *source* value can be stored in a *target* slot."""
    if target == source:
        return True
    return target in WIDENINGS.get(source, frozenset())
