"""
Value codec between native Python values and the store's tagged wire values.

Encoding dispatches over a closed set of native shapes; anything outside it
becomes the null variant. Decoding inspects the populated variant and never
raises: unknown or malformed wire values decode to ``None``.
"""

from __future__ import annotations

import dataclasses
import math
import numbers
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, Optional

from .models import WireValue

INTEGER = "integerValue"
DOUBLE = "doubleValue"
BOOLEAN = "booleanValue"
STRING = "stringValue"
ARRAY = "arrayValue"
MAP = "mapValue"
NULL = "nullValue"


def null_value() -> WireValue:
    return {NULL: None}


def _is_whole(value: float) -> bool:
    return math.isfinite(value) and float(value).is_integer()


def encode(value: Any) -> WireValue:
    """Encode a native value into its wire form.

    Args:
        value: None, bool, any real number (int, float, Decimal, Fraction, ...), str,
            list/tuple, mapping or dataclass instance.
            Nested containers are encoded recursively.

    Returns:
        WireValue: A dict with exactly one variant key. Unsupported inputs
            (datetimes, sets, callables, arbitrary objects) yield the null variant.
    """
    # bool is an int subclass; test it first.
    if isinstance(value, bool):
        return {BOOLEAN: value}
    if isinstance(value, numbers.Integral):
        return {INTEGER: str(int(value))}
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return {INTEGER: str(int(value))}
        return {DOUBLE: str(value)}
    if isinstance(value, numbers.Real):
        if _is_whole(float(value)):
            return {INTEGER: str(int(value))}
        return {DOUBLE: repr(float(value))}
    if isinstance(value, str):
        return {STRING: value}
    if isinstance(value, (list, tuple)):
        return {ARRAY: {"values": [encode(v) for v in value]}}
    if isinstance(value, Mapping):
        return {MAP: encode_map(value)}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        attrs = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return {MAP: encode_map(attrs)}
    return null_value()


def encode_map(values: Mapping) -> Dict[str, Any]:
    """Encode a mapping into ``{"fields": {...}}`` (document body / mapValue payload)."""
    return {"fields": {str(k): encode(v) for k, v in values.items()}}


def _decode_integer(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _decode_double(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def decode(wire: Any) -> Any:
    """Decode a wire value into a native value.

    Variants are checked in the order integer, double, boolean, string, map,
    array. An array without ``values`` decodes to ``[]``; anything
    unrecognized decodes to ``None``.
    """
    if not isinstance(wire, Mapping):
        return None
    if INTEGER in wire:
        return _decode_integer(wire[INTEGER])
    if DOUBLE in wire:
        return _decode_double(wire[DOUBLE])
    if BOOLEAN in wire:
        raw = wire[BOOLEAN]
        return raw if isinstance(raw, bool) else None
    if STRING in wire:
        raw = wire[STRING]
        return raw if isinstance(raw, str) else None
    if MAP in wire:
        raw = wire[MAP]
        return decode_map(raw) if isinstance(raw, Mapping) else None
    if ARRAY in wire:
        raw = wire[ARRAY]
        if not isinstance(raw, Mapping):
            return None
        values = raw.get("values") or []
        if not isinstance(values, list):
            return None
        return [decode(v) for v in values]
    return None


def decode_map(value: Any) -> Dict[str, Any]:
    """Decode ``{"fields": {...}}`` into a plain dict; absent keys stay absent."""
    if not isinstance(value, Mapping):
        return {}
    fields = value.get("fields")
    if not isinstance(fields, Mapping):
        return {}
    return {str(k): decode(v) for k, v in fields.items()}
