"""
Best-effort scalar type inference for raw LTSV values.

Rules are tried in fixed priority order; the first match wins:

    1. Boolean     exactly "true" or "false"
    2. U64         ASCII digits (optional '+'), 0 .. 2**64 - 1
    3. I64         ASCII digits with optional sign, -2**63 .. 2**63 - 1
    4. F64         decimal / exponential literal, or inf / infinity / nan
    5. String      the raw text, unmodified

Inference never fails. Checking the result against a declared field type
happens later, in the value layer.
"""

import re
from typing import Optional

from ltsv_serde.values import INTEGER_RANGES, Value, ValueKind


_UNSIGNED_RE = re.compile(r"\+?[0-9]+\Z")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+\Z")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\Z"
    r"|[+-]?(?:inf|infinity|nan)\Z",
    re.IGNORECASE,
)


def _parse_bool(raw: str) -> Optional[Value]:
    if raw == "true":
        return Value.boolean(True)
    if raw == "false":
        return Value.boolean(False)
    return None


def _parse_integer(raw: str, pattern: "re.Pattern[str]", kind: ValueKind) -> Optional[Value]:
    if not pattern.match(raw):
        return None
    # More significant digits than any 64-bit integer holds
    if len(raw.lstrip("+-").lstrip("0")) > 20:
        return None
    number = int(raw)
    low, high = INTEGER_RANGES[kind]
    if not low <= number <= high:
        return None
    return Value.integer(kind, number)


def _parse_float(raw: str) -> Optional[Value]:
    if not _FLOAT_RE.match(raw):
        return None
    return Value.f64(float(raw))


def infer_scalar(raw: str) -> Value:
    """
    Guess the scalar type of a raw value.

    Args:
        raw: Value text taken from a "label:value" chunk

    Returns:
        Value of kind BOOL, U64, I64, F64 or STRING
    """
    return (
        _parse_bool(raw)
        or _parse_integer(raw, _UNSIGNED_RE, ValueKind.U64)
        or _parse_integer(raw, _SIGNED_RE, ValueKind.I64)
        or _parse_float(raw)
        or Value.string(raw)
    )


__all__ = ["infer_scalar"]
