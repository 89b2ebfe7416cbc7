"""
Encoder: typed record → one LTSV line.

The record is flattened into a tagged Value, whose top-level shape must be:
    - a mapping (written directly, in sorted key order)
    - a sequence (keys are the zero-based element indices)
    - a newtype wrapping a mapping (unwrapped, then written)

Keys and values must be scalars. Booleans are valid values but not keys.
The output carries no trailing newline.
"""

import logging
from typing import Any, Iterable, Tuple

from ltsv_serde.dialect import DEFAULT_DIALECT, Dialect
from ltsv_serde.errors import InvalidInput, TextDecodingError
from ltsv_serde.values import FLOAT_KINDS, INTEGER_KINDS, Value, ValueKind, flatten, float_text


logger = logging.getLogger(__name__)


# Kinds that never fit in a key or value, with their name in messages
_COMPOUND_NAMES = {
    ValueKind.SEQ: "a sequence",
    ValueKind.NEWTYPE: "an object",
    ValueKind.UNIT: "a Unit",
    ValueKind.MAP: "a map",
    ValueKind.OPTION: "an option",
}


def _scalar_text(value: Value) -> str:
    kind = value.kind
    if kind in (ValueKind.STRING, ValueKind.CHAR):
        return value.data
    if kind in INTEGER_KINDS:
        return str(value.data)
    if kind in FLOAT_KINDS:
        return float_text(value.data, single=kind is ValueKind.F32)
    if kind is ValueKind.BYTES:
        try:
            return value.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TextDecodingError(
                f"invalid utf-8 sequence in {value.describe()}: {exc}", source=value.describe()
            ) from exc
    if kind is ValueKind.BOOL:
        return "true" if value.data else "false"
    raise InvalidInput(f"Unsupported value {value.describe()}", source=value.describe())


def key_to_text(key: Value) -> str:
    """Render a mapping key. Booleans and compound kinds are rejected."""
    if key.kind in _COMPOUND_NAMES:
        raise InvalidInput(f"Key {key.describe()} cannot be {_COMPOUND_NAMES[key.kind]}", source=key.describe())
    if key.kind is ValueKind.BOOL:
        raise InvalidInput(f"Key {key.describe()} cannot be a boolean", source=key.describe())
    return _scalar_text(key)


def value_to_text(value: Value) -> str:
    """Render a field value. Compound kinds are rejected."""
    if value.kind in _COMPOUND_NAMES:
        raise InvalidInput(
            f"Value cannot be {_COMPOUND_NAMES[value.kind]} ({value.describe()})", source=value.describe()
        )
    return _scalar_text(value)


def _top_level_pairs(value: Value) -> Iterable[Tuple[Value, Value]]:
    if value.kind is ValueKind.MAP:
        return value.entries()
    if value.kind is ValueKind.SEQ:
        return [(Value.u64(index), item) for index, item in enumerate(value.data)]
    if value.kind is ValueKind.NEWTYPE:
        inner = value.data
        if inner.kind is not ValueKind.MAP:
            raise InvalidInput(f"Invalid object {inner.describe()}", source=inner.describe())
        return inner.entries()
    raise InvalidInput("Invalid value MUST be a Map, an object or a sequence", source=value.describe())


def to_line(record: Any, dialect: Dialect = DEFAULT_DIALECT) -> str:
    """
    Encode a record as one LTSV line.

    Args:
        record: Dataclass instance, dict, list/tuple, Newtype or Value
        dialect: Separators to write with

    Returns:
        LTSV text such as "a:Test\\tb:8\\tc:false"

    Raises:
        InvalidInput: If the shape, a key or a value is not representable
        TextDecodingError: If a byte sequence key/value is not valid UTF-8
        MaterializationError: If the record cannot be flattened
    """
    value = flatten(record)
    logger.debug("Encoding %s value as LTSV", value.kind.value)
    chunks = [
        f"{key_to_text(key)}{dialect.label_separator}{value_to_text(item)}"
        for key, item in _top_level_pairs(value)
    ]
    return dialect.field_separator.join(chunks)


encode = to_line


__all__ = ["key_to_text", "value_to_text", "to_line", "encode"]
