"""
Value abstraction layer.

Defines the generic tagged ``Value`` used as the interchange point between
LTSV text and Python objects, plus the two conversions around it:

    flatten(obj)              Python object → Value
    materialize(value, T)     Value → instance of T

Supported Python shapes:
    - bool, int, float, str, bytes, None
    - Enum members (through their value)
    - list / tuple (sequences) and dict (mappings)
    - dataclasses (mappings of field name → value)
    - dataclasses deriving from ``Newtype`` (a wrapped single value)

ARCHITECTURAL RULE:
    This module knows nothing about the LTSV wire format.
    Which shapes are representable on a line is the encoder's concern.
"""

from __future__ import annotations

import dataclasses
import math
import struct
import types
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from ltsv_serde.errors import MaterializationError


class ValueKind(Enum):
    """
    Kinds of tagged values.

    Declaration order is the sort order used for mapping keys.
    """

    BOOL = "Bool"
    U8 = "U8"
    U16 = "U16"
    U32 = "U32"
    U64 = "U64"
    I8 = "I8"
    I16 = "I16"
    I32 = "I32"
    I64 = "I64"
    F32 = "F32"
    F64 = "F64"
    CHAR = "Char"
    STRING = "String"
    UNIT = "Unit"
    OPTION = "Option"
    NEWTYPE = "Newtype"
    SEQ = "Seq"
    MAP = "Map"
    BYTES = "Bytes"


_KIND_RANK = {kind: rank for rank, kind in enumerate(ValueKind)}

INTEGER_RANGES: Dict[ValueKind, Tuple[int, int]] = {
    ValueKind.U8: (0, 2**8 - 1),
    ValueKind.U16: (0, 2**16 - 1),
    ValueKind.U32: (0, 2**32 - 1),
    ValueKind.U64: (0, 2**64 - 1),
    ValueKind.I8: (-(2**7), 2**7 - 1),
    ValueKind.I16: (-(2**15), 2**15 - 1),
    ValueKind.I32: (-(2**31), 2**31 - 1),
    ValueKind.I64: (-(2**63), 2**63 - 1),
}

INTEGER_KINDS = frozenset(INTEGER_RANGES)
FLOAT_KINDS = frozenset({ValueKind.F32, ValueKind.F64})
SCALAR_KINDS = INTEGER_KINDS | FLOAT_KINDS | {
    ValueKind.BOOL,
    ValueKind.CHAR,
    ValueKind.STRING,
    ValueKind.BYTES,
}


def round_f32(number: float) -> float:
    """Round a double to the nearest single-precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def _shortest_f32_text(number: float) -> str:
    for digits in range(1, 10):
        text = f"{number:.{digits}g}"
        if round_f32(float(text)) == number:
            return text
    return repr(number)


def float_text(number: float, single: bool = False) -> str:
    """
    Render a float in plain decimal notation.

    Uses the shortest digits that read back to the same double, or to the
    same single-precision value when ``single`` is set. Integral values drop
    their fractional part (``8.0`` → ``8``) and scientific notation is never
    produced.
    """
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    text = _shortest_f32_text(number) if single else repr(number)
    return format(Decimal(text).normalize(), "f")


@dataclass(frozen=True)
class Value:
    """
    A kind-discriminated generic value.

    Payload by kind:
        BOOL                    bool
        U8..U64, I8..I64        int (range-checked for the width)
        F32, F64                float
        CHAR                    str of length 1
        STRING                  str
        BYTES                   bytes
        UNIT                    None
        OPTION                  Value or None
        NEWTYPE                 Value
        SEQ                     tuple of Value
        MAP                     tuple of (Value, Value) pairs, sorted by key

    Use the classmethod constructors rather than building instances directly.
    """

    kind: ValueKind
    data: Any = None

    # Constructors

    @classmethod
    def boolean(cls, data: bool) -> Value:
        return cls(ValueKind.BOOL, bool(data))

    @classmethod
    def integer(cls, kind: ValueKind, data: int) -> Value:
        if kind not in INTEGER_RANGES:
            raise ValueError(f"{kind.value} is not an integer kind")
        low, high = INTEGER_RANGES[kind]
        if not low <= data <= high:
            raise ValueError(f"{data} out of range for {kind.value}")
        return cls(kind, int(data))

    @classmethod
    def u8(cls, data: int) -> Value:
        return cls.integer(ValueKind.U8, data)

    @classmethod
    def u16(cls, data: int) -> Value:
        return cls.integer(ValueKind.U16, data)

    @classmethod
    def u32(cls, data: int) -> Value:
        return cls.integer(ValueKind.U32, data)

    @classmethod
    def u64(cls, data: int) -> Value:
        return cls.integer(ValueKind.U64, data)

    @classmethod
    def i8(cls, data: int) -> Value:
        return cls.integer(ValueKind.I8, data)

    @classmethod
    def i16(cls, data: int) -> Value:
        return cls.integer(ValueKind.I16, data)

    @classmethod
    def i32(cls, data: int) -> Value:
        return cls.integer(ValueKind.I32, data)

    @classmethod
    def i64(cls, data: int) -> Value:
        return cls.integer(ValueKind.I64, data)

    @classmethod
    def f32(cls, data: float) -> Value:
        return cls(ValueKind.F32, round_f32(float(data)))

    @classmethod
    def f64(cls, data: float) -> Value:
        return cls(ValueKind.F64, float(data))

    @classmethod
    def char(cls, data: str) -> Value:
        if len(data) != 1:
            raise ValueError(f"Char needs exactly one character, got {data!r}")
        return cls(ValueKind.CHAR, data)

    @classmethod
    def string(cls, data: str) -> Value:
        return cls(ValueKind.STRING, data)

    @classmethod
    def bytes_(cls, data: bytes) -> Value:
        return cls(ValueKind.BYTES, bytes(data))

    @classmethod
    def unit(cls) -> Value:
        return cls(ValueKind.UNIT, None)

    @classmethod
    def option(cls, inner: Optional[Value] = None) -> Value:
        return cls(ValueKind.OPTION, inner)

    @classmethod
    def newtype(cls, inner: Value) -> Value:
        return cls(ValueKind.NEWTYPE, inner)

    @classmethod
    def sequence(cls, items: Iterable[Value]) -> Value:
        return cls(ValueKind.SEQ, tuple(items))

    @classmethod
    def mapping(cls, entries: Union[Mapping[Value, Value], Iterable[Tuple[Value, Value]]]) -> Value:
        """
        Build a MAP value.

        Repeated keys keep the last value. Entries are stored sorted by key,
        so iteration order is independent of insertion order.
        """
        if isinstance(entries, Mapping):
            merged = dict(entries.items())
        else:
            merged = dict(entries)
        pairs = sorted(merged.items(), key=lambda pair: pair[0].sort_key())
        return cls(ValueKind.MAP, tuple(pairs))

    # Inspection

    def sort_key(self) -> Tuple[int, Any]:
        if self.kind in SCALAR_KINDS:
            return (_KIND_RANK[self.kind], self.data)
        return (_KIND_RANK[self.kind], self.describe())

    def entries(self) -> Tuple[Tuple[Value, Value], ...]:
        if self.kind is not ValueKind.MAP:
            raise TypeError(f"{self.kind.value} value has no entries")
        return self.data

    def describe(self) -> str:
        """
        Stable textual rendering used in error messages.

        Examples:
            U64(3), String('abc'), Bool(true), Seq[U64(0), U64(1)],
            Map{String('a'): F64(0.5)}, Option(None), Newtype(Map{})
        """
        kind = self.kind
        if kind is ValueKind.BOOL:
            return f"Bool({'true' if self.data else 'false'})"
        if kind in INTEGER_KINDS:
            return f"{kind.value}({self.data})"
        if kind in FLOAT_KINDS:
            return f"{kind.value}({float_text(self.data, single=kind is ValueKind.F32)})"
        if kind in (ValueKind.CHAR, ValueKind.STRING, ValueKind.BYTES):
            return f"{kind.value}({self.data!r})"
        if kind is ValueKind.UNIT:
            return "Unit"
        if kind is ValueKind.OPTION:
            if self.data is None:
                return "Option(None)"
            return f"Option(Some({self.data.describe()}))"
        if kind is ValueKind.NEWTYPE:
            return f"Newtype({self.data.describe()})"
        if kind is ValueKind.SEQ:
            return "Seq[" + ", ".join(item.describe() for item in self.data) + "]"
        return "Map{" + ", ".join(f"{k.describe()}: {v.describe()}" for k, v in self.data) + "}"


class Newtype:
    """
    Marker base for single-field dataclasses that wrap another value.

    Example:
        @dataclass
        class Envelope(Newtype):
            payload: Dict[str, int]

    Envelope({"a": 1}) flattens to Newtype(Map{String('a'): I64(1)}).
    """


# ---------------------------------------------------------------------------
# Flattening
# ---------------------------------------------------------------------------

def _is_optional(hint: Any) -> bool:
    origin = get_origin(hint)
    return origin in (Union, types.UnionType) and type(None) in get_args(hint)


def _flatten_int(obj: int) -> Value:
    low, high = INTEGER_RANGES[ValueKind.I64]
    if low <= obj <= high:
        return Value.i64(obj)
    if 0 <= obj <= INTEGER_RANGES[ValueKind.U64][1]:
        return Value.u64(obj)
    raise MaterializationError(f"integer with {obj.bit_length()} bits does not fit in 64 bits")


def _flatten_dataclass(obj: Any) -> Value:
    fields = list(dataclasses.fields(obj))
    if isinstance(obj, Newtype):
        if len(fields) != 1:
            raise MaterializationError(
                f"Newtype {type(obj).__name__} must have exactly one field, has {len(fields)}"
            )
        return Value.newtype(flatten(getattr(obj, fields[0].name)))

    hints = get_type_hints(type(obj))
    entries = []
    for f in fields:
        attr = getattr(obj, f.name)
        if _is_optional(hints.get(f.name)):
            inner = None if attr is None else flatten(attr)
            entries.append((Value.string(f.name), Value.option(inner)))
        else:
            entries.append((Value.string(f.name), flatten(attr)))
    return Value.mapping(entries)


def flatten(obj: Any) -> Value:
    """
    Convert a Python object into a tagged Value.

    Args:
        obj: A Value, scalar, sequence, mapping, Enum member or dataclass

    Returns:
        The equivalent Value

    Raises:
        MaterializationError: If the object has no Value representation
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return Value.unit()
    if isinstance(obj, bool):
        return Value.boolean(obj)
    if isinstance(obj, Enum):
        return flatten(obj.value)
    if isinstance(obj, int):
        return _flatten_int(obj)
    if isinstance(obj, float):
        return Value.f64(obj)
    if isinstance(obj, str):
        return Value.string(obj)
    if isinstance(obj, (bytes, bytearray)):
        return Value.bytes_(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _flatten_dataclass(obj)
    if isinstance(obj, Mapping):
        return Value.mapping((flatten(k), flatten(v)) for k, v in obj.items())
    if isinstance(obj, (list, tuple)):
        return Value.sequence(flatten(item) for item in obj)
    raise MaterializationError(f"cannot flatten object of type {type(obj).__name__}", source=repr(obj))


# ---------------------------------------------------------------------------
# Materialization
# ---------------------------------------------------------------------------

def _mismatch(value: Value, expected: str) -> MaterializationError:
    return MaterializationError(f"invalid type: {value.describe()}, expected {expected}", source=value.describe())


def to_builtin(value: Value) -> Any:
    """Convert a Value into plain Python objects (dict, list, scalars)."""
    kind = value.kind
    if kind in SCALAR_KINDS:
        return value.data
    if kind is ValueKind.UNIT:
        return None
    if kind is ValueKind.OPTION:
        return None if value.data is None else to_builtin(value.data)
    if kind is ValueKind.NEWTYPE:
        return to_builtin(value.data)
    if kind is ValueKind.SEQ:
        return [to_builtin(item) for item in value.data]
    result = {}
    for k, v in value.data:
        key = to_builtin(k)
        if isinstance(key, (list, dict)):
            raise MaterializationError(f"unhashable mapping key {k.describe()}", source=k.describe())
        result[key] = to_builtin(v)
    return result


def _materialize_optional(value: Value, args: Tuple[Any, ...]) -> Any:
    if value.kind is ValueKind.UNIT:
        return None
    if value.kind is ValueKind.OPTION:
        if value.data is None:
            return None
        value = value.data
    candidates = [a for a in args if a is not type(None)]
    return _materialize_union(value, candidates)


def _materialize_union(value: Value, candidates: List[Any]) -> Any:
    last_error: Optional[MaterializationError] = None
    for candidate in candidates:
        try:
            return materialize(value, candidate)
        except MaterializationError as exc:
            last_error = exc
    if last_error is None:
        raise _mismatch(value, "a value for an empty union")
    raise last_error


def _materialize_dataclass(value: Value, target: type) -> Any:
    hints = get_type_hints(target)
    fields = [f for f in dataclasses.fields(target) if f.init]

    if issubclass(target, Newtype):
        if len(fields) != 1:
            raise MaterializationError(
                f"Newtype {target.__name__} must have exactly one field, has {len(fields)}"
            )
        inner = value.data if value.kind is ValueKind.NEWTYPE else value
        return target(materialize(inner, hints[fields[0].name]))

    if value.kind is ValueKind.NEWTYPE:
        value = value.data
    if value.kind is not ValueKind.MAP:
        raise _mismatch(value, f"struct {target.__name__}")

    provided: Dict[str, Value] = {}
    for key, item in value.entries():
        if key.kind not in (ValueKind.STRING, ValueKind.CHAR):
            raise _mismatch(key, "a field name")
        provided[key.data] = item

    kwargs = {}
    for f in fields:
        hint = hints[f.name]
        if f.name in provided:
            kwargs[f.name] = materialize(provided[f.name], hint)
        elif f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING:
            continue
        elif _is_optional(hint):
            kwargs[f.name] = None
        else:
            raise MaterializationError(f"missing field '{f.name}'", source=value.describe())
    return target(**kwargs)


def _materialize_scalar(value: Value, target: type) -> Any:
    kind = value.kind
    if target is bool:
        if kind is ValueKind.BOOL:
            return value.data
        raise _mismatch(value, "a boolean")
    if target is int:
        if kind in INTEGER_KINDS:
            return value.data
        raise _mismatch(value, "an integer")
    if target is float:
        if kind in FLOAT_KINDS or kind in INTEGER_KINDS:
            return float(value.data)
        raise _mismatch(value, "a float")
    if target is str:
        if kind in (ValueKind.STRING, ValueKind.CHAR):
            return value.data
        raise _mismatch(value, "a string")
    if kind is ValueKind.BYTES:
        return value.data
    if kind is ValueKind.STRING:
        return value.data.encode("utf-8")
    raise _mismatch(value, "a byte sequence")


def materialize(value: Value, target: Any) -> Any:
    """
    Convert a tagged Value into an instance of ``target``.

    Args:
        value: Value to convert
        target: Destination type: Value, Any, a scalar type, Optional/Union,
            List/Tuple/Dict (bare or parameterized), an Enum or a dataclass

    Returns:
        Instance of the target type

    Raises:
        MaterializationError: On missing fields or incompatible kinds
    """
    if target is Value:
        return value
    if target is Any or target is object:
        return to_builtin(value)

    origin = get_origin(target)
    args = get_args(target)

    if origin in (Union, types.UnionType):
        if type(None) in args:
            return _materialize_optional(value, args)
        return _materialize_union(value, list(args))

    if target in (bool, int, float, str, bytes):
        return _materialize_scalar(value, target)

    if origin in (list, tuple) or target in (list, tuple):
        if value.kind is not ValueKind.SEQ:
            raise _mismatch(value, "a sequence")
        container = origin or target
        if container is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
            if len(args) != len(value.data):
                raise _mismatch(value, f"a tuple of {len(args)} elements")
            return tuple(materialize(item, arg) for item, arg in zip(value.data, args))
        item_type = args[0] if args else Any
        return container(materialize(item, item_type) for item in value.data)

    if origin is dict or target is dict:
        if value.kind is not ValueKind.MAP:
            raise _mismatch(value, "a map")
        key_type, item_type = args if args else (Any, Any)
        return {materialize(k, key_type): materialize(v, item_type) for k, v in value.entries()}

    if isinstance(target, type) and issubclass(target, Enum):
        raw = to_builtin(value)
        try:
            return target(raw)
        except ValueError as exc:
            raise _mismatch(value, f"a member of {target.__name__}") from exc

    if isinstance(target, type) and dataclasses.is_dataclass(target):
        return _materialize_dataclass(value, target)

    raise MaterializationError(f"unsupported target type {target!r}", source=value.describe())


__all__ = [
    "ValueKind",
    "Value",
    "Newtype",
    "INTEGER_KINDS",
    "FLOAT_KINDS",
    "SCALAR_KINDS",
    "float_text",
    "flatten",
    "materialize",
    "to_builtin",
]
