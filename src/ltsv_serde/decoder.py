"""
Decoder: one LTSV line → typed record.

Steps:
    1. Split the line into chunks on the field separator
    2. Split each chunk on the first label separator
    3. Infer a scalar Value for every raw value
    4. Materialize the resulting mapping into the caller's target type

The decoder holds no state; every call is independent.
"""

import logging
from typing import Any, Dict, Tuple

from ltsv_serde.dialect import DEFAULT_DIALECT, Dialect, DuplicateLabels
from ltsv_serde.errors import InvalidInput
from ltsv_serde.inference import infer_scalar
from ltsv_serde.values import Value, materialize


logger = logging.getLogger(__name__)


def _split_chunk(chunk: str, line: str, dialect: Dialect) -> Tuple[str, str]:
    if not chunk:
        raise InvalidInput("Missing name and value for a LTSV record", source=line)
    label, separator, raw = chunk.partition(dialect.label_separator)
    if not separator:
        raise InvalidInput(f"Invalid input: [{line!r}]", source=line)
    return label, raw


def parse_fields(line: str, dialect: Dialect = DEFAULT_DIALECT) -> Dict[str, Value]:
    """
    Split a line into labels and inferred scalar Values.

    Args:
        line: One LTSV record, without trailing newline
        dialect: Separators and duplicate-label policy

    Returns:
        Dict of label → inferred Value, in first-seen label order

    Raises:
        InvalidInput: If a chunk is empty or has no label separator, or a
            label repeats under DuplicateLabels.ERROR
    """
    fields: Dict[str, Value] = {}
    for chunk in line.split(dialect.field_separator):
        label, raw = _split_chunk(chunk, line, dialect)
        if label in fields and dialect.duplicate_labels is DuplicateLabels.ERROR:
            raise InvalidInput(f"Duplicate label {label!r} in [{line!r}]", source=line)
        fields[label] = infer_scalar(raw)
    return fields


def from_line(line: str, target: Any, dialect: Dialect = DEFAULT_DIALECT) -> Any:
    """
    Decode one LTSV line into an instance of ``target``.

    Example:
        @dataclass
        class Foo:
            a: str
            b: int
            c: bool

        from_line("a:Test\\tb:8\\tc:false", Foo)
        → Foo(a="Test", b=8, c=False)

    Args:
        line: One LTSV record, without trailing newline
        target: Type understood by ``values.materialize`` (dataclass,
            dict, Dict[str, T], Value, ...)
        dialect: Separators and duplicate-label policy

    Returns:
        Instance of target

    Raises:
        InvalidInput: If the line is malformed
        MaterializationError: If the fields do not fit the target type
    """
    fields = parse_fields(line, dialect)
    logger.debug("Decoded %d LTSV fields", len(fields))
    mapping = Value.mapping((Value.string(label), value) for label, value in fields.items())
    return materialize(mapping, target)


decode = from_line


__all__ = ["parse_fields", "from_line", "decode"]
