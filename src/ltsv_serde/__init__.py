"""
LTSV Serde Package

Reads one Labeled Tab-Separated Values line into a typed record, and writes
a typed record back out as one line:

    time:[10/Oct/2000:13:55:36 -0700]<TAB>host:testhostname<TAB>score:-1

Public operations:
    from_line(line, target)   decode (alias: decode)
    to_line(record)           encode (alias: encode)

ARCHITECTURAL GUARANTEE:
------------------------
Every call processes exactly one line and keeps no state.
Multi-line records, quoting and escaping are not supported.
"""

from ltsv_serde.decoder import decode, from_line, parse_fields
from ltsv_serde.dialect import DEFAULT_DIALECT, STRICT_DIALECT, Dialect, DuplicateLabels
from ltsv_serde.encoder import encode, to_line
from ltsv_serde.errors import ErrorKind, InvalidInput, LtsvError, MaterializationError, TextDecodingError
from ltsv_serde.inference import infer_scalar
from ltsv_serde.values import Newtype, Value, ValueKind, flatten, materialize, to_builtin

__version__ = "0.1.0"

__all__ = [
    "from_line",
    "to_line",
    "decode",
    "encode",
    "parse_fields",
    "infer_scalar",
    "Dialect",
    "DuplicateLabels",
    "DEFAULT_DIALECT",
    "STRICT_DIALECT",
    "ErrorKind",
    "LtsvError",
    "InvalidInput",
    "MaterializationError",
    "TextDecodingError",
    "Value",
    "ValueKind",
    "Newtype",
    "flatten",
    "materialize",
    "to_builtin",
]
