"""
Example access-log record for proof-of-concept decoding.

The line mixes every inferred scalar kind: a timestamp containing colons,
a boolean, a negative integer, a float and plain strings. Labels the record
does not declare ("name1", "name 2", "n3") are ignored on decode.
"""
from dataclasses import dataclass

from ltsv_serde.decoder import from_line


EXAMPLE_LINE = "\t".join([
    "time:[10/Oct/2000:13:55:36 -0700]",
    "done:true",
    "score:-1",
    "mean:0.42",
    "counter:42",
    "level:3",
    "host:testhostname",
    "name1:value1",
    "name 2: value 2",
    "n3:v3",
    "message:this is a test",
])


@dataclass
class AccessLogRecord:
    time: str
    done: bool
    score: int
    mean: float
    counter: int
    level: int
    host: str
    message: str


def build_example_line() -> str:
    return EXAMPLE_LINE


def parse_example_record(line: str = EXAMPLE_LINE) -> AccessLogRecord:
    return from_line(line, AccessLogRecord)
