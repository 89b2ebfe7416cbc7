"""
Test the worked access-log example.

Validates that the documented line decodes into the example record with the
expected inferred types, and that encoding the record sorts its fields.
"""

from typing import Any, Dict

from ltsv_serde import from_line, to_line
from ltsv_serde.examples import AccessLogRecord, build_example_line, parse_example_record


def test_example_record_fields():
    record = parse_example_record()

    assert record.time == "[10/Oct/2000:13:55:36 -0700]"
    assert record.done is True
    assert record.score == -1
    assert record.mean == 0.42
    assert record.counter == 42
    assert record.level == 3
    assert record.host == "testhostname"
    assert record.message == "this is a test"


def test_example_line_keeps_undeclared_labels_in_dict():
    fields = from_line(build_example_line(), Dict[str, Any])
    assert fields["name 2"] == " value 2"
    assert fields["n3"] == "v3"
    assert len(fields) == 11


def test_example_record_encodes_sorted():
    record = parse_example_record()
    assert to_line(record) == "\t".join([
        "counter:42",
        "done:true",
        "host:testhostname",
        "level:3",
        "mean:0.42",
        "message:this is a test",
        "score:-1",
        "time:[10/Oct/2000:13:55:36 -0700]",
    ])


def test_example_record_roundtrip():
    record = parse_example_record()
    assert from_line(to_line(record), AccessLogRecord) == record
