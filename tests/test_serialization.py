"""
Tests for the JSON/YAML bridge.

These tests ensure inferred scalar types survive the trip from an LTSV line
to JSON/YAML, and that flat JSON/YAML objects encode back to a line.
"""

import json

import pytest
import yaml

from ltsv_serde.errors import InvalidInput
from ltsv_serde.serialization import (
    line_to_dict,
    line_to_json,
    line_from_json,
    line_to_yaml,
    line_from_yaml,
)


SAMPLE_LINE = "count:42\thost:web01\tratio:0.5\tup:true"


def test_line_to_dict():
    assert line_to_dict(SAMPLE_LINE) == {"count": 42, "host": "web01", "ratio": 0.5, "up": True}


def test_line_to_json():
    assert line_to_json(SAMPLE_LINE) == '{"count": 42, "host": "web01", "ratio": 0.5, "up": true}'


def test_json_roundtrip():
    json_str = line_to_json(SAMPLE_LINE)
    assert line_from_json(json_str) == SAMPLE_LINE


def test_yaml_roundtrip():
    yaml_str = line_to_yaml(SAMPLE_LINE)
    assert yaml.safe_load(yaml_str) == line_to_dict(SAMPLE_LINE)
    assert line_from_yaml(yaml_str) == SAMPLE_LINE


def test_line_from_json_sorts_keys():
    assert line_from_json('{"b": "x", "a": 1}') == "a:1\tb:x"


def test_line_from_json_array():
    assert line_from_json('["x", 2]') == "0:x\t1:2"


def test_line_from_yaml_mapping():
    assert line_from_yaml("a: 1\nb: x\n") == "a:1\tb:x"


def test_nested_json_rejected():
    with pytest.raises(InvalidInput):
        line_from_json(json.dumps({"a": [1, 2]}))


def test_null_rejected():
    with pytest.raises(InvalidInput):
        line_from_json('{"a": null}')
