"""
JSON/YAML bridge for LTSV lines.

Converts a decoded line to plain Python, JSON or YAML, and a flat JSON/YAML
object back to an LTSV line. Scalars keep the types inferred by the decoder
(``count:42`` becomes the integer 42, not the string "42").
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from ltsv_serde.decoder import from_line
from ltsv_serde.encoder import to_line


def line_to_dict(line: str) -> Dict[str, Any]:
    return from_line(line, Dict[str, Any])


def line_to_json(line: str) -> str:
    return json.dumps(line_to_dict(line), sort_keys=True)


def line_from_json(s: str) -> str:
    d = json.loads(s)
    return to_line(d)


def line_to_yaml(line: str) -> str:
    return yaml.safe_dump(line_to_dict(line))


def line_from_yaml(s: str) -> str:
    d = yaml.safe_load(s)
    return to_line(d)
