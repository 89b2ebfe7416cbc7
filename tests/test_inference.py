"""
Tests for scalar type inference.

The rules are tried in order: boolean, unsigned, signed, float, string.
The first rule that accepts the whole text wins.
"""

import math

import pytest

from ltsv_serde.inference import infer_scalar
from ltsv_serde.values import Value, ValueKind


U64_MAX = 2**64 - 1
I64_MIN = -(2**63)


class TestInferencePriority:
    """Each raw text maps to exactly one inferred Value."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("true", Value.boolean(True)),
            ("false", Value.boolean(False)),
            ("42", Value.u64(42)),
            ("0", Value.u64(0)),
            ("-42", Value.i64(-42)),
            ("3.14", Value.f64(3.14)),
            ("hello", Value.string("hello")),
            (str(U64_MAX), Value.u64(U64_MAX)),
            (str(I64_MIN), Value.i64(I64_MIN)),
        ],
    )
    def test_basic_kinds(self, raw, expected):
        assert infer_scalar(raw) == expected

    def test_unsigned_preferred_over_signed(self):
        """All-digit text is never signed."""
        assert infer_scalar("7").kind is ValueKind.U64

    def test_plus_sign_is_unsigned(self):
        assert infer_scalar("+7") == Value.u64(7)

    def test_unsigned_overflow_becomes_float(self):
        """One past u64 max fails both integer rules."""
        result = infer_scalar(str(U64_MAX + 1))
        assert result.kind is ValueKind.F64
        assert result.data == float(U64_MAX + 1)

    def test_signed_underflow_becomes_float(self):
        result = infer_scalar(str(I64_MIN - 1))
        assert result.kind is ValueKind.F64

    def test_very_long_digit_run_becomes_infinite_float(self):
        """Thousands of digits overflow every integer rule."""
        assert infer_scalar("1" * 5000) == Value.f64(math.inf)
        assert infer_scalar("-" + "9" * 5000) == Value.f64(-math.inf)

    def test_leading_zeros_still_unsigned(self):
        assert infer_scalar("0" * 30 + "5") == Value.u64(5)


class TestBooleanRule:
    """Only the exact lowercase tokens are booleans."""

    @pytest.mark.parametrize("raw", ["True", "FALSE", "yes", "1 ", "t"])
    def test_other_spellings_are_not_booleans(self, raw):
        assert infer_scalar(raw).kind is not ValueKind.BOOL


class TestFloatRule:
    """Decimal, exponential and special float literals."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1e3", 1000.0),
            ("-2.5E-3", -0.0025),
            (".5", 0.5),
            ("5.", 5.0),
            ("-0.0", -0.0),
            ("inf", math.inf),
            ("-Infinity", -math.inf),
        ],
    )
    def test_float_literals(self, raw, expected):
        result = infer_scalar(raw)
        assert result.kind is ValueKind.F64
        assert result.data == expected

    def test_nan(self):
        result = infer_scalar("NaN")
        assert result.kind is ValueKind.F64
        assert math.isnan(result.data)


class TestStringFallback:
    """Anything no numeric rule accepts stays text, unmodified."""

    @pytest.mark.parametrize(
        "raw",
        ["", "-", ".", " 1", "1 ", "1_000", "0x10", "1,5", "١٢", "[10/Oct/2000:13:55:36 -0700]"],
    )
    def test_kept_as_string(self, raw):
        assert infer_scalar(raw) == Value.string(raw)
