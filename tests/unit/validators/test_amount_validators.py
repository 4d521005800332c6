from __future__ import annotations

import doctest
from decimal import Decimal

import pytest

import pipeline_crm.utils.validators as validators
from pipeline_crm.utils.validators import (
    format_amount,
    normalize_estimated_value,
    sanitize_text,
    to_non_empty_string,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (0, "0"),
        (1500, "1500"),
        (1500.0, "1500"),
        (1500.5, "1500.5"),
        ("1500", "1500"),
        ("  1500.50 ", "1500.50"),
        ("1500,50", "1500.50"),
        ("1.500,50", "1500.50"),
        ("1,500.50", "1500.50"),
        ("1,500,000", "1500000"),
        (".5", ".5"),
        ("1e3", "1e3"),
        ("12.340", "12.340"),
    ],
)
def test_normalize_estimated_value_accepts_amounts(raw, expected):
    assert normalize_estimated_value(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, True, False, -1, -0.5, "-5", "abc", "", "   ", "1 500", float("nan"), float("inf"), [], {}, "1e20", "12.345", "0,001", 0.125],
)
def test_normalize_estimated_value_rejects_invalid_amounts(raw):
    assert normalize_estimated_value(raw) is None


def test_format_amount_drops_insignificant_zeros():
    assert format_amount(Decimal("1500.00")) == "1500"
    assert format_amount(Decimal("1500.50")) == "1500.5"
    assert format_amount(Decimal("0.25")) == "0.25"
    assert format_amount(None) is None


def test_to_non_empty_string_trims_and_rejects_non_strings():
    assert to_non_empty_string("  Acme  ") == "Acme"
    assert to_non_empty_string("   ") is None
    assert to_non_empty_string(42) is None
    assert to_non_empty_string(None) is None


def test_sanitize_text_strips_null_and_trims():
    assert sanitize_text("  hello\x00world  ") == "helloworld"
    assert sanitize_text(None) == ""


def test_validator_docstring_examples():
    results = doctest.testmod(validators)
    assert results.failed == 0
