from __future__ import annotations

import pytest

from plusgrid.utils.olc import is_full, is_padded, is_short, is_valid


# (code, is_valid, is_short, is_full)
VALIDITY_CASES = [
    ("8FWC2345+G6", True, False, True),
    ("8FWC2345+G6G", True, False, True),
    ("8fwc2345+", True, False, True),
    ("8FWCX400+", True, False, True),
    ("7FG49Q00+", True, False, True),
    ("WC2345+G6g", True, True, False),
    ("2345+G6", True, True, False),
    ("45+G6", True, True, False),
    ("+G6", True, True, False),
    # Latitude or longitude of the first pair out of range.
    ("XFWC2345+G6", True, False, False),
    ("8XWC2345+G6", True, False, False),
    ("G+", False, False, False),
    ("+", False, False, False),
    ("", False, False, False),
    ("8FWC2345+G", False, False, False),
    ("8FWC2_45+G6", False, False, False),
    ("8FWC2345+G6+", False, False, False),
    ("8FWC2345G6", False, False, False),
    ("8FWC23456+G6", False, False, False),
    ("8FWC234+5G6", False, False, False),
    ("8FWC2300+G6", False, False, False),
    ("WC2300+G6g", False, False, False),
    ("WC2345+G", False, False, False),
    ("00000000+", False, False, False),
    ("80000000+", False, False, False),
    ("8F0000FF+", False, False, False),
    ("8FWC2345+OL", False, False, False),
]


@pytest.mark.parametrize("code,valid,short,full", VALIDITY_CASES)
def test_validity_predicates(code: str, valid: bool, short: bool, full: bool) -> None:
    assert is_valid(code) is valid
    assert is_short(code) is short
    assert is_full(code) is full


def test_none_is_never_valid() -> None:
    assert is_valid(None) is False
    assert is_short(None) is False
    assert is_full(None) is False


def test_short_and_full_are_exclusive() -> None:
    for code, *_ in VALIDITY_CASES:
        assert not (is_short(code) and is_full(code)), code


def test_is_padded() -> None:
    assert is_padded("7FG49Q00+") is True
    assert is_padded("8FVC9G8F+6X") is False
