from __future__ import annotations

import pytest

from plusgrid.utils.olc import (
    DEFAULT_FORMAT,
    CodeFormat,
    decode,
    encode,
    is_full,
    is_short,
    is_valid,
    recover,
    shorten,
)


def test_default_format_is_canonical() -> None:
    assert DEFAULT_FORMAT.alphabet == "23456789CFGHJMPQRVWX"
    assert DEFAULT_FORMAT.separator == "+"
    assert DEFAULT_FORMAT.separator_position == 8
    assert DEFAULT_FORMAT.padding_character == "0"


def test_alternate_separator_and_position() -> None:
    fmt = CodeFormat(separator=".", separator_position=4)

    code = encode(47.0000625, 8.0000625, 10, fmt=fmt)
    assert code == "8FVC.222222"
    assert is_full(code, fmt=fmt)
    assert not is_valid(code)
    assert decode(code, fmt=fmt) == decode("8FVC2222+22")


def test_alternate_format_shorten_and_recover() -> None:
    fmt = CodeFormat(separator=".", separator_position=4)
    code = encode(47.365590, 8.524997, 10, fmt=fmt)
    assert code == "8FVC.9G8F6X"

    short = shorten(code, 47.5, 8.7, fmt=fmt)
    assert short == ".9G8F6X"
    assert is_short(short, fmt=fmt)
    assert recover(short, 47.5, 8.7, fmt=fmt) == code


def test_alternate_padding_character() -> None:
    fmt = CodeFormat(padding_character="_")
    code = encode(20.375, 2.775, 6, fmt=fmt)
    assert code == "7FG49Q__+"
    assert decode(code, fmt=fmt).code_length == 6


@pytest.mark.parametrize(
    "kwargs",
    [
        {"alphabet": "ABC"},
        {"alphabet": "23456789CFGHJMPQRVWW"},
        {"alphabet": "23456789cfghjmpqrvwx"},
        {"separator": "C"},
        {"separator": "++"},
        {"separator": "0"},
        {"padding_character": "9"},
        {"separator_position": 7},
        {"separator_position": 2},
        {"separator_position": 12},
    ],
)
def test_invalid_formats_are_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        CodeFormat(**kwargs)


@pytest.mark.parametrize("code_length", [10, 11, 12, 13, 14, 15])
def test_separator_after_all_pairs_round_trips(code_length: int) -> None:
    fmt = CodeFormat(separator_position=10)
    latitude, longitude = 47.3655937, 8.5249971

    code = encode(latitude, longitude, code_length, fmt=fmt)
    assert code.index("+") == 10
    assert len(code) == code_length + 1
    assert is_full(code, fmt=fmt)

    area = decode(code, fmt=fmt)
    assert area.code_length == code_length
    assert area.contains(latitude, longitude)


def test_separator_after_all_pairs_allows_single_grid_digit() -> None:
    fmt = CodeFormat(separator_position=10)

    code = encode(47.365590, 8.524997, 11, fmt=fmt)
    assert code == "8FVC9G8F6X+Q"
    assert decode(code, fmt=fmt) == decode("8FVC9G8F+6XQ")

    short = shorten(code, 47.365590, 8.524997, fmt=fmt)
    assert short == "+Q"
    assert is_short(short, fmt=fmt)
    assert not is_valid(short)
    assert recover(short, 47.365590, 8.524997, 11, fmt=fmt) == code


def test_short_separator_still_requires_whole_pairs() -> None:
    fmt = CodeFormat(separator=".", separator_position=4)
    assert is_valid(".9G8F", fmt=fmt)
    assert not is_valid(".9G8", fmt=fmt)
    assert not is_valid(".9G8F6", fmt=fmt)
    assert is_valid("8FVC.9G8F6XQ", fmt=fmt)
