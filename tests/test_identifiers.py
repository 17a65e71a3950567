import datetime
import random
import re

import pytest

from ticketdesk import IdentifierFormat, date_scoped_code

FMT = IdentifierFormat("TKT", "-", 5)

@pytest.mark.parametrize(
    "number, expected",
    [
        (1, "TKT-00001"),
        (10001, "TKT-10001"),
        (99999, "TKT-99999"),
        (123456, "TKT-123456"),
    ],
)
def test_format(number, expected):
    assert FMT.format(number) == expected

def test_format_rejects_negative():
    with pytest.raises(ValueError):
        FMT.format(-1)

@pytest.mark.parametrize(
    "value, expected",
    [
        ("TKT-10001", 10001),
        ("TKT-00042", 42),
        ("TKT-100000", 100000),
        ("TKT-010000", None),   # leading zero beyond the minimum width
        ("TKT-1234", None),
        ("TKT-1234a", None),
        ("TKT10001", None),
        ("tkt-10001", None),
        ("T-1001", None),
        ("", None),
        (None, None),
    ],
)
def test_parse(value, expected):
    assert FMT.parse(value) == expected

def test_parse_escapes_regex_characters():
    fmt = IdentifierFormat("T.K", "+", 3)
    assert fmt.parse("T.K+123") == 123
    assert fmt.parse("TXK+123") is None
    assert fmt.parse("T.KK123") is None

def test_like_prefix():
    assert FMT.like_prefix == "TKT-"

def test_date_scoped_code_uses_clock_date():
    clock = lambda: datetime.datetime(2024, 10, 2, 15, 4)
    code = date_scoped_code(clock, random.Random(1))

    assert code.startswith("241002-")
    assert re.fullmatch(r"\d{6}-\d{3}", code)

def test_date_scoped_ordinal_in_range():
    rng = random.Random(7)
    clock = lambda: datetime.datetime(2025, 1, 9)
    ordinals = {int(date_scoped_code(clock, rng).split("-")[1]) for _ in range(2000)}

    assert min(ordinals) >= 1
    assert max(ordinals) <= 999

def test_date_scoped_code_is_not_a_counter():
    # same seed, same day: same code. Nothing is remembered between calls.
    clock = lambda: datetime.datetime(2025, 1, 9)
    assert date_scoped_code(clock, random.Random(3)) == date_scoped_code(clock, random.Random(3))

def test_date_scoped_default_clock():
    code = date_scoped_code()
    assert code.startswith(datetime.datetime.now().strftime("%y%m%d")[:4])
