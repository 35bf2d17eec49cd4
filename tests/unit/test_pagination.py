import pytest

from wardrobo.utils.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    clamp_page_size,
    coerce_page_number,
    page_offset,
    parse_positive_int,
    total_pages,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 1),
        ("", 1),
        ("abc", 1),
        ("0", 1),
        ("-3", 1),
        ("2", 2),
        ("  7", 7),
        ("3abc", 3),
    ],
)
def test_parse_positive_int(raw, expected):
    assert parse_positive_int(raw, 1) == expected


@pytest.mark.parametrize("raw", [None, "2", 2.5, True, 0, -1, [1]])
def test_coerce_page_number_rejects_non_positive_integers(raw):
    assert coerce_page_number(raw, DEFAULT_PAGE_SIZE) == DEFAULT_PAGE_SIZE


def test_coerce_page_number_accepts_positive_int():
    assert coerce_page_number(4, 1) == 4


def test_clamp_page_size_caps_at_maximum():
    assert clamp_page_size(MAX_PAGE_SIZE + 50) == MAX_PAGE_SIZE
    assert clamp_page_size(20) == 20


def test_page_offset():
    assert page_offset(1, 12) == 0
    assert page_offset(3, 20) == 40


@pytest.mark.parametrize(
    "total,per_page,expected",
    [
        (0, 12, 1),
        (12, 12, 1),
        (13, 12, 2),
        (50, 20, 3),
        (5, 0, 1),
    ],
)
def test_total_pages(total, per_page, expected):
    assert total_pages(total, per_page) == expected
