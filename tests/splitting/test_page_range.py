"""
Unit tests for PageRange parsing and validation.
"""

import pytest

from pdf_toolkit.common.errors import InvalidRange
from pdf_toolkit.splitting import PageRange


class TestParse:

    @pytest.mark.parametrize("text, expected", [
        ("3-5", PageRange(3, 5)),
        (" 3 - 5 ", PageRange(3, 5)),
        ("7", PageRange(7, 7)),
    ])
    def test_parse(self, text, expected):
        assert PageRange.parse(text) == expected

    @pytest.mark.parametrize("text", ["", "a-b", "3-", "-5", "1,2", None])
    def test_parse_when_malformed_then_invalid_range(self, text):
        with pytest.raises(InvalidRange):
            PageRange.parse(text)


class TestValidate:

    def test_valid_range(self):
        PageRange(3, 5).validate(10)
        PageRange(1, 10).validate(10)
        PageRange(10, 10).validate(10)

    @pytest.mark.parametrize("first, last", [(5, 3), (0, 2), (9, 11), (11, 11), (-1, 3)])
    def test_invalid_range(self, first, last):
        with pytest.raises(InvalidRange):
            PageRange(first, last).validate(10)

    def test_reversed_range_message(self):
        with pytest.raises(InvalidRange, match="less than or equal"):
            PageRange(5, 3).validate(10)

    def test_indices_and_count(self):
        page_range = PageRange(3, 5)
        assert page_range.indices() == [2, 3, 4]
        assert page_range.page_count == 3
