"""Tests for cell classification and the total coercion helpers."""

import math
from datetime import date, datetime, timezone, timedelta

import pytest

from loaders.cells import (
    BLANK,
    Blank,
    Date,
    Number,
    Text,
    is_blank,
    to_cell,
    to_iso_date,
    to_number_safe,
    to_string_safe,
)

ODD_VALUES = [None, '', '   ', 'abc', '1,2,3', '--5', 'NaN', 'inf', True, 0, 3.5,
              float('nan'), float('inf'), datetime(2024, 1, 2), date(2024, 1, 2), '2024-13-45']


class TestToCell:

    def test_blank_values(self):
        assert to_cell(None) == BLANK
        assert to_cell('') == BLANK
        assert to_cell(' \t') == BLANK

    def test_numbers(self):
        assert to_cell(12) == Number(12)
        assert to_cell(1.5) == Number(1.5)

    def test_nan_is_blank(self):
        assert isinstance(to_cell(float('nan')), Blank)

    def test_bool_is_text(self):
        assert to_cell(True) == Text('True')

    def test_dates(self):
        assert to_cell(datetime(2024, 3, 1)) == Date(datetime(2024, 3, 1))
        assert to_cell(date(2024, 3, 1)) == Date(date(2024, 3, 1))

    def test_cells_pass_through(self):
        cell = Text('x')
        assert to_cell(cell) is cell


class TestToStringSafe:

    def test_blank_is_empty_string(self):
        assert to_string_safe(None) == ''
        assert to_string_safe('') == ''
        assert to_string_safe('   ') == ''

    def test_trims_text(self):
        assert to_string_safe('  Fully Paid ') == 'Fully Paid'

    def test_integral_float_has_no_fraction(self):
        assert to_string_safe(9876543210.0) == '9876543210'
        assert to_string_safe(12.5) == '12.5'

    def test_date_becomes_iso(self):
        assert to_string_safe(datetime(2024, 5, 6, 13, 45)) == '2024-05-06'

    @pytest.mark.parametrize('value', ODD_VALUES)
    def test_always_a_string(self, value):
        assert isinstance(to_string_safe(value), str)


class TestToNumberSafe:

    def test_blank_is_zero(self):
        assert to_number_safe(None) == 0
        assert to_number_safe('') == 0

    def test_number_passes_through(self):
        assert to_number_safe(1500) == 1500
        assert to_number_safe(99.25) == 99.25

    def test_thousands_separators_and_spaces(self):
        assert to_number_safe('1,25,000') == 125000
        assert to_number_safe(' 4 500.75 ') == 4500.75

    def test_garbage_is_zero(self):
        assert to_number_safe('n/a') == 0
        assert to_number_safe('12abc') == 0

    def test_nan_and_infinity_text_are_zero(self):
        assert to_number_safe('NaN') == 0
        assert to_number_safe('inf') == 0

    def test_date_is_zero(self):
        assert to_number_safe(datetime(2024, 1, 1)) == 0

    @pytest.mark.parametrize('value', ODD_VALUES)
    def test_never_nan(self, value):
        result = to_number_safe(value)
        assert isinstance(result, (int, float))
        assert not math.isnan(result)
        assert not math.isinf(result)


class TestToIsoDate:

    def test_naive_datetime_is_wall_clock(self):
        assert to_iso_date(datetime(2024, 1, 31, 23, 30), tz='Asia/Kolkata') == '2024-01-31'

    def test_aware_datetime_converted_to_zone(self):
        stamp = datetime(2024, 1, 31, 20, 0, tzinfo=timezone.utc)
        assert to_iso_date(stamp, tz='Asia/Kolkata') == '2024-02-01'

    def test_plain_date(self):
        assert to_iso_date(date(2023, 12, 25)) == '2023-12-25'

    def test_parseable_text(self):
        assert to_iso_date('2024-02-29') == '2024-02-29'

    def test_text_with_offset_converted(self):
        assert to_iso_date('2024-01-31T22:00:00-05:00', tz='UTC') == '2024-02-01'

    def test_unparseable_and_blank(self):
        assert to_iso_date('not a date') == ''
        assert to_iso_date(None) == ''
        assert to_iso_date('') == ''

    def test_numbers_are_not_dates(self):
        assert to_iso_date(45000) == ''


def test_is_blank():
    assert is_blank(None)
    assert is_blank('  ')
    assert not is_blank(0)
    assert not is_blank('x')
