"""
Cell values and total coercion functions.

openpyxl hands back untyped values (None, str, int, float, bool, datetime).
to_cell() classifies each one into a small tagged union at the data-source
boundary, and the coercion helpers dispatch on that tag. None of the
coercions raise: a malformed cell degrades to "", 0 or "" (dates) so one bad
value can never fail a whole fetch.

Functions:
    to_cell: Classify a raw value into Blank / Text / Number / Date
    to_string_safe: Cell → trimmed string ('' for blanks)
    to_number_safe: Cell → int/float (0 for blanks and garbage)
    to_iso_date: Cell → 'YYYY-MM-DD' in the source time zone ('' on failure)
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime

import pandas as pd

from .config import DEFAULT_TIME_ZONE


class Blank:
    """An empty or absent cell."""

    __slots__ = ()

    def __eq__(self, other):
        return isinstance(other, Blank)

    def __hash__(self):
        return hash(Blank)

    def __repr__(self):
        return 'Blank()'


BLANK = Blank()


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Date:
    value: date


Cell = (Blank, Text, Number, Date)

_NUMBER_NOISE = re.compile(r'[,\s]')


def to_cell(raw):
    """
    Classify a raw worksheet value.

    Examples:
        >>> to_cell(None)
        Blank()
        >>> to_cell('  ')
        Blank()
        >>> to_cell(12)
        Number(value=12)
    """
    if isinstance(raw, Cell):
        return raw
    if raw is None:
        return BLANK
    if isinstance(raw, bool):
        return Text(str(raw))
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and (math.isnan(raw) or math.isinf(raw)):
            return BLANK
        return Number(raw)
    if isinstance(raw, (datetime, date)):
        return Date(raw)
    text = str(raw)
    if not text.strip():
        return BLANK
    return Text(text)


def is_blank(value):
    return isinstance(to_cell(value), Blank)


def _format_number(number):
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def to_string_safe(value, tz=DEFAULT_TIME_ZONE):
    cell = to_cell(value)
    if isinstance(cell, Blank):
        return ''
    if isinstance(cell, Date):
        return to_iso_date(cell, tz)
    if isinstance(cell, Number):
        return _format_number(cell.value)
    return cell.value.strip()


def to_number_safe(value):
    """
    Coerce a cell to a number; blanks and unparseable text become 0.

    Examples:
        >>> to_number_safe('1,250.50')
        1250.5
        >>> to_number_safe(' 12 000 ')
        12000
        >>> to_number_safe('n/a')
        0
    """
    cell = to_cell(value)
    if isinstance(cell, Number):
        return cell.value
    if not isinstance(cell, Text):
        return 0

    cleaned = _NUMBER_NOISE.sub('', cell.value)
    try:
        number = float(cleaned)
    except ValueError:
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number) if number.is_integer() else number


def to_iso_date(value, tz=DEFAULT_TIME_ZONE):
    """
    Format a date cell (or date-like text) as YYYY-MM-DD in the source zone.

    Naive datetimes are wall-clock times in `tz`; aware ones are converted
    into it first. Numbers are not treated as dates.
    """
    cell = to_cell(value)
    if isinstance(cell, Date):
        raw = cell.value
    elif isinstance(cell, Text):
        raw = cell.value.strip()
    else:
        return ''

    try:
        stamp = pd.to_datetime(raw, errors='coerce')
        if stamp is None or pd.isna(stamp):
            return ''
        if stamp.tzinfo is not None:
            stamp = stamp.tz_convert(tz)
        return stamp.strftime('%Y-%m-%d')
    except (ValueError, TypeError, OverflowError, KeyError):
        return ''
