"""
Row mapping for installment records.

Turns a raw worksheet row plus the resolved header map into the fixed
18-field record the dashboard consumes. Every field is coerced with the
total helpers from cells.py, so a record can always be built.

Functions:
    is_blank_row: True when every cell in the row is blank/absent
    map_row: Build one canonical record from a raw row
"""

from .cells import is_blank, to_iso_date, to_number_safe, to_string_safe
from .config import DEFAULT_TIME_ZONE

TEXT, NUMBER, DATE = 'text', 'number', 'date'

# Output order is the order the dashboard lists columns in
CANONICAL_FIELDS = (
    # Identifiers
    ('RegNo', TEXT),
    ('StudentName', TEXT),
    ('Mobile', TEXT),
    ('Email', TEXT),
    # Course / center descriptors
    ('Course', TEXT),
    ('Batch', TEXT),
    ('Center', TEXT),
    ('Scheme', TEXT),
    # Dates
    ('AdmissionDate', DATE),
    ('DueDate', DATE),
    ('LastPaymentDate', DATE),
    # Amounts
    ('CourseFee', NUMBER),
    ('PaidAmount', NUMBER),
    ('RemainingAmount', NUMBER),
    ('InstallmentAmount', NUMBER),
    ('BadDebt', NUMBER),
    # Statuses
    ('Installment_status', TEXT),
    ('Status', TEXT),
)

FIELD_NAMES = tuple(name for name, _ in CANONICAL_FIELDS)


def is_blank_row(row):
    return all(is_blank(value) for value in row)


def _coerce(kind, value, tz):
    if kind == NUMBER:
        return to_number_safe(value)
    if kind == DATE:
        return to_iso_date(value, tz)
    return to_string_safe(value, tz)


def map_row(row, resolution, tz=DEFAULT_TIME_ZONE, include_original_headers=False, headers=None):
    """
    Build a canonical record from one raw row.

    Args:
        row: Sequence of raw cell values aligned with the header row
        resolution: HeaderResolution from header_parser.build_header_map
        tz: Time zone the sheet's dates are written in
        include_original_headers: Attach an '_original' {header: text} map
        headers: Raw header row, required for include_original_headers

    Returns:
        dict: One value per canonical field, in CANONICAL_FIELDS order

    Examples:
        >>> from loaders.header_parser import build_header_map
        >>> res = build_header_map(['Reg No', 'Paid Amount'])
        >>> rec = map_row(['R-1', '1,000'], res)
        >>> rec['RegNo'], rec['PaidAmount'], rec['DueDate']
        ('R-1', 1000, '')
    """
    record = {}
    for name, kind in CANONICAL_FIELDS:
        idx = resolution.index_of(name)
        value = row[idx] if idx is not None and idx < len(row) else None
        record[name] = _coerce(kind, value, tz)

    if include_original_headers and headers is not None:
        original = {}
        for idx, header in enumerate(headers):
            if header is None or not str(header).strip():
                continue
            value = row[idx] if idx < len(row) else None
            original[str(header)] = to_string_safe(value, tz)
        record['_original'] = original

    return record
