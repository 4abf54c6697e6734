"""
Header normalization for the installment sheet.

The sheet's header row is maintained by hand, so the same field shows up
under different spellings ("Reg No", "RegNo", "Registration No") and the
installment status has historically lived in more than one column. This
module turns the raw header row into a single canonical-field → column map.

    Raw:        ["Reg No", "Installment_status", "Scheme", "installment status"]
    Normalized: ["reg_no", "installment_status", "scheme", "installment_status"]
    Canonical:  {"RegNo": 0, "Installment_status": 1, "scheme": 2}

Functions:
    normalize_header: Lowercase, strip punctuation, underscore-join words
    canonical_key: Normalized header → canonical field via HEADER_ALIASES
    is_status_candidate: Does a header read as "installment status"?
    choose_status_column: Tie-break between status candidates
    build_header_map: Build the HeaderResolution for a header row
"""

import re
from dataclasses import dataclass, field

from .config import (
    HEADER_ALIASES,
    STATUS_CANDIDATE_KEYS,
    STATUS_EXACT_HEADER,
    STATUS_FIELD,
)

# Letters (any script), digits, underscores and plain spaces survive
_DISALLOWED = re.compile(r'[^\w ]')
_WHITESPACE = re.compile(r' +')


@dataclass(frozen=True)
class HeaderColumn:
    index: int
    header: str

    def to_dict(self):
        return {'index': self.index, 'header': self.header}


@dataclass
class HeaderResolution:
    """
    Result of resolving one header row.

    mapping holds exactly one column per canonical key. candidates keeps every
    column that looked like an installment status (chosen or not) purely for
    diagnostics; only `chosen` is ever mapped.
    """
    mapping: dict = field(default_factory=dict)
    candidates: list = field(default_factory=list)
    chosen: HeaderColumn = None

    def index_of(self, key):
        column = self.mapping.get(key)
        return column.index if column is not None else None

    def debug_info(self):
        return {
            'installmentStatusColumn': self.chosen.header if self.chosen else None,
            'installmentStatusIndex': self.chosen.index if self.chosen else -1,
            'installmentCandidates': [c.to_dict() for c in self.candidates],
            'chosenColumn': self.chosen.to_dict() if self.chosen else None,
        }


def _header_text(raw):
    return '' if raw is None else str(raw)


def normalize_header(text):
    """
    Build the lookup key for a raw header.

    Letters of any script, digits, underscores and plain spaces are kept;
    everything else (punctuation, tabs, newlines) is dropped.

    Examples:
        >>> normalize_header('  Remaining Amount ')
        'remaining_amount'
        >>> normalize_header('Bad-Debt (INR)')
        'baddebt_inr'
        >>> normalize_header('Installment_status')
        'installment_status'
    """
    key = _header_text(text).lower().strip()
    key = _DISALLOWED.sub('', key)
    return _WHITESPACE.sub('_', key)


def canonical_key(normalized):
    return HEADER_ALIASES.get(normalized, normalized)


def is_status_candidate(normalized):
    return normalized in STATUS_CANDIDATE_KEYS


def choose_status_column(candidates):
    """
    Pick the column that feeds Installment_status.

    A header spelled exactly "Installment_status" wins; otherwise the
    rightmost candidate does. This mirrors the sheet's current layout, so
    reordering columns changes which one is read.
    """
    for candidate in candidates:
        if candidate.header.strip() == STATUS_EXACT_HEADER:
            return candidate
    return candidates[-1] if candidates else None


def build_header_map(headers):
    """
    Resolve a header row into canonical field → column.

    Args:
        headers: Raw header cells from the first row of the used range

    Returns:
        HeaderResolution: mapping, status candidates and the chosen status column

    Duplicate non-status headers are not flagged: the later column simply
    overwrites the earlier one.
    """
    resolution = HeaderResolution()

    for idx, raw in enumerate(headers):
        text = _header_text(raw)
        normalized = normalize_header(text)
        if not normalized:
            continue

        if is_status_candidate(normalized):
            resolution.candidates.append(HeaderColumn(idx, text))
            continue

        resolution.mapping[canonical_key(normalized)] = HeaderColumn(idx, text)

    resolution.chosen = choose_status_column(resolution.candidates)
    if resolution.chosen is not None:
        resolution.mapping[STATUS_FIELD] = resolution.chosen

    return resolution
