"""
Spreadsheet loaders for the installment sheet API.

This package reads one worksheet tab, resolves its hand-maintained header row
into canonical fields and coerces every cell into JSON-safe values.

Architecture:
    workbook → excel_loader → header_parser → data_transformer (+ cells)

Modules:
    config: Constants, header aliases and SourceConfig
    cells: Cell tagged union and total coercion helpers
    header_parser: Header normalization and status-column tie-break
    data_transformer: Raw row → canonical record
    excel_loader: Workbook lookup and used-range reads
"""

from .config import SourceConfig
from .header_parser import build_header_map, normalize_header
from .data_transformer import map_row, is_blank_row, CANONICAL_FIELDS, FIELD_NAMES
from .excel_loader import (
    resolve_workbook_path,
    read_used_range,
    SourceNotFoundError,
    SpreadsheetNotFoundError,
    SheetNotFoundError,
)

__all__ = [
    'SourceConfig',
    'build_header_map',
    'normalize_header',
    'map_row',
    'is_blank_row',
    'CANONICAL_FIELDS',
    'FIELD_NAMES',
    'resolve_workbook_path',
    'read_used_range',
    'SourceNotFoundError',
    'SpreadsheetNotFoundError',
    'SheetNotFoundError',
]
