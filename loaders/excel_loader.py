"""
Workbook access for the installment sheet.

A "spreadsheet" is an .xlsx workbook on disk and a "sheet" is one of its
tabs. The loader only knows how to find the workbook and hand back the tab's
used range as a 2-D list of raw values; all interpretation happens in
header_parser and data_transformer.

Functions:
    resolve_workbook_path: Find the workbook by path (id) or by exact name
    read_used_range: Read a tab's used range as (title, rows)
"""

import logging
import os
import warnings

import openpyxl

from .config import WORKBOOK_SUFFIXES

# Suppress openpyxl warnings about styles/formatting (we only read data values)
warnings.filterwarnings('ignore', category=UserWarning, module='openpyxl')

logger = logging.getLogger(__name__)


class SourceNotFoundError(LookupError):
    """The configured spreadsheet or sheet does not exist."""


class SpreadsheetNotFoundError(SourceNotFoundError):
    pass


class SheetNotFoundError(SourceNotFoundError):
    pass


def _find_by_name(name, data_dir):
    """
    Return the first workbook in data_dir whose file name or stem equals name.

    Ambiguous names are not disambiguated: sorted order decides.
    """
    if not os.path.isdir(data_dir):
        return None

    for entry in sorted(os.listdir(data_dir)):
        stem, suffix = os.path.splitext(entry)
        if suffix.lower() not in WORKBOOK_SUFFIXES:
            continue
        if name in (entry, stem):
            return os.path.join(data_dir, entry)
    return None


def resolve_workbook_path(config):
    """
    Locate the workbook described by config.

    spreadsheet_id (a path) is preferred; spreadsheet_name is looked up among
    the workbooks in data_dir.

    Raises:
        SpreadsheetNotFoundError: Nothing matches; the message names what
            was configured.
    """
    if config.spreadsheet_id:
        if os.path.isfile(config.spreadsheet_id):
            return config.spreadsheet_id
        raise SpreadsheetNotFoundError(
            f"Spreadsheet not found for id: {config.spreadsheet_id}"
        )

    if config.spreadsheet_name:
        path = _find_by_name(config.spreadsheet_name, config.data_dir)
        if path is not None:
            return path
        raise SpreadsheetNotFoundError(
            f"Spreadsheet not found with name: {config.spreadsheet_name}"
        )

    raise SpreadsheetNotFoundError("No spreadsheetId or spreadsheetName configured")


def read_used_range(path, sheet_name):
    """
    Read every row of a worksheet tab.

    Args:
        path: Workbook path
        sheet_name: Tab to read

    Returns:
        tuple: (spreadsheet_title, rows) where rows is a rectangular list of
            lists of raw cell values (None for empty cells)

    Raises:
        SheetNotFoundError: The tab does not exist in the workbook
    """
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        if sheet_name not in wb.sheetnames:
            raise SheetNotFoundError(f"Sheet not found: {sheet_name}")

        ws = wb[sheet_name]
        rows = [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    # Pad ragged rows so every row lines up with the header row
    width = max((len(row) for row in rows), default=0)
    for row in rows:
        row.extend([None] * (width - len(row)))

    title = os.path.splitext(os.path.basename(path))[0]
    logger.debug("Read %d rows x %d columns from '%s'!%s", len(rows), width, title, sheet_name)
    return title, rows
