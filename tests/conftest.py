import os
import sys

import openpyxl
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))


@pytest.fixture
def make_workbook(tmp_path):
    """
    Write a workbook with one tab and return its path.

    Usage: make_workbook(rows, name='Fees', sheet='Sheet1')
    """
    def _make(rows, name='Fees', sheet='Sheet1'):
        path = tmp_path / f"{name}.xlsx"
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = sheet
        for row in rows:
            ws.append(list(row))
        wb.save(path)
        return str(path)
    return _make


@pytest.fixture
def cache_db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'cache.db'}"
