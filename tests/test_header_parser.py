"""Tests for header normalization and the installment status tie-break."""

import pytest

from loaders.header_parser import (
    HeaderColumn,
    build_header_map,
    canonical_key,
    choose_status_column,
    normalize_header,
)


class TestNormalizeHeader:

    @pytest.mark.parametrize('raw,expected', [
        ('RegNo', 'regno'),
        ('  Reg No  ', 'reg_no'),
        ('Reg   No', 'reg_no'),
        ('Remaining Amount(₹)', 'remaining_amount'),
        ('Paid (₹)', 'paid_'),
        ('Bad-Debt', 'baddebt'),
        ('Installment_status', 'installment_status'),
        ('Installment Status', 'installment_status'),
        ('INSTALLMENT-STATUS', 'installmentstatus'),
        ('Due\nDate', 'duedate'),
        ('Due\tDate', 'duedate'),
        ('Frais Réglés', 'frais_réglés'),
        (None, ''),
        (2024, '2024'),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_header(raw) == expected

    def test_aliases(self):
        assert canonical_key('remainingamount') == 'RemainingAmount'
        assert canonical_key('baddebt') == 'BadDebt'
        assert canonical_key('bad_debt') == 'BadDebt'

    def test_unmapped_key_passes_through(self):
        assert canonical_key('remarks') == 'remarks'


class TestStatusTieBreak:

    def test_no_candidates(self):
        res = build_header_map(['RegNo', 'Scheme'])
        assert res.chosen is None
        assert res.candidates == []
        assert 'Installment_status' not in res.mapping

    def test_single_candidate(self):
        res = build_header_map(['RegNo', 'Installment Status'])
        assert res.chosen == HeaderColumn(1, 'Installment Status')
        assert res.index_of('Installment_status') == 1

    def test_exact_match_wins_over_rightmost(self):
        res = build_header_map(['RegNo', 'Installment_status', 'Scheme', 'installment_status'])
        assert res.chosen == HeaderColumn(1, 'Installment_status')
        assert res.index_of('Installment_status') == 1
        assert [c.index for c in res.candidates] == [1, 3]

    def test_exact_match_ignores_surrounding_spaces(self):
        res = build_header_map(['installment status', ' Installment_status ', 'InstallmentStatus'])
        assert res.chosen.index == 1

    def test_rightmost_without_exact_match(self):
        res = build_header_map(['installment status', 'Name', 'Paid', 'INSTALLMENT STATUS', 'Course'])
        assert res.chosen == HeaderColumn(3, 'INSTALLMENT STATUS')

    @pytest.mark.parametrize('filler', [0, 1, 5, 20])
    def test_intervening_columns_do_not_matter(self, filler):
        headers = ['installment status'] + [f'col{i}' for i in range(filler)] + ['InstallmentStatus']
        res = build_header_map(headers)
        assert res.chosen.index == len(headers) - 1

    def test_choose_status_column_empty(self):
        assert choose_status_column([]) is None

    def test_debug_info(self):
        res = build_header_map(['Installment status', 'Installment_status'])
        info = res.debug_info()
        assert info['installmentStatusColumn'] == 'Installment_status'
        assert info['installmentStatusIndex'] == 1
        assert info['chosenColumn'] == {'index': 1, 'header': 'Installment_status'}
        assert info['installmentCandidates'] == [
            {'index': 0, 'header': 'Installment status'},
            {'index': 1, 'header': 'Installment_status'},
        ]

    def test_debug_info_without_status(self):
        info = build_header_map(['RegNo']).debug_info()
        assert info['installmentStatusColumn'] is None
        assert info['installmentStatusIndex'] == -1
        assert info['chosenColumn'] is None


class TestBuildHeaderMap:

    def test_aliases_applied(self):
        res = build_header_map(['Reg No', 'Remaining Amount', 'Bad Debt'])
        assert res.index_of('RegNo') == 0
        assert res.index_of('RemainingAmount') == 1
        assert res.index_of('BadDebt') == 2

    def test_duplicate_headers_last_write_wins(self):
        res = build_header_map(['Scheme', 'RegNo', 'scheme'])
        assert res.index_of('Scheme') == 2

    def test_empty_headers_skipped(self):
        res = build_header_map(['RegNo', None, '', '  ', 'Course'])
        assert set(res.mapping) == {'RegNo', 'Course'}

    def test_every_key_has_one_column(self):
        res = build_header_map(['RegNo', 'Reg No', 'Installment_status', 'installment status'])
        for key, column in res.mapping.items():
            assert isinstance(column.index, int)
        assert res.index_of('RegNo') == 1
