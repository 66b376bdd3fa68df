"""
🔥 THINK ULTRA! Issue detector 테스트
"""

from typing import Any, Dict, List

import pytest

from kualitas.services.issue_detector import (
    IssueDetector,
    detect_calculation_errors,
    detect_duplicates,
    detect_empty_rows,
    detect_typos,
    detect_whitespace,
)
from kualitas.services.type_detection import analyze_column, analyze_columns
from kualitas_shared.models.analysis import AnalyzeOptions
from kualitas_shared.models.common import IssueType, Severity
from kualitas_shared.models.table import Table


def _detect(rows: List[Dict[str, Any]], **options) -> list:
    table = Table.from_records(rows)
    analysis = analyze_columns(table.headers, table.rows)
    return IssueDetector(AnalyzeOptions(**options)).detect(table.headers, table.rows, analysis)


def _of_type(issues, issue_type):
    return [issue for issue in issues if issue.type == issue_type]


class TestRowLevelDetectors:
    def test_duplicates_are_case_and_space_insensitive(self):
        rows = [
            {"Nama": "Budi", "Kota": "Jakarta"},
            {"Nama": " budi", "Kota": "JAKARTA "},
            {"Nama": "Siti", "Kota": "Bandung"},
        ]
        issues = detect_duplicates(["Nama", "Kota"], rows)
        assert len(issues) == 1
        assert issues[0].row == 2
        assert issues[0].original_row == 1
        assert issues[0].severity == Severity.WARNING
        assert issues[0].auto_fixable

    def test_empty_rows(self):
        rows = [{"a": "x", "b": 1}, {"a": "  ", "b": None}, {"a": "", "b": 0}]
        issues = detect_empty_rows(["a", "b"], rows)
        assert [issue.row for issue in issues] == [2]
        assert issues[0].severity == Severity.INFO


class TestColumnDetectors:
    def test_format_inconsistency_names_types_and_samples(self):
        rows = [
            {"Kontak": value}
            for value in ["budi@example.com", "081234567890", "Jakarta", "42", "15/01/2024"]
        ]
        issues = _of_type(_detect(rows), IssueType.FORMAT_INCONSISTENT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.column == "Kontak"
        assert issue.row is None
        assert not issue.auto_fixable
        assert set(issue.details["types"]) == {"email", "phone", "string", "integer", "date"}
        assert issue.details["samples"]["email"] == [{"value": "budi@example.com", "row": 1}]

    @pytest.mark.parametrize(
        "header, values, issue_type, severity, fixable",
        [
            (
                "NIK",
                ["3201011505990001", "3171015501900002", "3578010101850003", "3201011599990001"],
                IssueType.INVALID_NIK, Severity.ERROR, False,
            ),
            ("Email", ["a@b.co", "c@d.com", "e@f.id", "bad@"], IssueType.INVALID_EMAIL, Severity.ERROR, False),
            (
                "Telepon",
                ["081234567890", "081298765432", "085711112222", "0812"],
                IssueType.INVALID_PHONE, Severity.WARNING, True,
            ),
        ],
    )
    def test_identifier_columns_are_revalidated(self, header, values, issue_type, severity, fixable):
        rows = [{header: value} for value in values]
        issues = _of_type(_detect(rows), issue_type)
        assert len(issues) == 1
        assert issues[0].row == 4
        assert issues[0].column == header
        assert issues[0].value == values[3]
        assert issues[0].severity == severity
        assert issues[0].auto_fixable is fixable

    def test_invalid_npwp(self):
        rows = [
            {"NPWP": value}
            for value in ["01.234.567.8-901.234", "02.345.678.9-012.345", "03.456.789.0-123.456", "12.345"]
        ]
        issues = _of_type(_detect(rows), IssueType.INVALID_NPWP)
        assert [issue.row for issue in issues] == [4]

    def test_whitespace_reports_trim_and_runs_separately(self):
        rows = [{"Nama": " Budi "}, {"Nama": "Budi  Santoso"}, {"Nama": "  Siti   Aminah"}, {"Nama": "Andi"}]
        issues = detect_whitespace("Nama", rows)
        assert [(issue.row, issue.details["kind"]) for issue in issues] == [
            (1, "trim"),
            (2, "multiple_spaces"),
            (3, "trim"),
            (3, "multiple_spaces"),
        ]
        assert issues[0].suggestion == "Budi"
        assert issues[3].suggestion == "Siti Aminah"

    def test_blank_cells_are_empty_not_whitespace(self):
        rows = [{"Nama": "Budi", "Kota": "   "}, {"Nama": "Siti", "Kota": "\t"}]
        assert detect_whitespace("Kota", rows) == []
        assert _of_type(_detect(rows), IssueType.WHITESPACE) == []

    def test_outliers(self):
        rows = [{"Nilai": value} for value in [10, 11, 9, 12, 10, 11, 1000, 9, 10, 11]]
        issues = _of_type(_detect(rows), IssueType.OUTLIER)
        assert len(issues) == 1
        assert issues[0].row == 7
        assert issues[0].value == 1000
        assert issues[0].details["reason"] == "too large"
        assert not issues[0].auto_fixable

    def test_percentage_outliers(self):
        rows = [{"Diskon": value} for value in ["10%", "11%", "9%", "12%", "10%", "11%", "1000%", "9%", "10%", "11%"]]
        issues = _of_type(_detect(rows), IssueType.OUTLIER)
        assert [(issue.row, issue.value) for issue in issues] == [(7, "1000%")]
        assert issues[0].details["reason"] == "too large"

    def test_outliers_need_ten_values(self):
        rows = [{"Nilai": value} for value in [10, 11, 9, 12, 1000]]
        assert _of_type(_detect(rows), IssueType.OUTLIER) == []

    def test_outlier_check_can_be_disabled(self):
        rows = [{"Nilai": value} for value in [10, 11, 9, 12, 10, 11, 1000, 9, 10, 11]]
        assert _of_type(_detect(rows, detect_outliers=False), IssueType.OUTLIER) == []


class TestCalculations:
    def test_subtotal_and_ppn_errors(self, invoice_table):
        issues = detect_calculation_errors(invoice_table.headers, invoice_table.rows, 0.11)
        calc = _of_type(issues, IssueType.CALCULATION_ERROR)
        ppn = _of_type(issues, IssueType.PPN_ERROR)

        assert [(i.row, i.expected, i.actual) for i in calc] == [(2, 60000, 50000)]
        assert [(i.row, i.expected, i.actual) for i in ppn] == [(3, 110000, 50000)]
        assert calc[0].column == "Subtotal"
        assert ppn[0].column == "PPN"
        assert all(issue.severity == Severity.ERROR for issue in issues)

    def test_ppn_tolerance_is_at_least_100(self):
        rows = [{"Harga": 10000, "Subtotal": 10000, "PPN": 1150}]
        assert detect_calculation_errors(["Harga", "Subtotal", "PPN"], rows, 0.11) == []

    def test_ppn_uses_price_without_subtotal(self):
        rows = [{"Harga": 1000000, "PPN": 100000, "Total": 1100000}]
        issues = detect_calculation_errors(["Harga", "PPN", "Total"], rows, 0.11)
        assert [(i.type, i.expected) for i in issues] == [(IssueType.PPN_ERROR, 110000)]

    def test_ppn_base_is_qty_times_price_without_subtotal(self):
        headers = ["Qty", "Harga", "PPN", "Total"]
        rows = [
            {"Qty": 2, "Harga": 100000, "PPN": 22000, "Total": 222000},
            {"Qty": 2, "Harga": 100000, "PPN": 11000, "Total": 211000},
        ]
        issues = detect_calculation_errors(headers, rows, 0.11)
        assert [(i.type, i.row, i.expected) for i in issues] == [(IssueType.PPN_ERROR, 2, 22000)]

    def test_ppn_needs_subtotal_or_total_column(self):
        rows = [{"Qty": 2, "Harga": 100000, "PPN": 1}]
        assert detect_calculation_errors(["Qty", "Harga", "PPN"], rows, 0.11) == []

    def test_zero_ppn_is_not_checked(self):
        rows = [{"Harga": 1000000, "Subtotal": 1000000, "PPN": 0}]
        assert detect_calculation_errors(["Harga", "Subtotal", "PPN"], rows, 0.11) == []

    def test_calculation_check_can_be_disabled(self, invoice_table):
        issues = IssueDetector(AnalyzeOptions(check_calculations=False)).detect(
            invoice_table.headers,
            invoice_table.rows,
            analyze_columns(invoice_table.headers, invoice_table.rows),
        )
        assert not _of_type(issues, IssueType.CALCULATION_ERROR)
        assert not _of_type(issues, IssueType.PPN_ERROR)


class TestTypos:
    CITIES = ["Jakarta", "Jakarta", "Bandung", "Jakarta", "Surabaya", "Jakrta", "Bandung", "Jakarta", "Surabaya", "Bandung"]

    def test_less_frequent_spelling_is_flagged(self):
        rows = [{"Kota": city} for city in self.CITIES]
        analysis = analyze_column("Kota", self.CITIES)
        issues = detect_typos("Kota", rows, analysis, 0.85, 500)
        assert len(issues) == 1
        assert issues[0].row == 6
        assert issues[0].value == "Jakrta"
        assert issues[0].suggestion == "Jakarta"
        assert issues[0].similarity == pytest.approx(85.71)
        assert issues[0].severity == Severity.INFO

    def test_high_cardinality_columns_are_skipped(self):
        cities = ["Jakarta", "Jakrta", "Bandung", "Bogor"]
        rows = [{"Kota": city} for city in cities]
        assert detect_typos("Kota", rows, analyze_column("Kota", cities), 0.85, 500) == []

    def test_unique_value_cap(self):
        rows = [{"Kota": city} for city in self.CITIES]
        assert detect_typos("Kota", rows, analyze_column("Kota", self.CITIES), 0.85, 3) == []

    def test_case_only_differences_are_not_typos(self):
        cities = ["Jakarta", "JAKARTA", "Bandung", "Bandung", "Bogor", "Bogor", "Jakarta", "Bogor"]
        rows = [{"Kota": city} for city in cities]
        assert detect_typos("Kota", rows, analyze_column("Kota", cities), 0.85, 500) == []


def test_clean_table_has_no_issues(customer_table):
    analysis = analyze_columns(customer_table.headers, customer_table.rows)
    assert IssueDetector().detect(customer_table.headers, customer_table.rows, analysis) == []
