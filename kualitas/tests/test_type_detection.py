"""
🔥 THINK ULTRA! Type detection 테스트
Indonesian value shapes, rule order and column voting
"""

from datetime import date, datetime

import pytest

from kualitas.services.type_detection import (
    VALUE_TYPE_RULES,
    analyze_column,
    analyze_columns,
    detect_column_type,
    detect_value_type,
)
from kualitas_shared.models.common import DataType


class TestValueType:
    """단일 값 타입 감지 테스트"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("3201011505990001", DataType.NIK),
            ("01.234.567.8-901.234", DataType.NPWP),
            ("1234567890123456", DataType.NPWP),
            ("081234567890", DataType.PHONE),
            ("+62 812-3456-7890", DataType.PHONE),
            ("Rp 1.500.000", DataType.CURRENCY),
            ("$1,200.50", DataType.CURRENCY),
            ("budi@example.com", DataType.EMAIL),
            ("https://example.com/produk", DataType.URL),
            ("12,5%", DataType.PERCENTAGE),
            ("15/01/2024", DataType.DATE),
            ("15-01-2024", DataType.DATE),
            ("2024-01-15", DataType.DATE),
            ("15 Januari 2024", DataType.DATE),
            ("2024-01-15T10:30:00", DataType.DATETIME),
            ("10:30", DataType.TIME),
            ("ya", DataType.BOOLEAN),
            ("Tidak", DataType.BOOLEAN),
            ("1", DataType.BOOLEAN),
            ("42", DataType.INTEGER),
            ("1.234", DataType.INTEGER),
            ("3,14", DataType.FLOAT),
            ("Jakarta", DataType.STRING),
            ("", DataType.EMPTY),
            ("   ", DataType.EMPTY),
            (None, DataType.EMPTY),
        ],
    )
    def test_detects_indonesian_shapes(self, value, expected):
        assert detect_value_type(value).type == expected

    def test_nik_details_come_from_validation(self):
        result = detect_value_type("3201011505990001")
        assert result.details["province"] == "Jawa Barat"
        assert result.details["gender"] == "Laki-laki"

    def test_invalid_nik_birth_date_is_not_a_nik(self):
        # 16 digits with day 38 after the female offset: not a NIK, still an NPWP shape
        assert detect_value_type("3201017805990001").type == DataType.NPWP

    def test_money_header_turns_numbers_into_currency(self):
        assert detect_value_type(1500000, "Harga Satuan").type == DataType.CURRENCY
        assert detect_value_type("250.000", "Total Bayar").type == DataType.CURRENCY
        assert detect_value_type(1500000, "Berat").type == DataType.INTEGER

    def test_date_header_enables_iso_datetimes_as_dates(self):
        assert detect_value_type("2024-01-15 10:30", "Tanggal Order").type == DataType.DATE

    def test_native_values(self):
        assert detect_value_type(date(2024, 1, 15)).type == DataType.DATE
        assert detect_value_type(datetime(2024, 1, 15)).type == DataType.DATE
        assert detect_value_type(datetime(2024, 1, 15, 10, 30)).type == DataType.DATETIME
        assert detect_value_type(True).type == DataType.BOOLEAN
        assert detect_value_type(12.5).type == DataType.FLOAT
        assert detect_value_type(3201011505990001).type == DataType.NIK

    def test_rule_order_is_explicit(self):
        names = [rule.name for rule in VALUE_TYPE_RULES]
        assert names[0] == "empty"
        assert names[-1] == "string"
        assert names.index("nik") < names.index("npwp") < names.index("phone")
        assert names.index("currency_idr") < names.index("email") < names.index("date")
        assert names.index("boolean") < names.index("number")


class TestColumnType:
    """컬럼 타입 투표 테스트"""

    def test_uniform_column(self):
        result = detect_column_type("Telepon", ["081234567890", "+6281298765432", "6285711112222"])
        assert result.type == DataType.PHONE
        assert result.confidence == 100.0
        assert result.distribution == {"phone": 3}

    def test_many_types_without_majority_is_mixed(self):
        values = ["budi@example.com", "081234567890", "Jakarta", "42", "15/01/2024"]
        result = detect_column_type("Kontak", values)
        assert result.type == DataType.MIXED
        assert result.confidence == 20.0
        assert len(result.distribution) == 5

    def test_two_types_never_mixed(self):
        result = detect_column_type("Nilai", ["10", "20", "abc"])
        assert result.type == DataType.INTEGER
        assert result.confidence == pytest.approx(66.67)

    def test_tie_goes_to_first_seen_type(self):
        assert detect_column_type("x", ["abc", "10"]).type == DataType.STRING

    def test_empty_column(self):
        result = detect_column_type("Catatan", [None, "", "  "])
        assert result.type == DataType.EMPTY
        assert result.confidence == 100.0


class TestColumnAnalysis:
    def test_counts_and_rates(self):
        analysis = analyze_column("Kota", ["Jakarta", " jakarta ", None, "Bandung", ""])
        assert analysis.detected_type == DataType.STRING
        assert analysis.total_values == 5
        assert analysis.non_empty_count == 3
        assert analysis.empty_count == 2
        assert analysis.unique_count == 2
        assert analysis.fill_rate == 60.0
        assert analysis.sample_values == ["Jakarta", " jakarta ", "Bandung"]
        assert not analysis.is_numeric and not analysis.is_identifier

    def test_flags(self):
        assert analyze_column("Harga", ["Rp 10.000", "Rp 20.000"]).is_numeric
        assert analyze_column("Tgl", ["15/01/2024"]).is_date
        assert analyze_column("Email", ["a@b.co"]).is_identifier

    def test_analyze_columns_keeps_header_order(self, customer_table):
        analysis = analyze_columns(customer_table.headers, customer_table.rows)
        assert list(analysis) == ["Nama", "NIK", "Email", "Telepon"]
        assert analysis["NIK"].detected_type == DataType.NIK
        assert analysis["Email"].detected_type == DataType.EMAIL
        assert analysis["Telepon"].detected_type == DataType.PHONE
        assert analysis["Nama"].detected_type == DataType.STRING
