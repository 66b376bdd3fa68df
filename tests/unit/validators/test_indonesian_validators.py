import pytest

from kualitas_shared.validators import (
    EmailValidator,
    NIKValidator,
    NPWPValidator,
    PhoneValidator,
    format_phone_id,
    get_validator,
    normalize_phone_id,
    validate_email,
    validate_nik,
    validate_npwp,
    validate_phone_id,
)


class TestNIKValidator:
    def test_valid_nik_extracts_birth_data(self):
        result = validate_nik("3201011505990001")
        assert result.is_valid
        assert result.data["province"] == "Jawa Barat"
        assert result.data["province_code"] == "32"
        assert result.data["birth_day"] == 15
        assert result.data["birth_month"] == 5
        assert result.data["birth_year"] == 1999
        assert result.data["birth_date"] == "15/05/1999"
        assert result.data["gender"] == "Laki-laki"

    def test_female_day_offset(self):
        result = validate_nik("3171015501900002")
        assert result.is_valid
        assert result.data["gender"] == "Perempuan"
        assert result.data["birth_day"] == 15
        assert result.data["province"] == "DKI Jakarta"

    def test_separators_are_ignored(self):
        assert validate_nik("3201.0115.0599.0001").is_valid

    def test_numeric_cell(self):
        assert validate_nik(3201011505990001).is_valid

    @pytest.mark.parametrize(
        "value, fragment",
        [
            ("320101150599000", "16 digits"),
            ("9901011505990001", "province"),
            ("3201017505990001", "day"),
            ("3201011513990001", "month"),
            ("3201010005990001", "day"),
        ],
    )
    def test_invalid_nik(self, value, fragment):
        result = validate_nik(value)
        assert not result.is_valid
        assert fragment in result.error.lower()
        assert result.data == {}

    def test_empty(self):
        assert not validate_nik(None).is_valid


class TestNPWPValidator:
    def test_legacy_format(self):
        result = validate_npwp("01.234.567.8-901.234")
        assert result.is_valid
        assert result.metadata["format"] == "legacy"
        assert result.normalized_value == "01.234.567.8-901.234"

    def test_legacy_digits_are_formatted(self):
        assert validate_npwp("012345678901234").normalized_value == "01.234.567.8-901.234"

    def test_nik_based_format(self):
        result = validate_npwp("3201011505990001")
        assert result.is_valid
        assert result.metadata["format"] == "nik_based"

    def test_wrong_length(self):
        assert not validate_npwp("12.345.678").is_valid


class TestEmailValidator:
    def test_valid(self):
        result = validate_email("budi.santoso@example.co.id")
        assert result.is_valid
        assert result.normalized_value["domain"] == "example.co.id"

    @pytest.mark.parametrize("value", ["budi@", "budi.example.com", "budi@example", 123])
    def test_invalid(self, value):
        assert not validate_email(value).is_valid

    def test_strict_mode_uses_email_validator(self):
        result = validate_email("Budi@Example.com", strict=True)
        assert result.is_valid
        assert result.metadata["strict"] is True

    def test_strict_mode_rejects_consecutive_dots(self):
        assert validate_email("budi..santoso@example.com").is_valid
        assert not validate_email("budi..santoso@example.com", strict=True).is_valid


class TestPhoneValidator:
    @pytest.mark.parametrize(
        "value", ["081234567890", "+6281234567890", "6281234567890", "0812-3456-7890", "(0812) 3456 7890"]
    )
    def test_valid_numbers(self, value):
        result = validate_phone_id(value)
        assert result.is_valid
        assert result.normalized_value["normalized"] == "+6281234567890"

    @pytest.mark.parametrize("value", ["021123", "0712345678", "12345", "", None])
    def test_invalid_numbers(self, value):
        assert not validate_phone_id(value).is_valid

    def test_normalize_phone_id(self):
        assert normalize_phone_id("0812 3456 7890") == "+6281234567890"
        assert normalize_phone_id("6281234567890") == "+6281234567890"
        assert normalize_phone_id("+6281234567890") == "+6281234567890"
        assert normalize_phone_id("12345") is None

    def test_format_phone_id(self):
        assert format_phone_id("081234567890") == "+6281234567890"
        assert format_phone_id("081234567890", "e164") == "+6281234567890"
        assert format_phone_id("081234567890", "international").startswith("+62 812")
        assert format_phone_id("081234567890", "national").startswith("0812")
        assert format_phone_id("12345") is None


def test_registry():
    assert isinstance(get_validator("nik"), NIKValidator)
    assert isinstance(get_validator("NPWP"), NPWPValidator)
    assert isinstance(get_validator("email"), EmailValidator)
    assert isinstance(get_validator("phone"), PhoneValidator)
    assert get_validator("unknown") is None
    assert NIKValidator().is_supported_type("nik")
