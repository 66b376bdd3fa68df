"""
NIK (Nomor Induk Kependudukan) validator

Layout of the 16 digits:
    PP KK CC DDMMYY SSSS
    province, regency, district, birth date (day + 40 for women), serial
"""

import re
from typing import Any, Dict, List, Optional

from ..config.app_config import AppConfig
from ..models.common import DataType
from .base_validator import BaseValidator, ValidationResult

FEMALE_DAY_OFFSET = 40


class NIKValidator(BaseValidator):
    """Validator for Indonesian national identity numbers"""

    def validate(
        self, value: Any, constraints: Optional[Dict[str, Any]] = None
    ) -> ValidationResult:
        text = self.as_text(value)
        if text is None:
            return ValidationResult(is_valid=False, message="NIK is empty")

        digits = self.normalize(text)
        if len(digits) != 16:
            return ValidationResult(
                is_valid=False, message=f"NIK must be 16 digits, got {len(digits)}"
            )

        province_code = digits[:2]
        province = AppConfig.get_province_name(province_code)
        if not province:
            return ValidationResult(
                is_valid=False, message=f"Unknown province code: {province_code}"
            )

        day = int(digits[6:8])
        month = int(digits[8:10])
        year_suffix = digits[10:12]

        gender = "Laki-laki"
        if day > FEMALE_DAY_OFFSET:
            gender = "Perempuan"
            day -= FEMALE_DAY_OFFSET

        if not 1 <= day <= 31:
            return ValidationResult(is_valid=False, message=f"Invalid birth day in NIK: {day}")
        if not 1 <= month <= 12:
            return ValidationResult(is_valid=False, message=f"Invalid birth month in NIK: {month}")

        # 두 자리 연도는 19xx 로 해석
        birth_year = int(f"19{year_suffix}")
        return ValidationResult(
            is_valid=True,
            message="Valid NIK",
            normalized_value=digits,
            metadata={
                "province": province,
                "province_code": province_code,
                "regency_code": digits[2:4],
                "district_code": digits[4:6],
                "birth_day": day,
                "birth_month": month,
                "birth_year": birth_year,
                "birth_date": f"{day:02d}/{month:02d}/{birth_year}",
                "gender": gender,
                "serial": digits[12:],
            },
        )

    def normalize(self, value: Any) -> Any:
        if value is None:
            return value
        return re.sub(r"\D", "", str(value))

    def get_supported_types(self) -> List[str]:
        return [DataType.NIK.value, "nik", "ktp"]
