"""
NPWP (tax id) validator

Accepts the legacy 15-digit number (99.999.999.9-999.999) and the
16-digit NIK-based number issued from 2024. Only length is checked;
no check digit.
"""

import re
from typing import Any, Dict, List, Optional

from ..models.common import DataType
from .base_validator import BaseValidator, ValidationResult


class NPWPValidator(BaseValidator):
    """Validator for Indonesian tax identification numbers"""

    def validate(
        self, value: Any, constraints: Optional[Dict[str, Any]] = None
    ) -> ValidationResult:
        text = self.as_text(value)
        if text is None:
            return ValidationResult(is_valid=False, message="NPWP is empty")

        digits = self.normalize(text)
        if len(digits) == 15:
            return ValidationResult(
                is_valid=True,
                message="Valid NPWP",
                normalized_value=self.format_legacy(digits),
                metadata={"format": "legacy", "digits": digits},
            )
        if len(digits) == 16:
            return ValidationResult(
                is_valid=True,
                message="Valid NPWP",
                normalized_value=digits,
                metadata={"format": "nik_based", "digits": digits},
            )
        return ValidationResult(
            is_valid=False, message=f"NPWP must be 15 or 16 digits, got {len(digits)}"
        )

    def normalize(self, value: Any) -> Any:
        if value is None:
            return value
        return re.sub(r"\D", "", str(value))

    def get_supported_types(self) -> List[str]:
        return [DataType.NPWP.value, "npwp"]

    @staticmethod
    def format_legacy(digits: str) -> str:
        """"012345678901234" -> "01.234.567.8-901.234" """
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}.{digits[8]}-{digits[9:12]}.{digits[12:15]}"
