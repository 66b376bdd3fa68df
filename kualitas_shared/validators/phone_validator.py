"""
Indonesian phone number validator for KUALITAS
"""

import logging
import re
from typing import Any, Dict, List, Optional

import phonenumbers
from phonenumbers import NumberParseException

from ..config.app_config import AppConfig
from ..models.common import DataType
from .base_validator import BaseValidator, ValidationResult

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s\-()]")

_PHONE_FORMATS = {
    "e164": phonenumbers.PhoneNumberFormat.E164,
    "international": phonenumbers.PhoneNumberFormat.INTERNATIONAL,
    "national": phonenumbers.PhoneNumberFormat.NATIONAL,
}


def strip_phone(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return _SEPARATORS.sub("", str(value))


def normalize_phone_id(value: Any) -> Optional[str]:
    """
    Canonical +62 form.

    "0812-3456-7890" -> "+6281234567890", "6281..." -> "+6281...",
    "+6281..." unchanged, anything else -> None
    """
    cleaned = strip_phone(value)
    if cleaned.startswith("08"):
        return "+62" + cleaned[1:]
    if cleaned.startswith("62"):
        return "+" + cleaned
    if cleaned.startswith("+62"):
        return cleaned
    return None


class PhoneValidator(BaseValidator):
    """Validator for Indonesian mobile numbers (0 / 62 / +62 prefixes)"""

    def validate(
        self, value: Any, constraints: Optional[Dict[str, Any]] = None
    ) -> ValidationResult:
        cleaned = strip_phone(value)
        if not cleaned:
            return ValidationResult(is_valid=False, message="Phone number is empty")

        if not AppConfig.PHONE_ID_PATTERN.match(cleaned):
            return ValidationResult(
                is_valid=False, message="Invalid Indonesian phone number format"
            )

        canonical = normalize_phone_id(cleaned)
        result = {"original": value, "normalized": canonical}

        try:
            parsed = phonenumbers.parse(canonical, "ID")
            result.update(
                {
                    "e164": phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164),
                    "international": phonenumbers.format_number(
                        parsed, phonenumbers.PhoneNumberFormat.INTERNATIONAL
                    ),
                    "national": phonenumbers.format_number(
                        parsed, phonenumbers.PhoneNumberFormat.NATIONAL
                    ),
                }
            )
        except NumberParseException as e:
            logger.debug(f"phonenumbers could not parse '{canonical}': {e}")

        return ValidationResult(
            is_valid=True,
            message="Valid phone",
            normalized_value=result,
            metadata={"type": "phone", "region": "ID"},
        )

    def normalize(self, value: Any) -> Any:
        return normalize_phone_id(value)

    def get_supported_types(self) -> List[str]:
        return [DataType.PHONE.value, "phone", "telepon", "hp", "tel"]

    @classmethod
    def format_phone(cls, phone: Any, format_type: str = "+62") -> Optional[str]:
        """
        Format an Indonesian phone number

        Args:
            phone: Phone number in any accepted prefix form
            format_type: +62 (canonical), e164, international or national

        Returns:
            Formatted number, or None when the value is not an Indonesian number
        """
        canonical = normalize_phone_id(phone)
        if canonical is None:
            return None

        number_format = _PHONE_FORMATS.get(format_type.lower())
        if number_format is None:
            return canonical

        try:
            parsed = phonenumbers.parse(canonical, "ID")
            return phonenumbers.format_number(parsed, number_format)
        except NumberParseException as e:
            # Fall back to the canonical form
            logger.debug(f"Failed to format phone number '{phone}' as {format_type}: {e}")
        return canonical
