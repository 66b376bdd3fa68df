"""
Validators for KUALITAS
"""

from typing import Any, Dict, Optional, Type

from .base_validator import BaseValidator, ValidationResult
from .email_validator import EmailValidator
from .nik_validator import NIKValidator
from .npwp_validator import NPWPValidator
from .phone_validator import PhoneValidator, normalize_phone_id

# Registry of validators by type
_VALIDATOR_REGISTRY: Dict[str, Type[BaseValidator]] = {
    "nik": NIKValidator,
    "npwp": NPWPValidator,
    "email": EmailValidator,
    "phone": PhoneValidator,
}


def get_validator(data_type: str) -> Optional[BaseValidator]:
    """
    Get validator instance for a specific data type

    Args:
        data_type: The data type to get validator for

    Returns:
        Validator instance or None if not found
    """
    validator_class = _VALIDATOR_REGISTRY.get(str(data_type).lower())
    if validator_class:
        return validator_class()
    return None


def register_validator(data_type: str, validator_class: Type[BaseValidator]):
    """
    Register a new validator

    Args:
        data_type: The data type name
        validator_class: The validator class
    """
    _VALIDATOR_REGISTRY[data_type.lower()] = validator_class


def validate_nik(value: Any) -> ValidationResult:
    return NIKValidator().validate(value)


def validate_npwp(value: Any) -> ValidationResult:
    return NPWPValidator().validate(value)


def validate_email(value: Any, strict: bool = False) -> ValidationResult:
    return EmailValidator().validate(value, {"strict": strict})


def validate_phone_id(value: Any) -> ValidationResult:
    return PhoneValidator().validate(value)


def format_phone_id(value: Any, phone_format: str = "+62") -> Optional[str]:
    return PhoneValidator.format_phone(value, phone_format)


__all__ = [
    "BaseValidator",
    "EmailValidator",
    "NIKValidator",
    "NPWPValidator",
    "PhoneValidator",
    "ValidationResult",
    "format_phone_id",
    "get_validator",
    "normalize_phone_id",
    "register_validator",
    "validate_email",
    "validate_nik",
    "validate_npwp",
    "validate_phone_id",
]
