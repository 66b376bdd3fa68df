"""
Email validator for KUALITAS
"""

from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError
from email_validator import validate_email as validate_email_lib

from ..config.app_config import AppConfig
from ..models.common import DataType
from .base_validator import BaseValidator, ValidationResult


class EmailValidator(BaseValidator):
    """
    Validator for email addresses

    Regex check by default; constraints={"strict": True} additionally runs
    email-validator (no DNS lookups).
    """

    def validate(
        self, value: Any, constraints: Optional[Dict[str, Any]] = None
    ) -> ValidationResult:
        if constraints is None:
            constraints = {}

        if not isinstance(value, str):
            return ValidationResult(
                is_valid=False, message=f"Expected string, got {type(value).__name__}"
            )

        email = value.strip()
        if not AppConfig.EMAIL_PATTERN.match(email):
            return ValidationResult(is_valid=False, message="Invalid email format")

        local, _, domain = email.rpartition("@")
        result_data = {"email": email, "local": local, "domain": domain}

        if constraints.get("strict"):
            try:
                validated = validate_email_lib(email, check_deliverability=False)
            except EmailNotValidError as e:
                return ValidationResult(is_valid=False, message=f"Invalid email address: {str(e)}")
            result_data = {
                "email": validated.normalized,
                "local": validated.local_part,
                "domain": validated.domain,
            }

        return ValidationResult(
            is_valid=True,
            message="Valid email",
            normalized_value=result_data,
            metadata={"type": "email", "strict": bool(constraints.get("strict"))},
        )

    def normalize(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return value.strip().lower()

    def get_supported_types(self) -> List[str]:
        return [DataType.EMAIL.value, "email", "mail"]
