"""
Base validator interface for KUALITAS
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationResult:
    """Result of validation operation"""

    is_valid: bool
    message: str = ""
    normalized_value: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def error(self) -> Optional[str]:
        """Get error message if validation failed"""
        return self.message if not self.is_valid else None

    @property
    def data(self) -> Dict[str, Any]:
        """Extracted fields of a valid value (empty when invalid)"""
        return self.metadata if self.is_valid else {}


class BaseValidator(ABC):
    """Abstract base class for validators"""

    @abstractmethod
    def validate(
        self, value: Any, constraints: Optional[Dict[str, Any]] = None
    ) -> ValidationResult:
        """
        Validate a value against constraints

        Args:
            value: The value to validate
            constraints: Optional constraints to apply

        Returns:
            ValidationResult object
        """
        pass

    @abstractmethod
    def normalize(self, value: Any) -> Any:
        """
        Normalize a value to standard format

        Args:
            value: The value to normalize

        Returns:
            Normalized value
        """
        pass

    def is_supported_type(self, data_type: str) -> bool:
        return data_type in self.get_supported_types()

    @abstractmethod
    def get_supported_types(self) -> List[str]:
        """
        Get list of supported data types

        Returns:
            List of supported type names
        """
        pass

    @staticmethod
    def as_text(value: Any) -> Optional[str]:
        """Stringify scalar cells; None for anything that is not a scalar."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, float):
            return str(int(value)) if value.is_integer() else None
        if isinstance(value, (str, int)):
            return str(value).strip()
        return None
