"""
Cleaning Models
"""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kualitas_shared.exceptions import UnknownPresetError
from kualitas_shared.models.analysis import utc_now

CASE_TYPES = ("title", "upper", "lower")
PHONE_FORMATS = ("+62", "e164", "international", "national")


class CleanOptions(BaseModel):
    """Cleaner stage toggles and formatting choices"""

    model_config = ConfigDict(extra="forbid")

    remove_empty_rows: bool = True
    remove_duplicates: bool = True
    trim_whitespace: bool = True
    normalize_case: bool = False
    case_type: str = "title"
    standardize_dates: bool = True
    date_format: str = "dd/MM/yyyy"
    standardize_phones: bool = True
    phone_format: str = "+62"
    fix_calculations: bool = True
    tax_rate: float = Field(default=0.11, ge=0.0, le=1.0)
    fix_typos: bool = False
    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)

    @field_validator("case_type")
    @classmethod
    def check_case_type(cls, v: str) -> str:
        v = v.lower()
        if v not in CASE_TYPES:
            raise ValueError(f"case_type must be one of {CASE_TYPES}")
        return v

    @field_validator("phone_format")
    @classmethod
    def check_phone_format(cls, v: str) -> str:
        v = v.lower()
        if v not in PHONE_FORMATS:
            raise ValueError(f"phone_format must be one of {PHONE_FORMATS}")
        return v

    @classmethod
    def from_settings(cls, **overrides: Any) -> "CleanOptions":
        from kualitas_shared.config.settings import get_settings

        cleaning = get_settings().cleaning
        values: Dict[str, Any] = {
            "tax_rate": cleaning.tax_rate,
            "date_format": cleaning.date_format,
            "phone_format": cleaning.phone_format,
            "case_type": cleaning.case_type,
            "similarity_threshold": cleaning.similarity_threshold,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def preset(cls, name: str, **overrides: Any) -> "CleanOptions":
        """
        Named option bundles

        quick      - duplicates, empty rows and whitespace only
        standard   - the defaults
        financial  - standard without phone standardization
        full       - every stage including title case and typo fixes
        """
        toggles = CLEANING_PRESETS.get(name.lower())
        if toggles is None:
            raise UnknownPresetError(name, sorted(CLEANING_PRESETS))
        values = dict(toggles)
        values.update(overrides)
        return cls.from_settings(**values)


CLEANING_PRESETS: Dict[str, Dict[str, Any]] = {
    "quick": {
        "remove_duplicates": True,
        "remove_empty_rows": True,
        "trim_whitespace": True,
        "normalize_case": False,
        "standardize_dates": False,
        "standardize_phones": False,
        "fix_calculations": False,
        "fix_typos": False,
    },
    "standard": {},
    "financial": {
        "remove_duplicates": True,
        "remove_empty_rows": True,
        "trim_whitespace": True,
        "normalize_case": False,
        "standardize_dates": True,
        "standardize_phones": False,
        "fix_calculations": True,
        "fix_typos": False,
    },
    "full": {
        "remove_duplicates": True,
        "remove_empty_rows": True,
        "trim_whitespace": True,
        "normalize_case": True,
        "case_type": "title",
        "standardize_dates": True,
        "standardize_phones": True,
        "fix_calculations": True,
        "fix_typos": True,
    },
}


class CleaningLogEntry(BaseModel):
    """One stage that changed something"""

    operation: str
    message: str
    affected_count: int = Field(..., ge=1)
    timestamp: datetime = Field(default_factory=utc_now)


class CleaningSummary(BaseModel):
    original_rows: int
    cleaned_rows: int
    rows_removed: int
    cleaning_time_ms: float
    operations_performed: int


class CleaningResult(BaseModel):
    """Cleaned rows plus the change log"""

    data: List[Dict[str, Any]]
    headers: List[str]
    summary: CleaningSummary
    log: List[CleaningLogEntry] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_table(self):
        from kualitas_shared.models.table import Table

        return Table(headers=list(self.headers), rows=[dict(row) for row in self.data])

    def operations(self) -> List[str]:
        return [entry.operation for entry in self.log]
