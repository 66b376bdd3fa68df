"""
Common data types and enums for KUALITAS
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class DataType(str, Enum):
    """Semantic type of a cell or column"""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    FLOAT = "float"
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    NIK = "nik"
    NPWP = "npwp"
    BOOLEAN = "boolean"
    EMPTY = "empty"
    MIXED = "mixed"
    UNKNOWN = "unknown"

    @classmethod
    def numeric_types(cls) -> frozenset:
        return frozenset({cls.NUMBER, cls.INTEGER, cls.FLOAT, cls.CURRENCY, cls.PERCENTAGE})

    @classmethod
    def date_types(cls) -> frozenset:
        return frozenset({cls.DATE, cls.DATETIME})

    @classmethod
    def identifier_types(cls) -> frozenset:
        return frozenset({cls.NIK, cls.NPWP, cls.EMAIL, cls.PHONE})

    @property
    def is_numeric(self) -> bool:
        return self in DataType.numeric_types()

    @property
    def is_date(self) -> bool:
        return self in DataType.date_types()

    @property
    def is_identifier(self) -> bool:
        return self in DataType.identifier_types()


class Severity(str, Enum):
    """Issue severity"""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueType(str, Enum):
    """Kinds of data-quality findings"""

    DUPLICATE = "DUPLICATE"
    EMPTY_ROW = "EMPTY_ROW"
    FORMAT_INCONSISTENT = "FORMAT_INCONSISTENT"
    INVALID_NIK = "INVALID_NIK"
    INVALID_NPWP = "INVALID_NPWP"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PHONE = "INVALID_PHONE"
    OUTLIER = "OUTLIER"
    CALCULATION_ERROR = "CALCULATION_ERROR"
    PPN_ERROR = "PPN_ERROR"
    TYPO = "TYPO"
    WHITESPACE = "WHITESPACE"

    @property
    def definition(self) -> "IssueDefinition":
        return ISSUE_CATALOG[self]

    @property
    def severity(self) -> Severity:
        return ISSUE_CATALOG[self].severity

    @property
    def auto_fixable(self) -> bool:
        return ISSUE_CATALOG[self].auto_fixable


@dataclass(frozen=True)
class IssueDefinition:
    """Catalog entry: fixed severity and fixability per issue type"""

    code: IssueType
    name: str
    severity: Severity
    auto_fixable: bool


ISSUE_CATALOG: Dict[IssueType, IssueDefinition] = {
    definition.code: definition
    for definition in (
        IssueDefinition(IssueType.DUPLICATE, "Duplicate row", Severity.WARNING, True),
        IssueDefinition(IssueType.EMPTY_ROW, "Empty row", Severity.INFO, True),
        IssueDefinition(
            IssueType.FORMAT_INCONSISTENT, "Inconsistent format", Severity.WARNING, False
        ),
        IssueDefinition(IssueType.INVALID_NIK, "Invalid NIK", Severity.ERROR, False),
        IssueDefinition(IssueType.INVALID_NPWP, "Invalid NPWP", Severity.ERROR, False),
        IssueDefinition(IssueType.INVALID_EMAIL, "Invalid email", Severity.ERROR, False),
        IssueDefinition(IssueType.INVALID_PHONE, "Invalid phone number", Severity.WARNING, True),
        IssueDefinition(IssueType.OUTLIER, "Outlier value", Severity.WARNING, False),
        IssueDefinition(IssueType.CALCULATION_ERROR, "Calculation error", Severity.ERROR, True),
        IssueDefinition(IssueType.PPN_ERROR, "Incorrect PPN", Severity.ERROR, True),
        IssueDefinition(IssueType.TYPO, "Possible typo", Severity.INFO, True),
        IssueDefinition(IssueType.WHITESPACE, "Extra whitespace", Severity.INFO, True),
    )
}

# Issue types that count against the validity sub-score
VALIDITY_ISSUE_TYPES = frozenset(
    {
        IssueType.INVALID_NIK,
        IssueType.INVALID_NPWP,
        IssueType.INVALID_EMAIL,
        IssueType.CALCULATION_ERROR,
        IssueType.PPN_ERROR,
    }
)
