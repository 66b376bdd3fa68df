"""
🔥 THINK ULTRA! Issue detection battery

Each detector is a pure function of (headers, rows, column analysis) and
returns Issue records; row numbers are 1-based data positions.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from kualitas_shared.models.analysis import AnalyzeOptions, ColumnAnalysis, Issue
from kualitas_shared.models.common import DataType, IssueType
from kualitas_shared.utils.parsing import (
    as_number,
    format_rupiah,
    is_empty,
    parse_number,
    round_half_up,
    to_text,
)
from kualitas_shared.utils.similarity import string_similarity
from kualitas_shared.utils.stats import detect_outliers
from kualitas_shared.validators import get_validator

from .column_roles import ColumnRoles, base_amount, resolve_column_roles
from .type_detection import detect_value_type

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

MIN_OUTLIER_VALUES = 10
MIN_TYPO_UNIQUE_VALUES = 3
MAX_TYPO_UNIQUE_RATIO = 0.5
CALCULATION_TOLERANCE = 1
PPN_MIN_TOLERANCE = 100
PPN_RELATIVE_TOLERANCE = 0.01
FORMAT_SAMPLES_PER_TYPE = 3

_MULTI_SPACE = re.compile(r"\s{2,}")

# column type -> issue raised when a value fails re-validation
VALIDATED_TYPES: Dict[DataType, IssueType] = {
    DataType.NIK: IssueType.INVALID_NIK,
    DataType.NPWP: IssueType.INVALID_NPWP,
    DataType.EMAIL: IssueType.INVALID_EMAIL,
    DataType.PHONE: IssueType.INVALID_PHONE,
}


def _row_number(index: int) -> int:
    return index + 1


def detect_duplicates(headers: Sequence[str], rows: Sequence[Row]) -> List[Issue]:
    """Rows whose case-folded, trimmed values match an earlier row."""
    issues = []
    seen: Dict[str, int] = {}
    for index, row in enumerate(rows):
        signature = "|".join(to_text(row.get(header)).strip().lower() for header in headers)
        if signature in seen:
            issues.append(
                Issue.of(
                    IssueType.DUPLICATE,
                    f"Row {_row_number(index)} duplicates row {seen[signature]}",
                    row=_row_number(index),
                    original_row=seen[signature],
                    fix="Remove the duplicate row",
                )
            )
        else:
            seen[signature] = _row_number(index)
    return issues


def detect_empty_rows(headers: Sequence[str], rows: Sequence[Row]) -> List[Issue]:
    issues = []
    for index, row in enumerate(rows):
        if all(is_empty(row.get(header)) for header in headers):
            issues.append(
                Issue.of(
                    IssueType.EMPTY_ROW,
                    f"Row {_row_number(index)} is empty",
                    row=_row_number(index),
                    fix="Remove the empty row",
                )
            )
    return issues


def detect_format_inconsistency(
    header: str, rows: Sequence[Row], analysis: ColumnAnalysis
) -> List[Issue]:
    if analysis.detected_type != DataType.MIXED:
        return []

    samples: Dict[str, List[Dict[str, Any]]] = {}
    for index, row in enumerate(rows):
        value = row.get(header)
        if is_empty(value):
            continue
        value_type = detect_value_type(value, header).type.value
        bucket = samples.setdefault(value_type, [])
        if len(bucket) < FORMAT_SAMPLES_PER_TYPE:
            bucket.append({"value": value, "row": _row_number(index)})

    types = list(analysis.distribution)
    return [
        Issue.of(
            IssueType.FORMAT_INCONSISTENT,
            f"Column '{header}' mixes {len(types)} formats: {', '.join(types)}",
            column=header,
            fix="Standardize the column to a single format",
            details={"types": types, "distribution": dict(analysis.distribution), "samples": samples},
        )
    ]


def detect_invalid_values(
    header: str, rows: Sequence[Row], analysis: ColumnAnalysis, strict_email: bool = False
) -> List[Issue]:
    """Re-validate identifier columns value by value."""
    issue_type = VALIDATED_TYPES.get(analysis.detected_type)
    if issue_type is None:
        return []

    validator = get_validator(analysis.detected_type.value)
    constraints = {"strict": strict_email} if analysis.detected_type == DataType.EMAIL else None

    issues = []
    for index, row in enumerate(rows):
        value = row.get(header)
        if is_empty(value):
            continue
        result = validator.validate(value, constraints)
        if not result.is_valid:
            issues.append(
                Issue.of(
                    issue_type,
                    f"{issue_type.definition.name} in '{header}': {result.error}",
                    row=_row_number(index),
                    column=header,
                    value=value,
                )
            )
    return issues


def detect_whitespace(header: str, rows: Sequence[Row]) -> List[Issue]:
    issues = []
    for index, row in enumerate(rows):
        value = row.get(header)
        if not isinstance(value, str) or is_empty(value):
            continue
        if value != value.strip():
            issues.append(
                Issue.of(
                    IssueType.WHITESPACE,
                    f"Leading or trailing whitespace in '{header}'",
                    row=_row_number(index),
                    column=header,
                    value=value,
                    suggestion=value.strip(),
                    details={"kind": "trim"},
                )
            )
        if _MULTI_SPACE.search(value):
            issues.append(
                Issue.of(
                    IssueType.WHITESPACE,
                    f"Repeated whitespace in '{header}'",
                    row=_row_number(index),
                    column=header,
                    value=value,
                    suggestion=_MULTI_SPACE.sub(" ", value.strip()),
                    details={"kind": "multiple_spaces"},
                )
            )
    return issues


def detect_column_outliers(
    header: str, rows: Sequence[Row], analysis: ColumnAnalysis, threshold: float
) -> List[Issue]:
    if not analysis.is_numeric:
        return []

    positions, values = [], []
    for index, row in enumerate(rows):
        number = parse_number(row.get(header), allow_percent=True)
        if number is not None:
            positions.append(index)
            values.append(number)
    if len(values) < MIN_OUTLIER_VALUES:
        return []

    issues = []
    for outlier in detect_outliers(values, threshold):
        index = positions[outlier["index"]]
        issues.append(
            Issue.of(
                IssueType.OUTLIER,
                f"Value {as_number(outlier['value'])} in '{header}' is {outlier['reason']} "
                f"(expected {outlier['lower']:.2f} .. {outlier['upper']:.2f})",
                row=_row_number(index),
                column=header,
                value=rows[index].get(header),
                details={
                    "reason": outlier["reason"],
                    "q1": outlier["q1"],
                    "q3": outlier["q3"],
                    "lower_bound": outlier["lower"],
                    "upper_bound": outlier["upper"],
                },
            )
        )
    return issues


def detect_calculation_errors(
    headers: Sequence[str], rows: Sequence[Row], tax_rate: float,
    roles: Optional[ColumnRoles] = None,
) -> List[Issue]:
    """qty x price = subtotal and subtotal x rate = PPN, per row"""
    roles = roles or resolve_column_roles(headers)
    issues = []

    for index, row in enumerate(rows):
        if roles.qty and roles.price and roles.subtotal:
            qty = parse_number(row.get(roles.qty))
            price = parse_number(row.get(roles.price))
            subtotal = parse_number(row.get(roles.subtotal))
            if qty is not None and price is not None and subtotal is not None:
                expected = qty * price
                if abs(expected - subtotal) > CALCULATION_TOLERANCE:
                    issues.append(
                        Issue.of(
                            IssueType.CALCULATION_ERROR,
                            f"{roles.subtotal} should be {format_rupiah(expected)} "
                            f"({as_number(qty)} x {format_rupiah(price)}), found {format_rupiah(subtotal)}",
                            row=_row_number(index),
                            column=roles.subtotal,
                            expected=as_number(expected),
                            actual=as_number(subtotal),
                            fix=f"Set {roles.subtotal} to {roles.qty} x {roles.price}",
                        )
                    )

        if roles.tax and (roles.subtotal or roles.total):
            base = base_amount(row, roles)
            tax = parse_number(row.get(roles.tax))
            if base is not None and tax is not None and tax > 0:
                expected_tax = round_half_up(base * tax_rate)
                tolerance = max(expected_tax * PPN_RELATIVE_TOLERANCE, PPN_MIN_TOLERANCE)
                if abs(expected_tax - tax) > tolerance:
                    issues.append(
                        Issue.of(
                            IssueType.PPN_ERROR,
                            f"PPN should be {format_rupiah(expected_tax)} "
                            f"({tax_rate * 100:g}% of {format_rupiah(base)}), found {format_rupiah(tax)}",
                            row=_row_number(index),
                            column=roles.tax,
                            expected=expected_tax,
                            actual=as_number(tax),
                            fix=f"Set {roles.tax} to {tax_rate * 100:g}% of the base amount",
                            details={"base": as_number(base), "rate": tax_rate},
                        )
                    )
    return issues


def detect_typos(
    header: str,
    rows: Sequence[Row],
    analysis: ColumnAnalysis,
    similarity_threshold: float,
    max_unique_values: int,
) -> List[Issue]:
    """
    Near-duplicate spellings in low-cardinality text columns.

    The less frequent spelling of a similar pair is the typo; its rows get the
    more frequent spelling as suggestion.
    """
    if analysis.detected_type != DataType.STRING:
        return []
    if analysis.unique_count < MIN_TYPO_UNIQUE_VALUES:
        return []
    if analysis.unique_count > len(rows) * MAX_TYPO_UNIQUE_RATIO:
        return []

    frequency: Dict[str, int] = {}
    for row in rows:
        value = row.get(header)
        if is_empty(value):
            continue
        text = to_text(value).strip()
        frequency[text] = frequency.get(text, 0) + 1

    if len(frequency) > max_unique_values:
        logger.debug(f"Skipping typo detection for '{header}': {len(frequency)} distinct values")
        return []

    unique_values = list(frequency)
    corrections: Dict[str, Dict[str, Any]] = {}
    for i, left in enumerate(unique_values):
        if left in corrections:
            continue
        for right in unique_values[i + 1:]:
            if right in corrections:
                continue
            similarity = string_similarity(left, right)
            if similarity_threshold <= similarity < 1:
                if frequency[left] < frequency[right]:
                    typo, correct = left, right
                else:
                    typo, correct = right, left
                corrections[typo] = {"suggestion": correct, "similarity": round(similarity * 100, 2)}
                break

    issues = []
    for index, row in enumerate(rows):
        value = row.get(header)
        if is_empty(value):
            continue
        correction = corrections.get(to_text(value).strip())
        if correction is None:
            continue
        issues.append(
            Issue.of(
                IssueType.TYPO,
                f"'{value}' in '{header}' looks like a typo of '{correction['suggestion']}' "
                f"({correction['similarity']}% similar)",
                row=_row_number(index),
                column=header,
                value=value,
                suggestion=correction["suggestion"],
                similarity=correction["similarity"],
            )
        )
    return issues


class IssueDetector:
    """Runs every detector in a fixed order and concatenates the findings"""

    def __init__(self, options: Optional[AnalyzeOptions] = None):
        self.options = options or AnalyzeOptions()

    def detect(
        self,
        headers: Sequence[str],
        rows: Sequence[Row],
        column_analysis: Dict[str, ColumnAnalysis],
    ) -> List[Issue]:
        issues: List[Issue] = []
        issues.extend(detect_duplicates(headers, rows))
        issues.extend(detect_empty_rows(headers, rows))

        for header in headers:
            analysis = column_analysis[header]
            issues.extend(detect_format_inconsistency(header, rows, analysis))
            issues.extend(detect_invalid_values(header, rows, analysis, self.options.strict_email))
            issues.extend(detect_whitespace(header, rows))
            if self.options.detect_outliers:
                issues.extend(
                    detect_column_outliers(header, rows, analysis, self.options.outlier_threshold)
                )

        if self.options.check_calculations:
            issues.extend(detect_calculation_errors(headers, rows, self.options.tax_rate))

        issues.extend(self.detect_typos(headers, rows, column_analysis))

        logger.debug(f"Detected {len(issues)} issues across {len(headers)} columns")
        return issues

    def detect_typos(
        self,
        headers: Sequence[str],
        rows: Sequence[Row],
        column_analysis: Dict[str, ColumnAnalysis],
    ) -> List[Issue]:
        issues: List[Issue] = []
        for header in headers:
            issues.extend(
                detect_typos(
                    header,
                    rows,
                    column_analysis[header],
                    self.options.similarity_threshold,
                    self.options.typo_max_unique_values,
                )
            )
        return issues
