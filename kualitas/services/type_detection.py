"""
🔥 THINK ULTRA! Semantic type detection for Indonesian business data

Classifies single values with an ordered rule table (first match wins) and
columns by majority vote over their non-empty values.
"""

import logging
import re
from datetime import date, datetime, time
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Pattern, Sequence

from kualitas_shared.config.app_config import AppConfig
from kualitas_shared.models.analysis import ColumnAnalysis
from kualitas_shared.models.common import DataType
from kualitas_shared.utils.parsing import is_empty, parse_date, parse_number, to_text
from kualitas_shared.validators import validate_nik
from kualitas_shared.validators.phone_validator import normalize_phone_id, strip_phone

logger = logging.getLogger(__name__)

# Header keywords that make an ambiguous value lean towards a type
HEADER_HINTS: Dict[str, Pattern] = {
    "currency": re.compile(r"(harga|total|gaji|nominal|rupiah|idr|bayar|biaya|tarif)", re.IGNORECASE),
    "date": re.compile(r"(tanggal|date|tgl|created|updated)", re.IGNORECASE),
}

MIXED_MIN_TYPES = 3
MIXED_MAX_CONFIDENCE = 70.0
SAMPLE_SIZE = 5

_ID_TEXT = re.compile(r"^[\d.\s-]+$")
_NON_DIGIT = re.compile(r"\D")


class ValueProbe(NamedTuple):
    raw: Any
    text: str
    header: str


class ValueTypeResult(NamedTuple):
    type: DataType
    details: Dict[str, Any]


class ValueTypeRule(NamedTuple):
    name: str
    check: Callable[[ValueProbe], Optional[ValueTypeResult]]


class ColumnTypeResult(NamedTuple):
    type: DataType
    confidence: float
    details: Dict[str, Any]
    distribution: Dict[str, int]


def _has_hint(kind: str, header: str) -> bool:
    return bool(header) and bool(HEADER_HINTS[kind].search(header))


def _check_empty(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if is_empty(probe.raw):
        return ValueTypeResult(DataType.EMPTY, {})
    return None


def _check_nik(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if isinstance(probe.raw, (bool, date)) or not _ID_TEXT.match(probe.text):
        return None
    digits = _NON_DIGIT.sub("", probe.text)
    if not AppConfig.NIK_PATTERN.match(digits):
        return None
    result = validate_nik(digits)
    if not result.is_valid:
        return None
    return ValueTypeResult(DataType.NIK, dict(result.metadata))


def _check_npwp(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if AppConfig.NPWP_PATTERN.match(probe.text):
        return ValueTypeResult(DataType.NPWP, {"format": "legacy"})
    if isinstance(probe.raw, (bool, date)) or not _ID_TEXT.match(probe.text):
        return None
    if AppConfig.NPWP_NEW_PATTERN.match(_NON_DIGIT.sub("", probe.text)):
        return ValueTypeResult(DataType.NPWP, {"format": "nik_based"})
    return None


def _check_phone(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if isinstance(probe.raw, (bool, date)):
        return None
    if AppConfig.PHONE_ID_PATTERN.match(strip_phone(probe.raw)):
        return ValueTypeResult(DataType.PHONE, {"normalized": normalize_phone_id(probe.raw)})
    return None


def _check_rupiah(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if AppConfig.CURRENCY_IDR_PATTERN.match(probe.text):
        return ValueTypeResult(
            DataType.CURRENCY, {"currency": "IDR", "value": parse_number(probe.text)}
        )
    if _has_hint("currency", probe.header) and not isinstance(probe.raw, date):
        value = parse_number(probe.raw)
        if value is not None:
            return ValueTypeResult(
                DataType.CURRENCY, {"currency": "IDR", "value": value, "from_header": True}
            )
    return None


def _check_dollar(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if AppConfig.CURRENCY_USD_PATTERN.match(probe.text):
        return ValueTypeResult(
            DataType.CURRENCY, {"currency": "USD", "value": parse_number(probe.text)}
        )
    return None


def _check_email(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if AppConfig.EMAIL_PATTERN.match(probe.text):
        return ValueTypeResult(DataType.EMAIL, {})
    return None


def _check_url(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if isinstance(probe.raw, str) and AppConfig.URL_PATTERN.match(probe.text):
        return ValueTypeResult(DataType.URL, {})
    return None


def _check_percentage(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if AppConfig.PERCENTAGE_PATTERN.match(probe.text):
        return ValueTypeResult(DataType.PERCENTAGE, {"value": parse_number(probe.text[:-1])})
    return None


def _check_date(probe: ValueProbe) -> Optional[ValueTypeResult]:
    raw = probe.raw
    if isinstance(raw, datetime):
        if raw.time() != time(0):
            return ValueTypeResult(DataType.DATETIME, {"parsed": raw})
        return ValueTypeResult(DataType.DATE, {"parsed": raw})
    if isinstance(raw, date):
        return ValueTypeResult(DataType.DATE, {"parsed": parse_date(raw)})
    if not isinstance(raw, str):
        return None

    shaped = (
        AppConfig.DATE_DMY_PATTERN.match(probe.text)
        or AppConfig.DATE_YMD_PATTERN.match(probe.text)
        or AppConfig.DATE_INDONESIA_PATTERN.match(probe.text)
    )
    if not shaped and not _has_hint("date", probe.header):
        return None
    parsed = parse_date(probe.text)
    if parsed is None:
        return None
    return ValueTypeResult(DataType.DATE, {"parsed": parsed})


def _check_datetime(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if isinstance(probe.raw, str) and AppConfig.DATETIME_PATTERN.match(probe.text):
        return ValueTypeResult(DataType.DATETIME, {"parsed": parse_date(probe.text)})
    return None


def _check_time(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if isinstance(probe.raw, time):
        return ValueTypeResult(DataType.TIME, {})
    if isinstance(probe.raw, str) and AppConfig.TIME_24H_PATTERN.match(probe.text):
        return ValueTypeResult(DataType.TIME, {})
    return None


def _check_boolean(probe: ValueProbe) -> Optional[ValueTypeResult]:
    if isinstance(probe.raw, bool) or AppConfig.BOOLEAN_PATTERN.match(probe.text):
        return ValueTypeResult(DataType.BOOLEAN, {})
    return None


def _check_number(probe: ValueProbe) -> Optional[ValueTypeResult]:
    value = parse_number(probe.raw)
    if value is None:
        return None
    if isinstance(probe.raw, str) and not AppConfig.NUMBER_TEXT_PATTERN.match(probe.text):
        return None
    if value.is_integer():
        return ValueTypeResult(DataType.INTEGER, {"value": value})
    return ValueTypeResult(DataType.FLOAT, {"value": value})


def _check_string(probe: ValueProbe) -> Optional[ValueTypeResult]:
    return ValueTypeResult(DataType.STRING, {"length": len(probe.text)})


# Order matters: the first rule that matches decides the type.
VALUE_TYPE_RULES: List[ValueTypeRule] = [
    ValueTypeRule("empty", _check_empty),
    ValueTypeRule("nik", _check_nik),
    ValueTypeRule("npwp", _check_npwp),
    ValueTypeRule("phone", _check_phone),
    ValueTypeRule("currency_idr", _check_rupiah),
    ValueTypeRule("currency_usd", _check_dollar),
    ValueTypeRule("email", _check_email),
    ValueTypeRule("url", _check_url),
    ValueTypeRule("percentage", _check_percentage),
    ValueTypeRule("date", _check_date),
    ValueTypeRule("datetime", _check_datetime),
    ValueTypeRule("time", _check_time),
    ValueTypeRule("boolean", _check_boolean),
    ValueTypeRule("number", _check_number),
    ValueTypeRule("string", _check_string),
]


def detect_value_type(value: Any, header_hint: str = "") -> ValueTypeResult:
    """Classify one cell. header_hint is the column name (case-insensitive keyword hints)."""
    probe = ValueProbe(raw=value, text=to_text(value).strip(), header=header_hint or "")
    for rule in VALUE_TYPE_RULES:
        result = rule.check(probe)
        if result is not None:
            return result
    return ValueTypeResult(DataType.UNKNOWN, {})


def detect_column_type(header: str, values: Sequence[Any]) -> ColumnTypeResult:
    """
    Majority vote over non-empty values.

    Ties go to the type seen first. More than two observed types with the
    winner under 70% makes the column MIXED.
    """
    non_empty = [value for value in values if not is_empty(value)]
    if not non_empty:
        return ColumnTypeResult(DataType.EMPTY, 100.0, {}, {})

    distribution: Dict[str, int] = {}
    first_details: Dict[str, Dict[str, Any]] = {}
    for value in non_empty:
        result = detect_value_type(value, header)
        key = result.type.value
        distribution[key] = distribution.get(key, 0) + 1
        first_details.setdefault(key, result.details)

    dominant, dominant_count = None, 0
    for key, count in distribution.items():
        if count > dominant_count:
            dominant, dominant_count = key, count

    confidence = round(dominant_count / len(non_empty) * 100, 2)
    if len(distribution) >= MIXED_MIN_TYPES and confidence < MIXED_MAX_CONFIDENCE:
        return ColumnTypeResult(
            DataType.MIXED, confidence, {"types": list(distribution)}, distribution
        )
    return ColumnTypeResult(DataType(dominant), confidence, first_details[dominant], distribution)


def analyze_column(header: str, values: Sequence[Any]) -> ColumnAnalysis:
    non_empty = [value for value in values if not is_empty(value)]
    detected = detect_column_type(header, values)
    total = len(values)
    unique = {to_text(value).strip().lower() for value in non_empty}

    return ColumnAnalysis(
        header=header,
        detected_type=detected.type,
        confidence=detected.confidence,
        type_details=detected.details,
        distribution=detected.distribution,
        total_values=total,
        non_empty_count=len(non_empty),
        empty_count=total - len(non_empty),
        unique_count=len(unique),
        fill_rate=round(len(non_empty) / total * 100, 2) if total else 0.0,
        sample_values=non_empty[:SAMPLE_SIZE],
        is_numeric=detected.type.is_numeric,
        is_date=detected.type.is_date,
        is_identifier=detected.type.is_identifier,
    )


def analyze_columns(headers: Sequence[str], rows: Sequence[Dict[str, Any]]) -> Dict[str, ColumnAnalysis]:
    """Column analysis for every header, in header order."""
    analysis = {}
    for header in headers:
        analysis[header] = analyze_column(header, [row.get(header) for row in rows])
        logger.debug(
            f"Column '{header}': {analysis[header].detected_type.value} "
            f"({analysis[header].confidence}%)"
        )
    return analysis
