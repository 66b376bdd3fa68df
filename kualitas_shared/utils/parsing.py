"""
Locale-aware parsing and formatting helpers (Indonesian conventions)

Per-value helpers never raise: unparseable input yields None
(parsers) or "-" (formatters).
"""

import math
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from kualitas_shared.config.app_config import AppConfig

_CURRENCY_PREFIX = re.compile(r"^\s*(rp\.?|idr|usd|eur|\$|€)\s*", re.IGNORECASE)
_ID_GROUPED = re.compile(r"^[+-]?\d{1,3}(\.\d{3})*(,\d+)?$")
_US_GROUPED = re.compile(r"^[+-]?\d{1,3}(,\d{3})*(\.\d+)?$")
_PLAIN_FLOAT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_COMMA_DECIMAL = re.compile(r"^[+-]?\d+,\d+$")
_WHITESPACE_RUN = re.compile(r"\s+")
_WORD_START = re.compile(r"(^|\s)(\S)")
_TEXT_DATE = re.compile(r"^(\d{1,2})\s+([a-z]+)\.?\s+(\d{4})$", re.IGNORECASE)

# strptime formats tried in order
DATE_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d/%m/%y",
    "%d-%m-%y",
)

_DATE_TOKENS = re.compile(r"yyyy|yy|MMMM|MMM|MM|M|dd|d|HH|mm|ss")


def is_empty(value: Any) -> bool:
    """None, blank strings, NaN and empty containers count as empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def to_text(value: Any) -> str:
    """Render a cell the way it reads in a spreadsheet."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    return str(value)


def normalize_string(value: Any) -> str:
    """Trim and collapse interior whitespace runs to a single space."""
    if value is None:
        return ""
    return _WHITESPACE_RUN.sub(" ", to_text(value).strip())


def to_title_case(value: Any) -> str:
    if value is None:
        return ""
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), to_text(value).lower())


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def as_number(value: float):
    """int when whole, float otherwise."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def parse_number(raw: Any, allow_percent: bool = False) -> Optional[float]:
    """
    Parse a number written with Indonesian or US grouping.

    "1.234,56" -> 1234.56, "1,234.56" -> 1234.56, "Rp 1.500.000" -> 1500000.0
    With allow_percent a trailing "%" is dropped: "12,5%" -> 12.5
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
        return number if math.isfinite(number) else None
    if not isinstance(raw, str):
        return None

    text = _CURRENCY_PREFIX.sub("", raw.strip()).strip()
    if allow_percent and text.endswith("%"):
        text = text[:-1].rstrip()
    if not text:
        return None

    if _ID_GROUPED.match(text):
        return float(text.replace(".", "").replace(",", "."))
    if _US_GROUPED.match(text):
        return float(text.replace(",", ""))
    if _COMMA_DECIMAL.match(text):
        return float(text.replace(",", "."))
    if _PLAIN_FLOAT.match(text):
        number = float(text)
        return number if math.isfinite(number) else None
    return None


def _parse_text_date(text: str) -> Optional[datetime]:
    match = _TEXT_DATE.match(text)
    if not match:
        return None
    day, month_name, year = match.groups()
    month_key = month_name.lower()
    month = AppConfig.INDONESIAN_MONTHS.get(month_key) or AppConfig.ENGLISH_MONTHS.get(month_key)
    if month is None:
        return None
    try:
        return datetime(int(year), month, int(day))
    except ValueError:
        return None


def parse_date(raw: Any) -> Optional[datetime]:
    """
    Parse a date from a native value or text.

    Formats are tried in order: yyyy-MM-dd, dd/MM/yyyy, dd-MM-yyyy, MM/dd/yyyy,
    yyyy/MM/dd, the two-digit-year variants, "15 Januari 2024", then ISO.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    parsed = _parse_text_date(text)
    if parsed is not None:
        return parsed

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


# ======================
# Formatting (id-ID)
# ======================

def _group(value: float, decimals: int, thousands: str, decimal_mark: str) -> str:
    rendered = f"{abs(value):,.{decimals}f}"
    rendered = rendered.replace(",", "\0").replace(".", decimal_mark).replace("\0", thousands)
    return f"-{rendered}" if value < 0 else rendered


def format_number(value: Any, decimals: int = 0) -> str:
    """1234567.891 -> "1.234.568" (decimals=0) or "1.234.567,89" (decimals=2)"""
    number = parse_number(value)
    if number is None:
        return "-"
    return _group(number, decimals, ".", ",")


def format_rupiah(value: Any, with_symbol: bool = True) -> str:
    number = parse_number(value)
    if number is None:
        return "-"
    rendered = _group(round_half_up(number), 0, ".", ",")
    return f"Rp {rendered}" if with_symbol else rendered


def format_dollar(value: Any) -> str:
    number = parse_number(value)
    if number is None:
        return "-"
    rendered = _group(number, 2, ",", ".")
    if rendered.startswith("-"):
        return f"-${rendered[1:]}"
    return f"${rendered}"


def format_percentage(value: Any, decimals: int = 1) -> str:
    number = parse_number(value)
    if number is None:
        return "-"
    return f"{_group(number, decimals, '.', ',')}%"


def _render_token(token: str, value: datetime) -> str:
    if token == "yyyy":
        return f"{value.year:04d}"
    if token == "yy":
        return f"{value.year % 100:02d}"
    if token == "MMMM":
        return AppConfig.MONTH_NAMES_ID[value.month - 1]
    if token == "MMM":
        return AppConfig.MONTH_ABBREVIATIONS_ID[value.month - 1]
    if token == "MM":
        return f"{value.month:02d}"
    if token == "M":
        return str(value.month)
    if token == "dd":
        return f"{value.day:02d}"
    if token == "d":
        return str(value.day)
    if token == "HH":
        return f"{value.hour:02d}"
    if token == "mm":
        return f"{value.minute:02d}"
    return f"{value.second:02d}"


def format_date(value: Any, pattern: str = "dd/MM/yyyy") -> str:
    """
    Format a date with date-fns style tokens (yyyy, MM, dd, MMMM, HH, mm, ss ...).
    Month names are Indonesian.
    """
    parsed = parse_date(value)
    if parsed is None:
        return "-"
    return _DATE_TOKENS.sub(lambda m: _render_token(m.group(0), parsed), pattern)


def format_date_indonesia(value: Any) -> str:
    """2024-01-15 -> "15 Januari 2024" """
    return format_date(value, "d MMMM yyyy")


def format_datetime(value: Any) -> str:
    return format_date(value, "dd/MM/yyyy HH:mm")


def calculate_ppn(value: Any, rate: float = AppConfig.TAX_RATES["PPN"]) -> Optional[int]:
    number = parse_number(value)
    if number is None:
        return None
    return round_half_up(number * rate)


def calculate_with_ppn(value: Any, rate: float = AppConfig.TAX_RATES["PPN"]) -> Optional[float]:
    number = parse_number(value)
    if number is None:
        return None
    return as_number(number + round_half_up(number * rate))
