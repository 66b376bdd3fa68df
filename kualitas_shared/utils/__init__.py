"""
Utility helpers for KUALITAS
"""

from .app_logger import configure_logging, get_logger
from .parsing import (
    calculate_ppn,
    calculate_with_ppn,
    format_date,
    format_date_indonesia,
    format_datetime,
    format_dollar,
    format_number,
    format_percentage,
    format_rupiah,
    is_empty,
    normalize_string,
    parse_date,
    parse_number,
    to_title_case,
)
from .similarity import levenshtein_distance, string_similarity
from .stats import calculate_stats, detect_outliers

__all__ = [
    "calculate_ppn",
    "calculate_stats",
    "calculate_with_ppn",
    "configure_logging",
    "detect_outliers",
    "format_date",
    "format_date_indonesia",
    "format_datetime",
    "format_dollar",
    "format_number",
    "format_percentage",
    "format_rupiah",
    "get_logger",
    "is_empty",
    "levenshtein_distance",
    "normalize_string",
    "parse_date",
    "parse_number",
    "string_similarity",
    "to_title_case",
]
