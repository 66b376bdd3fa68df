"""
Application Configuration
Indonesian data conventions used by the analysis and cleaning engine
"""

import re
from typing import Dict, Pattern


class AppConfig:
    """
    KUALITAS 도메인 상수 중앙 관리 클래스

    Regex patterns, province codes, month names, tax rates and quality
    thresholds live here so every service reads the same values.
    """

    ANALYZER_VERSION = "2.0.0"

    # ======================
    # Patterns
    # ======================
    NIK_PATTERN: Pattern = re.compile(r"^[1-9]\d{15}$")
    NPWP_PATTERN: Pattern = re.compile(r"^\d{2}\.\d{3}\.\d{3}\.\d-\d{3}\.\d{3}$")
    NPWP_NEW_PATTERN: Pattern = re.compile(r"^\d{16}$")
    PHONE_ID_PATTERN: Pattern = re.compile(r"^(\+62|62|0)8[1-9][0-9]{7,11}$")
    EMAIL_PATTERN: Pattern = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
    URL_PATTERN: Pattern = re.compile(r"^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)/?$")
    CURRENCY_IDR_PATTERN: Pattern = re.compile(r"^Rp\.?\s?[\d.,]+$", re.IGNORECASE)
    CURRENCY_USD_PATTERN: Pattern = re.compile(r"^\$[\d.,]+$")
    PERCENTAGE_PATTERN: Pattern = re.compile(r"^-?\d+([.,]\d+)?%$")
    DATE_DMY_PATTERN: Pattern = re.compile(
        r"^(0?[1-9]|[12][0-9]|3[01])[/-](0?[1-9]|1[012])[/-](\d{4}|\d{2})$"
    )
    DATE_YMD_PATTERN: Pattern = re.compile(
        r"^(\d{4}|\d{2})[/-](0?[1-9]|1[012])[/-](0?[1-9]|[12][0-9]|3[01])$"
    )
    DATE_INDONESIA_PATTERN: Pattern = re.compile(
        r"^\d{1,2}\s+(januari|februari|maret|april|mei|juni|juli|agustus|september"
        r"|oktober|november|desember)\s+\d{4}$",
        re.IGNORECASE,
    )
    TIME_24H_PATTERN: Pattern = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9](:[0-5][0-9])?$")
    DATETIME_PATTERN: Pattern = re.compile(r"^\d{4}-\d{2}-\d{2}[T\s]\d{2}:\d{2}(:\d{2})?")
    BOOLEAN_PATTERN: Pattern = re.compile(
        r"^(true|false|yes|no|ya|tidak|1|0|aktif|nonaktif)$", re.IGNORECASE
    )
    NUMBER_TEXT_PATTERN: Pattern = re.compile(r"^[\d.,\-+\s]+$")

    # ======================
    # Indonesian reference data
    # ======================
    PROVINCE_CODES: Dict[str, str] = {
        "11": "Aceh",
        "12": "Sumatera Utara",
        "13": "Sumatera Barat",
        "14": "Riau",
        "15": "Jambi",
        "16": "Sumatera Selatan",
        "17": "Bengkulu",
        "18": "Lampung",
        "19": "Kepulauan Bangka Belitung",
        "21": "Kepulauan Riau",
        "31": "DKI Jakarta",
        "32": "Jawa Barat",
        "33": "Jawa Tengah",
        "34": "DI Yogyakarta",
        "35": "Jawa Timur",
        "36": "Banten",
        "51": "Bali",
        "52": "Nusa Tenggara Barat",
        "53": "Nusa Tenggara Timur",
        "61": "Kalimantan Barat",
        "62": "Kalimantan Tengah",
        "63": "Kalimantan Selatan",
        "64": "Kalimantan Timur",
        "65": "Kalimantan Utara",
        "71": "Sulawesi Utara",
        "72": "Sulawesi Tengah",
        "73": "Sulawesi Selatan",
        "74": "Sulawesi Tenggara",
        "75": "Gorontalo",
        "76": "Sulawesi Barat",
        "81": "Maluku",
        "82": "Maluku Utara",
        "91": "Papua Barat",
        "92": "Papua Barat Daya",
        "93": "Papua Selatan",
        "94": "Papua",
        "95": "Papua Tengah",
        "96": "Papua Pegunungan",
    }

    # 월 이름 → 월 번호 (full names and common abbreviations)
    INDONESIAN_MONTHS: Dict[str, int] = {
        "januari": 1, "jan": 1,
        "februari": 2, "feb": 2,
        "maret": 3, "mar": 3,
        "april": 4, "apr": 4,
        "mei": 5,
        "juni": 6, "jun": 6,
        "juli": 7, "jul": 7,
        "agustus": 8, "agu": 8, "ags": 8,
        "september": 9, "sep": 9, "sept": 9,
        "oktober": 10, "okt": 10,
        "november": 11, "nov": 11,
        "desember": 12, "des": 12,
    }

    ENGLISH_MONTHS: Dict[str, int] = {
        "january": 1, "february": 2, "march": 3, "may": 5, "june": 6, "july": 7,
        "august": 8, "aug": 8, "october": 10, "oct": 10, "december": 12, "dec": 12,
    }

    MONTH_NAMES_ID = (
        "Januari", "Februari", "Maret", "April", "Mei", "Juni",
        "Juli", "Agustus", "September", "Oktober", "November", "Desember",
    )
    MONTH_ABBREVIATIONS_ID = (
        "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
        "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
    )

    # ======================
    # Tax & quality
    # ======================
    TAX_RATES: Dict[str, float] = {
        "PPN": 0.11,
        "PPN_OLD": 0.10,
        "PPH21": 0.05,
        "PPH23": 0.02,
    }

    QUALITY_WEIGHTS: Dict[str, float] = {
        "completeness": 0.30,
        "consistency": 0.25,
        "validity": 0.25,
        "uniqueness": 0.20,
    }

    # (minimum score, grade, label), highest first
    QUALITY_GRADES = (
        (90, "A", "Excellent"),
        (75, "B", "Good"),
        (50, "C", "Fair"),
        (25, "D", "Poor"),
        (0, "F", "Very Poor"),
    )

    @staticmethod
    def get_province_name(code: str) -> str:
        """NIK/NPWP 앞 두 자리에 해당하는 주 이름"""
        return AppConfig.PROVINCE_CODES.get(code, "")
