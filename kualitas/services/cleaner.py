"""
🔥 THINK ULTRA! Data Cleaner
Fixed-order transform pipeline over a copy of the table
"""

import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from kualitas_shared.exceptions import EmptyTableError
from kualitas_shared.models.analysis import AnalyzeOptions, ColumnAnalysis, Issue
from kualitas_shared.models.cleaning import CleaningLogEntry, CleaningResult, CleaningSummary, CleanOptions
from kualitas_shared.models.common import DataType
from kualitas_shared.models.table import Table
from kualitas_shared.utils.app_logger import get_logger
from kualitas_shared.utils.parsing import (
    as_number,
    format_date,
    is_empty,
    normalize_string,
    parse_date,
    parse_number,
    round_half_up,
    to_text,
    to_title_case,
)
from kualitas_shared.validators import format_phone_id

from .analyzer import coerce_table
from .column_roles import base_amount, resolve_column_roles
from .issue_detector import CALCULATION_TOLERANCE, PPN_MIN_TOLERANCE, IssueDetector
from .type_detection import analyze_columns

logger = get_logger(__name__)

Row = Dict[str, Any]

_CASE_FUNCTIONS: Dict[str, Callable[[Any], str]] = {
    "title": to_title_case,
    "upper": lambda value: to_text(value).upper(),
    "lower": lambda value: to_text(value).lower(),
}


class _WorkingSet:
    """Row copies plus each row's 1-based position in the input table"""

    def __init__(self, table: Table):
        self.headers: List[str] = list(table.headers)
        self.rows: List[Row] = table.copy_rows()
        self.positions: List[int] = list(range(1, len(self.rows) + 1))

    def keep(self, predicate: Callable[[Row], bool]) -> int:
        kept = [(row, position) for row, position in zip(self.rows, self.positions) if predicate(row)]
        removed = len(self.rows) - len(kept)
        self.rows = [row for row, _ in kept]
        self.positions = [position for _, position in kept]
        return removed

    def map_cells(self, headers: List[str], transform: Callable[[Any], Any]) -> int:
        """Apply transform to each non-empty cell; returns the number of changed cells."""
        changed = 0
        for row in self.rows:
            for header in headers:
                value = row.get(header)
                if is_empty(value):
                    continue
                new_value = transform(value)
                if new_value is not None and new_value != value:
                    row[header] = new_value
                    changed += 1
        return changed


class DataCleaner:
    """
    Applies the enabled stages in a fixed order:

    1. remove_empty_rows     5. standardize_dates
    2. remove_duplicates     6. standardize_phones
    3. trim_whitespace       7. fix_calculations
    4. normalize_case        8. fix_typos

    Every stage that changed something leaves one log entry.
    """

    def __init__(self, options: Optional[CleanOptions] = None):
        self.options = options or CleanOptions.from_settings()

    def clean(self, table: Union[Table, Mapping[str, Any]]) -> CleaningResult:
        started = time.perf_counter()
        table = coerce_table(table)
        if table.is_empty:
            raise EmptyTableError("Sheet has no rows to clean")

        work = _WorkingSet(table)
        column_analysis = analyze_columns(work.headers, table.rows)
        log: List[CleaningLogEntry] = []

        logger.info(f"Cleaning {table.row_count} rows x {len(work.headers)} columns")

        stages: List[Tuple[str, bool, Callable[[], Tuple[int, str]]]] = [
            ("remove_empty_rows", self.options.remove_empty_rows,
             lambda: self._remove_empty_rows(work)),
            ("remove_duplicates", self.options.remove_duplicates,
             lambda: self._remove_duplicates(work)),
            ("trim_whitespace", self.options.trim_whitespace,
             lambda: self._trim_whitespace(work)),
            ("normalize_case", self.options.normalize_case,
             lambda: self._normalize_case(work, column_analysis)),
            ("standardize_dates", self.options.standardize_dates,
             lambda: self._standardize_dates(work, column_analysis)),
            ("standardize_phones", self.options.standardize_phones,
             lambda: self._standardize_phones(work, column_analysis)),
            ("fix_calculations", self.options.fix_calculations,
             lambda: self._fix_calculations(work)),
            ("fix_typos", self.options.fix_typos,
             lambda: self._fix_typos(work, table, column_analysis)),
        ]

        for operation, enabled, stage in stages:
            if not enabled:
                continue
            affected, message = stage()
            logger.debug(f"{operation}: {affected} affected")
            if affected > 0:
                log.append(
                    CleaningLogEntry(operation=operation, message=message, affected_count=affected)
                )

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"Cleaning done in {elapsed_ms}ms: {table.row_count} -> {len(work.rows)} rows, "
            f"{len(log)} operations"
        )

        return CleaningResult(
            data=work.rows,
            headers=work.headers,
            summary=CleaningSummary(
                original_rows=table.row_count,
                cleaned_rows=len(work.rows),
                rows_removed=table.row_count - len(work.rows),
                cleaning_time_ms=elapsed_ms,
                operations_performed=len(log),
            ),
            log=log,
            metadata={
                "options": self.options.model_dump(),
                "column_types": {
                    header: analysis.detected_type.value
                    for header, analysis in column_analysis.items()
                },
                "source_rows": list(work.positions),
            },
        )

    # ======================
    # Stages
    # ======================

    @staticmethod
    def _remove_empty_rows(work: _WorkingSet) -> Tuple[int, str]:
        removed = work.keep(lambda row: not all(is_empty(row.get(h)) for h in work.headers))
        return removed, f"Removed {removed} empty rows"

    @staticmethod
    def _remove_duplicates(work: _WorkingSet) -> Tuple[int, str]:
        seen = set()

        def first_occurrence(row: Row) -> bool:
            signature = "|".join(to_text(row.get(h)).strip().lower() for h in work.headers)
            if signature in seen:
                return False
            seen.add(signature)
            return True

        removed = work.keep(first_occurrence)
        return removed, f"Removed {removed} duplicate rows"

    @staticmethod
    def _trim_whitespace(work: _WorkingSet) -> Tuple[int, str]:
        changed = work.map_cells(
            work.headers,
            lambda value: normalize_string(value) if isinstance(value, str) else value,
        )
        return changed, f"Trimmed whitespace in {changed} cells"

    def _normalize_case(
        self, work: _WorkingSet, column_analysis: Dict[str, ColumnAnalysis]
    ) -> Tuple[int, str]:
        columns = _columns_of(column_analysis, {DataType.STRING})
        convert = _CASE_FUNCTIONS[self.options.case_type]
        changed = work.map_cells(
            columns, lambda value: convert(value) if isinstance(value, str) else value
        )
        return changed, f"Converted {changed} cells to {self.options.case_type} case"

    def _standardize_dates(
        self, work: _WorkingSet, column_analysis: Dict[str, ColumnAnalysis]
    ) -> Tuple[int, str]:
        columns = _columns_of(column_analysis, DataType.date_types())
        pattern = self.options.date_format

        def reformat(value: Any) -> Any:
            parsed = parse_date(value)
            if parsed is None:
                return value
            formatted = format_date(parsed, pattern)
            return value if formatted == to_text(value) else formatted

        changed = work.map_cells(columns, reformat)
        return changed, f"Standardized {changed} dates to {pattern}"

    def _standardize_phones(
        self, work: _WorkingSet, column_analysis: Dict[str, ColumnAnalysis]
    ) -> Tuple[int, str]:
        columns = _columns_of(column_analysis, {DataType.PHONE})
        phone_format = self.options.phone_format

        def reformat(value: Any) -> Any:
            formatted = format_phone_id(value, phone_format)
            if formatted is None or formatted == to_text(value):
                return value
            return formatted

        changed = work.map_cells(columns, reformat)
        return changed, f"Standardized {changed} phone numbers to {phone_format} format"

    def _fix_calculations(self, work: _WorkingSet) -> Tuple[int, str]:
        """Recompute subtotal, PPN and total from qty and price."""
        roles = resolve_column_roles(work.headers)
        rate = self.options.tax_rate
        changed = 0

        for row in work.rows:
            if roles.qty and roles.price and roles.subtotal:
                qty = parse_number(row.get(roles.qty))
                price = parse_number(row.get(roles.price))
                if qty is not None and price is not None:
                    expected = qty * price
                    current = parse_number(row.get(roles.subtotal))
                    if current is None or abs(expected - current) > CALCULATION_TOLERANCE:
                        row[roles.subtotal] = as_number(expected)
                        changed += 1

            if roles.tax and (roles.subtotal or roles.total):
                base = base_amount(row, roles)
                if base is not None and base > 0:
                    expected_tax = round_half_up(base * rate)
                    current = parse_number(row.get(roles.tax))
                    if current is None or abs(expected_tax - current) > PPN_MIN_TOLERANCE:
                        row[roles.tax] = expected_tax
                        changed += 1

            if roles.total and (roles.subtotal or roles.price):
                base = base_amount(row, roles)
                if base is not None:
                    tax = parse_number(row.get(roles.tax)) if roles.tax else None
                    expected_total = base + (tax or 0)
                    current = parse_number(row.get(roles.total))
                    if current is None or abs(expected_total - current) > CALCULATION_TOLERANCE:
                        row[roles.total] = as_number(expected_total)
                        changed += 1

        return changed, f"Fixed {changed} calculated cells (PPN {rate * 100:g}%)"

    def _fix_typos(
        self, work: _WorkingSet, table: Table, column_analysis: Dict[str, ColumnAnalysis]
    ) -> Tuple[int, str]:
        detector = IssueDetector(
            AnalyzeOptions.from_settings(similarity_threshold=self.options.similarity_threshold)
        )
        issues: List[Issue] = detector.detect_typos(work.headers, table.rows, column_analysis)
        corrections = {(issue.row, issue.column): issue.suggestion for issue in issues}

        changed = 0
        for row, position in zip(work.rows, work.positions):
            for header in work.headers:
                suggestion = corrections.get((position, header))
                if suggestion is not None and row.get(header) != suggestion:
                    row[header] = suggestion
                    changed += 1
        return changed, f"Fixed {changed} typos"


def _columns_of(column_analysis: Dict[str, ColumnAnalysis], types) -> List[str]:
    return [header for header, analysis in column_analysis.items() if analysis.detected_type in types]


def clean(table: Union[Table, Mapping[str, Any]], options: Optional[CleanOptions] = None,
          preset: Optional[str] = None, **overrides: Any) -> CleaningResult:
    """Shortcut: DataCleaner(options).clean(table); a preset name builds the options."""
    if preset is not None:
        options = CleanOptions.preset(preset, **overrides)
    elif overrides:
        base = options.model_dump() if options else {}
        base.update(overrides)
        options = CleanOptions.from_settings(**base)
    return DataCleaner(options).clean(table)
