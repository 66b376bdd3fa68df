"""
🔥 THINK ULTRA! Data Analyzer
Column typing → issue detection → quality score → suggestions
"""

import time
from collections import Counter
from typing import Any, Mapping, Optional, Union

from kualitas_shared.config.app_config import AppConfig
from kualitas_shared.exceptions import EmptyTableError, InvalidTableError
from kualitas_shared.models.analysis import (
    AnalysisResult,
    AnalysisSummary,
    AnalyzeOptions,
    IssueReport,
    utc_now,
)
from kualitas_shared.models.table import Table
from kualitas_shared.utils.app_logger import get_logger

from .insights import deep_analysis, generate_statistics
from .issue_detector import IssueDetector
from .quality_scorer import calculate_quality_score
from .suggestions import generate_suggestions
from .type_detection import analyze_columns

logger = get_logger(__name__)


def coerce_table(table: Any) -> Table:
    """Accept a Table, a {"headers", "rows"} mapping or a pandas DataFrame."""
    if isinstance(table, Table):
        return table
    if table is None:
        raise EmptyTableError("No table given")
    if isinstance(table, Mapping):
        try:
            return Table(**table)
        except (TypeError, ValueError) as e:
            raise InvalidTableError(str(e)) from e
    if hasattr(table, "columns") and hasattr(table, "itertuples"):
        return Table.from_dataframe(table)
    raise InvalidTableError(f"Unsupported table type: {type(table).__name__}")


class DataAnalyzer:
    """
    Runs the full analysis over one table.

    Stateless apart from options; safe to reuse across calls and threads.
    """

    def __init__(self, options: Optional[AnalyzeOptions] = None):
        self.options = options or AnalyzeOptions.from_settings()
        self.issue_detector = IssueDetector(self.options)

    def analyze(self, table: Union[Table, Mapping[str, Any]]) -> AnalysisResult:
        started = time.perf_counter()
        table = coerce_table(table)
        if table.is_empty:
            raise EmptyTableError("Sheet has no rows to analyze")

        headers = list(table.headers)
        rows = table.rows
        if len(rows) > self.options.max_rows_analyze:
            logger.warning(
                f"Analyzing the first {self.options.max_rows_analyze} of {len(rows)} rows"
            )
            rows = rows[: self.options.max_rows_analyze]

        logger.info(f"Analyzing {len(rows)} rows x {len(headers)} columns")

        column_analysis = analyze_columns(headers, rows)
        issues = self.issue_detector.detect(headers, rows, column_analysis)
        quality_score = calculate_quality_score(len(rows), column_analysis, issues)
        statistics = generate_statistics(headers, rows, column_analysis)
        suggestions = generate_suggestions(issues, quality_score)
        insights = (
            deep_analysis(headers, rows, column_analysis) if self.options.deep_analysis else None
        )

        cap = self.options.max_issue_details
        report = IssueReport(
            total=len(issues),
            by_type=dict(Counter(issue.type.value for issue in issues)),
            by_severity=dict(Counter(issue.severity.value for issue in issues)),
            details=issues[:cap],
            truncated=len(issues) > cap,
        )

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"Analysis done in {elapsed_ms}ms: {len(issues)} issues, "
            f"score {quality_score.overall} ({quality_score.grade})"
        )

        return AnalysisResult(
            summary=AnalysisSummary(
                total_rows=table.row_count,
                analyzed_rows=len(rows),
                total_columns=len(headers),
                headers=headers,
                analysis_time_ms=elapsed_ms,
            ),
            column_analysis=column_analysis,
            issues=report,
            quality_score=quality_score,
            statistics=statistics,
            suggestions=suggestions,
            deep_insights=insights,
            metadata={
                "analyzed_at": utc_now().isoformat(),
                "analyzer_version": AppConfig.ANALYZER_VERSION,
                "options": self.options.model_dump(),
            },
            all_issues=issues,
        )


def analyze(table: Union[Table, Mapping[str, Any]], options: Optional[AnalyzeOptions] = None,
            **overrides: Any) -> AnalysisResult:
    """Shortcut: DataAnalyzer(options).analyze(table); keyword overrides patch the options."""
    if overrides:
        base = options.model_dump() if options else {}
        base.update(overrides)
        options = AnalyzeOptions.from_settings(**base)
    return DataAnalyzer(options).analyze(table)
