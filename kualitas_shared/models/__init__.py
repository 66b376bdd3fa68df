"""
Data models for KUALITAS
"""

from .analysis import (
    AnalysisResult,
    AnalysisSummary,
    AnalyzeOptions,
    ColumnAnalysis,
    ColumnStatistics,
    DeepInsights,
    InsightPattern,
    Issue,
    IssueReport,
    QualityBreakdown,
    QualityScore,
    Suggestion,
)
from .cleaning import (
    CLEANING_PRESETS,
    CleaningLogEntry,
    CleaningResult,
    CleaningSummary,
    CleanOptions,
)
from .common import ISSUE_CATALOG, DataType, IssueDefinition, IssueType, Severity
from .table import CellKind, CellValue, Table, cell_kind

__all__ = [
    "AnalysisResult",
    "AnalysisSummary",
    "AnalyzeOptions",
    "CLEANING_PRESETS",
    "CellKind",
    "CellValue",
    "CleanOptions",
    "CleaningLogEntry",
    "CleaningResult",
    "CleaningSummary",
    "ColumnAnalysis",
    "ColumnStatistics",
    "DataType",
    "DeepInsights",
    "ISSUE_CATALOG",
    "InsightPattern",
    "Issue",
    "IssueDefinition",
    "IssueReport",
    "IssueType",
    "QualityBreakdown",
    "QualityScore",
    "Severity",
    "Suggestion",
    "Table",
    "cell_kind",
]
