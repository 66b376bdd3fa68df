"""
KUALITAS engine services
"""

from .analysis_store import AnalysisResultStore
from .analyzer import DataAnalyzer, analyze
from .cleaner import DataCleaner, clean
from .column_roles import ColumnRoles, resolve_column_roles
from .issue_detector import IssueDetector
from .quality_scorer import calculate_quality_score
from .suggestions import generate_suggestions
from .type_detection import analyze_column, analyze_columns, detect_column_type, detect_value_type

__all__ = [
    "AnalysisResultStore",
    "ColumnRoles",
    "DataAnalyzer",
    "DataCleaner",
    "IssueDetector",
    "analyze",
    "analyze_column",
    "analyze_columns",
    "calculate_quality_score",
    "clean",
    "detect_column_type",
    "detect_value_type",
    "generate_suggestions",
    "resolve_column_roles",
]
