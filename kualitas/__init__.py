"""
KUALITAS: data-quality analysis and cleaning for Indonesian business spreadsheets
"""

from kualitas_shared.models import AnalyzeOptions, CleanOptions, Table

from .services import AnalysisResultStore, DataAnalyzer, DataCleaner, analyze, clean

__version__ = "2.0.0"

__all__ = [
    "AnalysisResultStore",
    "AnalyzeOptions",
    "CleanOptions",
    "DataAnalyzer",
    "DataCleaner",
    "Table",
    "analyze",
    "clean",
]
