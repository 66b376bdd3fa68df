"""
Quality score: completeness, consistency, validity and uniqueness
"""

from collections import Counter
from typing import Dict, Sequence

from kualitas_shared.config.app_config import AppConfig
from kualitas_shared.models.analysis import ColumnAnalysis, Issue, QualityBreakdown, QualityScore
from kualitas_shared.models.common import VALIDITY_ISSUE_TYPES, DataType, IssueType


def grade_for(score: float):
    """(grade, label) for a 0-100 score"""
    for minimum, grade, label in AppConfig.QUALITY_GRADES:
        if score >= minimum:
            return grade, label
    return "F", "Very Poor"


def calculate_quality_score(
    row_count: int,
    column_analysis: Dict[str, ColumnAnalysis],
    issues: Sequence[Issue],
) -> QualityScore:
    """
    Weighted sub-scores (0.30 / 0.25 / 0.25 / 0.20).

    An empty dimension (no rows or no columns) scores 100.
    """
    column_count = len(column_analysis)
    counts = Counter(issue.type for issue in issues)

    total_cells = row_count * column_count
    filled_cells = sum(analysis.non_empty_count for analysis in column_analysis.values())
    completeness = filled_cells / total_cells * 100 if total_cells else 100.0

    consistent = sum(
        1 for analysis in column_analysis.values() if analysis.detected_type != DataType.MIXED
    )
    consistency = consistent / column_count * 100 if column_count else 100.0

    if row_count:
        invalid = sum(counts[issue_type] for issue_type in VALIDITY_ISSUE_TYPES)
        validity = max(0.0, 100 - invalid / row_count * 100)
        uniqueness = max(0.0, (row_count - counts[IssueType.DUPLICATE]) / row_count * 100)
    else:
        validity = uniqueness = 100.0

    weights = AppConfig.QUALITY_WEIGHTS
    overall = (
        completeness * weights["completeness"]
        + consistency * weights["consistency"]
        + validity * weights["validity"]
        + uniqueness * weights["uniqueness"]
    )
    overall = round(min(100.0, max(0.0, overall)), 2)
    grade, label = grade_for(overall)

    return QualityScore(
        overall=overall,
        grade=grade,
        grade_label=label,
        breakdown=QualityBreakdown(
            completeness=round(completeness, 2),
            consistency=round(consistency, 2),
            validity=round(validity, 2),
            uniqueness=round(uniqueness, 2),
        ),
    )
