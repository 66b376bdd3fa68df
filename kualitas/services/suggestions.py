"""
Suggestion generator: turns issue counts into a prioritized action list
"""

from collections import Counter
from typing import List, NamedTuple, Optional, Sequence

from kualitas_shared.models.analysis import Issue, QualityScore, Suggestion
from kualitas_shared.models.common import IssueType

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
FILL_MISSING_COMPLETENESS = 80


class SuggestionRule(NamedTuple):
    issue_type: IssueType
    action: str
    priority: str
    auto_fixable: bool
    message: str
    impact: str


# Message templates take {count}
SUGGESTION_RULES: List[SuggestionRule] = [
    SuggestionRule(
        IssueType.DUPLICATE, "remove_duplicates", "high", True,
        "Remove {count} duplicate rows", "Prevents double counting in totals and reports",
    ),
    SuggestionRule(
        IssueType.EMPTY_ROW, "remove_empty_rows", "medium", True,
        "Remove {count} empty rows", "Cleaner dataset",
    ),
    SuggestionRule(
        IssueType.WHITESPACE, "trim_whitespace", "low", True,
        "Trim whitespace in {count} cells", "Consistent lookups and grouping",
    ),
    SuggestionRule(
        IssueType.PPN_ERROR, "fix_ppn", "high", True,
        "Recalculate PPN on {count} rows", "Correct tax reporting",
    ),
    SuggestionRule(
        IssueType.CALCULATION_ERROR, "fix_calculations", "high", True,
        "Fix {count} calculation errors", "Accurate subtotals and totals",
    ),
    SuggestionRule(
        IssueType.FORMAT_INCONSISTENT, "standardize_format", "medium", False,
        "Standardize formats in {count} columns", "Consistent data types per column",
    ),
    SuggestionRule(
        IssueType.INVALID_PHONE, "standardize_phones", "medium", True,
        "Review {count} phone numbers", "Reachable contact numbers in +62 format",
    ),
    SuggestionRule(
        IssueType.TYPO, "fix_typos", "low", True,
        "Fix {count} possible typos", "Consistent category names",
    ),
]


def generate_suggestions(
    issues: Sequence[Issue], quality_score: Optional[QualityScore] = None
) -> List[Suggestion]:
    """Suggestions ordered high, medium, low (stable within a priority)."""
    counts = Counter(issue.type for issue in issues)
    suggestions = []

    for rule in SUGGESTION_RULES:
        count = counts.get(rule.issue_type, 0)
        if not count:
            continue
        suggestions.append(
            Suggestion(
                action=rule.action,
                priority=rule.priority,
                message=rule.message.format(count=count),
                impact=rule.impact,
                auto_fixable=rule.auto_fixable,
                affected_count=count,
            )
        )

    if quality_score is not None:
        completeness = quality_score.breakdown.completeness
        if completeness < FILL_MISSING_COMPLETENESS:
            suggestions.append(
                Suggestion(
                    action="fill_missing",
                    priority="medium",
                    message=f"Data is only {completeness:.1f}% complete; fill in missing values",
                    impact="More reliable analysis",
                    auto_fixable=False,
                )
            )

    return sorted(suggestions, key=lambda suggestion: PRIORITY_ORDER[suggestion.priority])
