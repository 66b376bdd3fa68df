"""
Numeric column statistics and pattern insights
"""

from typing import Any, Dict, List, Sequence

from kualitas_shared.models.analysis import ColumnAnalysis, ColumnStatistics, DeepInsights, InsightPattern
from kualitas_shared.models.common import DataType
from kualitas_shared.utils.parsing import format_rupiah, parse_number
from kualitas_shared.utils.stats import calculate_stats

Row = Dict[str, Any]


def _numbers(header: str, rows: Sequence[Row]) -> List[float]:
    numbers = []
    for row in rows:
        number = parse_number(row.get(header), allow_percent=True)
        if number is not None:
            numbers.append(number)
    return numbers


def generate_statistics(
    headers: Sequence[str], rows: Sequence[Row], column_analysis: Dict[str, ColumnAnalysis]
) -> Dict[str, ColumnStatistics]:
    statistics = {}
    for header in headers:
        analysis = column_analysis[header]
        if not analysis.is_numeric:
            continue
        numbers = _numbers(header, rows)
        if not numbers:
            continue
        statistics[header] = ColumnStatistics(type=analysis.detected_type, **calculate_stats(numbers))
    return statistics


def deep_analysis(
    headers: Sequence[str], rows: Sequence[Row], column_analysis: Dict[str, ColumnAnalysis]
) -> DeepInsights:
    """Spot date columns, financial totals and identifier columns."""
    insights = DeepInsights()

    date_columns = [h for h in headers if column_analysis[h].is_date]
    if date_columns:
        insights.patterns.append(
            InsightPattern(
                type="date_column",
                message=f"Found {len(date_columns)} date column(s): {', '.join(date_columns)}",
                columns=date_columns,
            )
        )
        insights.recommendations.append("Data can be analyzed as a time series")

    currency_columns = [
        h for h in headers if column_analysis[h].detected_type == DataType.CURRENCY
    ]
    if currency_columns:
        totals = {h: sum(_numbers(h, rows)) for h in currency_columns}
        insights.patterns.append(
            InsightPattern(
                type="financial_data",
                message=f"Found {len(currency_columns)} currency column(s)",
                columns=currency_columns,
                details={
                    "totals": totals,
                    "formatted_totals": {h: format_rupiah(total) for h, total in totals.items()},
                },
            )
        )
        insights.recommendations.append("Verify totals and PPN before reporting")

    identifier_columns = [h for h in headers if column_analysis[h].is_identifier]
    if identifier_columns:
        insights.patterns.append(
            InsightPattern(
                type="identifier_columns",
                message=f"Found identifier column(s): {', '.join(identifier_columns)}",
                columns=identifier_columns,
                details={h: column_analysis[h].detected_type.value for h in identifier_columns},
            )
        )
        insights.recommendations.append("Identifier columns can serve as lookup keys")

    return insights
