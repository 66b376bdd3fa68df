"""
Analysis Models
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from kualitas_shared.models.common import DataType, IssueType, Severity


class ColumnAnalysis(BaseModel):
    """Analysis result for a single column"""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "header": "NIK",
                "detected_type": "nik",
                "confidence": 100.0,
                "total_values": 4,
                "non_empty_count": 4,
                "empty_count": 0,
                "unique_count": 4,
                "fill_rate": 100.0,
                "sample_values": ["3201011505990001"],
                "is_numeric": False,
                "is_date": False,
                "is_identifier": True,
            }
        },
    )

    header: str = Field(..., description="Column name")
    detected_type: DataType = Field(..., description="Dominant semantic type")
    confidence: float = Field(..., ge=0.0, le=100.0, description="Share of dominant type (%)")
    type_details: Dict[str, Any] = Field(
        default_factory=dict, description="Details of the first value of the dominant type"
    )
    distribution: Dict[str, int] = Field(default_factory=dict, description="Type -> count")
    total_values: int = Field(..., ge=0)
    non_empty_count: int = Field(..., ge=0)
    empty_count: int = Field(..., ge=0)
    unique_count: int = Field(..., ge=0, description="Distinct non-empty values (case-folded)")
    fill_rate: float = Field(..., ge=0.0, le=100.0)
    sample_values: List[Any] = Field(default_factory=list)
    is_numeric: bool = False
    is_date: bool = False
    is_identifier: bool = False


class Issue(BaseModel):
    """One data-quality finding"""

    type: IssueType = Field(..., description="Issue kind")
    severity: Severity = Field(..., description="error | warning | info")
    row: Optional[int] = Field(
        default=None, description="1-based data row position; None for column-level issues"
    )
    column: Optional[str] = Field(default=None, description="None for row-level issues")
    message: str = Field(..., description="Human-readable summary")
    auto_fixable: bool = Field(default=False)
    value: Any = None
    expected: Any = None
    actual: Any = None
    suggestion: Any = None
    similarity: Optional[float] = Field(default=None, description="Typo similarity in percent")
    original_row: Optional[int] = Field(default=None, description="First occurrence of a duplicate")
    fix: Optional[str] = Field(default=None, description="Remediation hint")
    details: Dict[str, Any] = Field(default_factory=dict, description="Structured context")

    @classmethod
    def of(cls, issue_type: IssueType, message: str, **fields: Any) -> "Issue":
        """Build an issue with severity and fixability taken from the catalog."""
        return cls(
            type=issue_type,
            severity=issue_type.severity,
            auto_fixable=issue_type.auto_fixable,
            message=message,
            **fields,
        )


class QualityBreakdown(BaseModel):
    completeness: float
    consistency: float
    validity: float
    uniqueness: float


class QualityScore(BaseModel):
    """Overall 0-100 score with letter grade"""

    overall: float = Field(..., ge=0.0, le=100.0)
    grade: str = Field(..., description="A | B | C | D | F")
    grade_label: str = Field(..., description="Excellent | Good | Fair | Poor | Very Poor")
    breakdown: QualityBreakdown


class Suggestion(BaseModel):
    """Prioritized remediation action"""

    action: str
    priority: str = Field(..., description="high | medium | low")
    message: str
    impact: str = ""
    auto_fixable: bool = False
    affected_count: int = 0


class ColumnStatistics(BaseModel):
    """Descriptive statistics for a numeric column"""

    type: DataType
    count: int
    sum: float
    mean: float
    min: float
    max: float
    median: float
    std_dev: float


class InsightPattern(BaseModel):
    type: str
    message: str
    columns: List[str] = Field(default_factory=list)
    details: Dict[str, Any] = Field(default_factory=dict)


class DeepInsights(BaseModel):
    patterns: List[InsightPattern] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class AnalysisSummary(BaseModel):
    total_rows: int
    analyzed_rows: int
    total_columns: int
    headers: List[str]
    analysis_time_ms: float


class IssueReport(BaseModel):
    """Issue totals grouped by type and severity, plus a capped detail list"""

    total: int = 0
    by_type: Dict[str, int] = Field(default_factory=dict)
    by_severity: Dict[str, int] = Field(default_factory=dict)
    details: List[Issue] = Field(default_factory=list)
    truncated: bool = False


class AnalyzeOptions(BaseModel):
    """Analyzer switches and thresholds"""

    model_config = ConfigDict(extra="forbid")

    deep_analysis: bool = True
    detect_outliers: bool = True
    check_calculations: bool = True
    tax_rate: float = Field(default=0.11, ge=0.0, le=1.0)
    outlier_threshold: float = Field(default=1.5, gt=0.0)
    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    max_rows_analyze: int = Field(default=10000, ge=1)
    typo_max_unique_values: int = Field(default=500, ge=3)
    max_issue_details: int = Field(default=100, ge=0)
    strict_email: bool = False

    @classmethod
    def from_settings(cls, **overrides: Any) -> "AnalyzeOptions":
        from kualitas_shared.config.settings import get_settings

        analysis = get_settings().analysis
        values = {name: getattr(analysis, name) for name in cls.model_fields}
        values.update(overrides)
        return cls(**values)


class AnalysisResult(BaseModel):
    """Full analysis output"""

    summary: AnalysisSummary
    column_analysis: Dict[str, ColumnAnalysis]
    issues: IssueReport
    quality_score: QualityScore
    statistics: Dict[str, ColumnStatistics] = Field(default_factory=dict)
    suggestions: List[Suggestion] = Field(default_factory=list)
    deep_insights: Optional[DeepInsights] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    all_issues: List[Issue] = Field(default_factory=list, exclude=True, repr=False)

    def issues_of(self, issue_type: IssueType) -> List[Issue]:
        return [issue for issue in self.all_issues if issue.type == issue_type]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
