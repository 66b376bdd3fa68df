"""
Table model: ordered headers plus rows keyed by header
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

CellValue = Union[str, int, float, bool, date, datetime, None]


class CellKind(str, Enum):
    """Storage kind of a raw cell"""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    EMPTY = "empty"


def cell_kind(value: Any) -> CellKind:
    """Classify a raw cell into the string/number/date/empty union."""
    if value is None:
        return CellKind.EMPTY
    if isinstance(value, float) and math.isnan(value):
        return CellKind.EMPTY
    if isinstance(value, bool):
        return CellKind.STRING
    if isinstance(value, (int, float)):
        return CellKind.NUMBER
    if isinstance(value, (date, datetime)):
        return CellKind.DATE
    if isinstance(value, str) and not value.strip():
        return CellKind.EMPTY
    return CellKind.STRING


def _to_python_scalar(value: Any) -> CellValue:
    if value is pd.NaT:
        return None
    if isinstance(value, np.datetime64):
        value = pd.Timestamp(value)
        if value is pd.NaT:
            return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class Table(BaseModel):
    """Spreadsheet-like table: unique headers in display order and one dict per row"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    headers: List[str] = Field(..., description="Column names in display order")
    rows: List[Dict[str, Any]] = Field(default_factory=list, description="Rows keyed by header")

    @model_validator(mode="after")
    def _check_shape(self) -> "Table":
        seen = set()
        for header in self.headers:
            if header in seen:
                raise ValueError(f"Duplicate header: {header!r}")
            seen.add(header)
        for row in self.rows:
            for header in self.headers:
                row.setdefault(header, None)
        return self

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.headers or not self.rows

    def copy_rows(self) -> List[Dict[str, Any]]:
        """Fresh row dicts restricted to the table's headers."""
        return [{header: row.get(header) for header in self.headers} for row in self.rows]

    def copy(self) -> "Table":  # type: ignore[override]
        return Table(headers=list(self.headers), rows=self.copy_rows())

    @classmethod
    def from_records(
        cls, records: Iterable[Mapping[str, Any]], headers: Optional[List[str]] = None
    ) -> "Table":
        """Build a table from row mappings; headers default to first-seen key order."""
        rows = [dict(record) for record in records]
        if headers is None:
            headers = []
            for row in rows:
                for key in row:
                    if key not in headers:
                        headers.append(key)
        return cls(headers=list(headers), rows=rows)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "Table":
        headers = [str(column) for column in df.columns]
        rows = [
            {header: _to_python_scalar(value) for header, value in zip(headers, record)}
            for record in df.itertuples(index=False, name=None)
        ]
        return cls(headers=headers, rows=rows)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.copy_rows(), columns=self.headers)
