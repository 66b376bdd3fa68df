"""
Descriptive statistics and IQR outlier detection
"""

from typing import Dict, List, Sequence

import numpy as np


def calculate_stats(values: Sequence[float]) -> Dict[str, float]:
    """count, sum, mean, min, max, median and population std, rounded to 2 decimals"""
    if not values:
        return {"count": 0, "sum": 0.0, "mean": 0.0, "min": 0.0, "max": 0.0, "median": 0.0, "std_dev": 0.0}

    array = np.asarray(values, dtype=float)
    return {
        "count": int(array.size),
        "sum": round(float(array.sum()), 2),
        "mean": round(float(array.mean()), 2),
        "min": round(float(array.min()), 2),
        "max": round(float(array.max()), 2),
        "median": round(float(np.median(array)), 2),
        "std_dev": round(float(array.std()), 2),
    }


def iqr_bounds(values: Sequence[float], threshold: float = 1.5) -> Dict[str, float]:
    """
    Index-based quartiles: Q1 = sorted[floor(n*0.25)], Q3 = sorted[floor(n*0.75)].
    No interpolation.
    """
    ordered = np.sort(np.asarray(values, dtype=float))
    n = ordered.size
    q1 = float(ordered[int(np.floor(n * 0.25))])
    q3 = float(ordered[int(np.floor(n * 0.75))])
    iqr = q3 - q1
    return {
        "q1": q1,
        "q3": q3,
        "iqr": iqr,
        "lower": q1 - threshold * iqr,
        "upper": q3 + threshold * iqr,
    }


def detect_outliers(values: Sequence[float], threshold: float = 1.5) -> List[Dict[str, float]]:
    """
    Return {index, value, reason} for every value outside [Q1 - k*IQR, Q3 + k*IQR].
    Empty input yields no outliers.
    """
    if not values:
        return []

    bounds = iqr_bounds(values, threshold)
    outliers = []
    for index, value in enumerate(values):
        if value < bounds["lower"]:
            outliers.append({"index": index, "value": value, "reason": "too small", **bounds})
        elif value > bounds["upper"]:
            outliers.append({"index": index, "value": value, "reason": "too large", **bounds})
    return outliers
