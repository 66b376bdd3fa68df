import pytest

from kualitas_shared.utils.similarity import levenshtein_distance, string_similarity
from kualitas_shared.utils.stats import calculate_stats, detect_outliers, iqr_bounds


def test_levenshtein_distance():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("Jakarta", "Jakarta") == 0


def test_string_similarity_is_case_insensitive():
    assert string_similarity("Jakarta", "JAKARTA") == 1.0
    assert string_similarity("Jakarta", "Jakrta") == pytest.approx(6 / 7)
    assert string_similarity("", "") == 1.0
    assert string_similarity("abc", "xyz") == 0.0


def test_string_similarity_divides_by_longer_length():
    assert string_similarity("abc", "abcd") == pytest.approx(0.75)
    assert string_similarity(None, "ab") == 0.0


def test_calculate_stats_uses_population_std():
    stats = calculate_stats([2, 4, 4, 4, 5, 5, 7, 9])
    assert stats["count"] == 8
    assert stats["sum"] == 40
    assert stats["mean"] == 5
    assert stats["median"] == 4.5
    assert stats["std_dev"] == 2.0
    assert stats["min"] == 2 and stats["max"] == 9


def test_calculate_stats_empty():
    assert calculate_stats([])["count"] == 0


def test_iqr_bounds_are_index_based():
    bounds = iqr_bounds([10, 11, 9, 12, 10, 11, 1000, 9, 10, 11])
    assert bounds["q1"] == 10
    assert bounds["q3"] == 11
    assert bounds["lower"] == 8.5
    assert bounds["upper"] == 12.5


def test_detect_outliers_flags_large_value():
    values = [10, 11, 9, 12, 10, 11, 1000, 9, 10, 11]
    outliers = detect_outliers(values)
    assert len(outliers) == 1
    assert outliers[0]["index"] == 6
    assert outliers[0]["value"] == 1000
    assert outliers[0]["reason"] == "too large"


def test_detect_outliers_flags_small_value():
    values = [100, 101, 99, 102, 100, 101, 1, 99, 100, 101]
    outliers = detect_outliers(values)
    assert [o["reason"] for o in outliers] == ["too small"]


def test_detect_outliers_empty():
    assert detect_outliers([]) == []
