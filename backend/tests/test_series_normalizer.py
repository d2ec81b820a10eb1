"""Tests for chronological series normalization."""

from labtrend.services.series_normalizer import normalize_series
from tests.conftest import make_measurement


def _values(series):
    return [m.value for m in series]


class TestNormalizeSeries:
    def test_sorts_ascending(self):
        series = [
            make_measurement("2025-05-05", 3),
            make_measurement("2025-02-24", 1),
            make_measurement("2025-04-07", 2),
        ]
        assert _values(normalize_series(series)) == [1, 2, 3]

    def test_mixed_formats(self):
        series = [
            make_measurement("05/05/2025", 3),
            make_measurement("2025-02-24", 1),
            make_measurement("07/04/2025", 2),
        ]
        assert _values(normalize_series(series)) == [1, 2, 3]

    def test_equal_dates_keep_source_order(self):
        series = [
            make_measurement("2025-03-01", 2),
            make_measurement("2025-01-01", 1),
            make_measurement("01/03/2025", 3),
        ]
        assert _values(normalize_series(series)) == [1, 2, 3]

    def test_invalid_dates_sort_last_in_source_order(self):
        series = [
            make_measurement("bad", 8),
            make_measurement("2025-01-01", 1),
            make_measurement("worse", 9),
        ]
        assert _values(normalize_series(series)) == [1, 8, 9]

    def test_idempotent(self):
        series = [
            make_measurement("bad", 8),
            make_measurement("2025-03-01", 2),
            make_measurement("2025-01-01", 1),
        ]
        once = normalize_series(series)
        assert normalize_series(once) == once

    def test_permutation_of_input(self, store):
        for name in store.parameter_names():
            series = store.series(name)
            result = normalize_series(series)
            assert len(result) == len(series)
            assert sorted(result, key=id) == sorted(series, key=id)

    def test_returns_new_list(self):
        series = [make_measurement("2025-02-01", 2), make_measurement("2025-01-01", 1)]
        result = normalize_series(series)
        assert result is not series
        assert _values(series) == [2, 1]

    def test_empty(self):
        assert normalize_series([]) == []
