"""Tests for insulin usage statistics."""

from datetime import date

import pytest

from dosewatch.core.insulin_on_board import InvalidInsulinClass
from dosewatch.core.insulin_stats import UsageTrend, summarize_insulin, usage_trend
from tests.factories import make_dose

TODAY = date(2024, 3, 10)


class TestSummarizeInsulin:
    """Tests for summarize_insulin."""

    def test_empty(self):
        stats = summarize_insulin([], 30, TODAY)
        assert stats.totals.insulin == 0
        assert stats.totals.entries == 0
        assert stats.days_with_data == 0
        assert stats.daily_averages.insulin == 0
        assert stats.percentages.bolus == 0
        assert stats.trend == UsageTrend.stable
        assert stats.start_date == date(2024, 2, 9)
        assert stats.end_date == TODAY

    def test_bolus_and_basal_split(self):
        doses = [
            make_dose(4.0, 2),
            make_dose(2.0, 4, "short"),
            make_dose(18.0, 6, "long"),
            make_dose(6.0, 26),
            make_dose(20.0, 30, "basal"),
        ]
        stats = summarize_insulin(doses, 7, TODAY)
        assert stats.totals.insulin == 50.0
        assert stats.totals.bolus == 12.0
        assert stats.totals.basal == 38.0
        assert stats.totals.entries == 5
        assert stats.days_with_data == 2
        assert stats.daily_averages.insulin == 25.0
        assert stats.daily_averages.bolus == 6.0
        assert stats.daily_averages.basal == 19.0
        assert stats.percentages.bolus == 24.0
        assert stats.percentages.basal == 76.0

    def test_intermediate_counts_as_bolus(self):
        stats = summarize_insulin([make_dose(10.0, 1, "nph")], 7, TODAY)
        assert stats.totals.bolus == 10.0
        assert stats.bolus_by_class == {"intermediate": 10.0}

    def test_bolus_breakdown_by_class(self):
        doses = [make_dose(3.0, 1), make_dose(2.5, 2, "fast"), make_dose(4.0, 3, "regular")]
        stats = summarize_insulin(doses, 7, TODAY)
        assert stats.bolus_by_class == {"rapid": 5.5, "short": 4.0}

    def test_rounds_to_one_decimal(self):
        doses = [make_dose(1.0, 1), make_dose(1.0, 2), make_dose(1.0, 3, "long")]
        stats = summarize_insulin(doses, 7, TODAY)
        assert stats.percentages.bolus == 66.7
        assert stats.percentages.basal == 33.3

    def test_days_bucketed_in_local_timezone(self):
        # 09:00 and 11:00 UTC on 2024-03-10 straddle local midnight
        # in Pacific/Kiritimati (UTC+14)
        doses = [make_dose(1.0, 3), make_dose(1.0, 1)]
        assert summarize_insulin(doses, 7, TODAY).days_with_data == 1
        assert summarize_insulin(doses, 7, TODAY, "Pacific/Kiritimati").days_with_data == 2

    def test_rising_trend(self):
        doses = [make_dose(10.0, 24 * 3), make_dose(10.0, 24 * 2), make_dose(20.0, 24), make_dose(20.0, 0)]
        assert summarize_insulin(doses, 7, TODAY).trend == UsageTrend.increasing

    def test_unknown_class_raises(self):
        with pytest.raises(InvalidInsulinClass):
            summarize_insulin([make_dose(1.0, 1, "mystery")], 7, TODAY)

    def test_period_must_be_positive(self):
        with pytest.raises(ValueError):
            summarize_insulin([], 0, TODAY)


class TestUsageTrend:
    def test_stable_within_threshold(self):
        assert usage_trend([30.0, 31.0, 32.0, 31.5]) == UsageTrend.stable

    def test_decreasing(self):
        assert usage_trend([40.0, 38.0, 30.0, 31.0]) == UsageTrend.decreasing

    def test_exactly_threshold_is_stable(self):
        assert usage_trend([10.0, 12.0]) == UsageTrend.stable

    def test_single_day_compares_against_nothing(self):
        # one day: first half empty (mean 0), second half has the day
        assert usage_trend([25.0]) == UsageTrend.increasing

    def test_no_days(self):
        assert usage_trend([]) == UsageTrend.stable
