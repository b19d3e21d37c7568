"""Tests for the mood-history risk analyzer."""
from datetime import datetime, timedelta

import pytest

from safeharbor.shared.exceptions import InvalidMoodEntry, ResponseTypeError
from safeharbor.shared.models import MoodEntry, RiskTrendLevel
from safeharbor.services.mood_service import (
    NO_DATA_SIGNAL,
    MoodAnalysisConfig,
    analyze_mood_risk,
    filter_window,
    mood_decline,
)

NOW = datetime(2026, 10, 10, 12, 0, 0)


def entry(days_ago, mood, **kwargs):
    return MoodEntry(timestamp=NOW - timedelta(days=days_ago), mood_score=mood, **kwargs)


@pytest.fixture
def falling_week():
    """Mood falling from 8 to 2 across seven daily entries."""
    return [entry(6 - i, 8 - i) for i in range(7)]


class TestEmptyWindow:
    def test_no_entries(self):
        result = analyze_mood_risk([], reference_time=NOW)
        assert result.risk_level == RiskTrendLevel.LOW
        assert result.warning_signals == [NO_DATA_SIGNAL]
        assert result.trends == []
        assert result.entries_analyzed == 0

    def test_only_stale_entries(self):
        result = analyze_mood_risk([entry(30, 1), entry(10, 1)], reference_time=NOW)
        assert result.warning_signals == [NO_DATA_SIGNAL]

    def test_none_treated_as_empty(self):
        assert analyze_mood_risk(None, reference_time=NOW).entries_analyzed == 0


class TestDecline:
    def test_falling_week_is_elevated(self, falling_week):
        result = analyze_mood_risk(falling_week, reference_time=NOW)
        assert result.risk_level in (RiskTrendLevel.ELEVATED, RiskTrendLevel.HIGH)
        assert "declining" in result.trends
        assert "Significant mood decline detected" in result.warning_signals
        assert "Rapid mood deterioration" in result.warning_signals

    def test_mood_decline_halves(self, falling_week):
        # first half [8, 7, 6], second half [5, 4, 3, 2]
        assert mood_decline(falling_week) == pytest.approx(3.5)

    def test_needs_minimum_entries(self):
        result = analyze_mood_risk([entry(2, 9), entry(1, 2)], reference_time=NOW)
        assert "declining" not in result.trends

    def test_moderate_decline_only_one_signal(self):
        entries = [entry(3, 7), entry(2, 7), entry(1, 5), entry(0, 5)]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert result.warning_signals == ["Significant mood decline detected"]
        assert result.risk_level == RiskTrendLevel.MODERATE

    def test_input_order_irrelevant(self, falling_week):
        shuffled = list(reversed(falling_week))
        assert (
            analyze_mood_risk(shuffled, reference_time=NOW).to_dict()
            == analyze_mood_risk(falling_week, reference_time=NOW).to_dict()
        )


class TestSustainedSignals:
    def test_high_stress_and_anxiety(self):
        entries = [entry(i, 5, stress_level=8, anxiety_level=9) for i in range(3)]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert result.warning_signals == ["High stress levels", "High anxiety levels"]
        assert result.risk_level == RiskTrendLevel.ELEVATED

    def test_missing_stress_counts_as_zero(self):
        entries = [entry(0, 5, stress_level=10), entry(1, 5), entry(2, 5)]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert "High stress levels" not in result.warning_signals

    def test_persistently_low_mood(self):
        entries = [entry(i, 2) for i in range(3)]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert "Persistently low mood" in result.warning_signals

    def test_isolation_over_reporting_entries_only(self):
        entries = [
            entry(0, 6, social_interaction_score=1),
            entry(1, 6, social_interaction_score=2),
            entry(2, 6),
        ]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert "Social isolation detected" in result.warning_signals

    def test_sleep_disruption(self):
        entries = [entry(0, 6, sleep_hours=3.5), entry(1, 6)]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert result.warning_signals == ["Severe sleep disruption"]

    def test_many_signals_is_high(self):
        entries = [
            entry(i, 2, stress_level=9, anxiety_level=9, sleep_hours=3, social_interaction_score=0)
            for i in range(3)
        ]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert result.risk_level == RiskTrendLevel.HIGH
        assert len(result.warning_signals) == 5


class TestPositiveTrends:
    def test_good_week(self):
        entries = [entry(0, 8, exercise=True), entry(1, 8), entry(2, 7)]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert result.risk_level == RiskTrendLevel.LOW
        assert result.warning_signals == []
        assert result.trends == ["positive mood", "regular exercise"]


class TestWindow:
    def test_future_entries_excluded(self):
        entries = [entry(0, 6), entry(-1, 1), entry(-3, 1)]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert result.entries_analyzed == 1

    def test_window_boundary_inclusive(self):
        recent = filter_window([entry(7, 5), entry(8, 5)], 7, NOW)
        assert len(recent) == 1

    def test_custom_window(self):
        entries = [entry(i, 6) for i in range(10)]
        assert analyze_mood_risk(entries, window_days=3, reference_time=NOW).entries_analyzed == 4

    def test_config_window_is_default(self):
        entries = [entry(10, 6), entry(1, 6)]
        assert analyze_mood_risk(entries, reference_time=NOW).entries_analyzed == 1
        wide = MoodAnalysisConfig(window_days=14)
        assert analyze_mood_risk(entries, reference_time=NOW, config=wide).entries_analyzed == 2

    def test_explicit_window_overrides_config(self):
        entries = [entry(10, 6), entry(1, 6)]
        wide = MoodAnalysisConfig(window_days=14)
        result = analyze_mood_risk(entries, window_days=3, reference_time=NOW, config=wide)
        assert result.entries_analyzed == 1

    def test_reference_time_accepts_iso_string(self):
        result = analyze_mood_risk([entry(1, 6)], reference_time="2026-10-10T12:00:00Z")
        assert result.entries_analyzed == 1


class TestInputs:
    def test_accepts_api_dicts(self):
        entries = [
            {"timestamp": "2026-10-09T08:00:00Z", "mood_score": 8, "exercise": True},
            {"timestamp": "2026-10-10T08:00:00+00:00", "mood_score": 7},
        ]
        result = analyze_mood_risk(entries, reference_time=NOW)
        assert result.entries_analyzed == 2
        assert "regular exercise" in result.trends

    @pytest.mark.parametrize("window", [0, -3])
    def test_non_positive_window(self, window):
        with pytest.raises(InvalidMoodEntry) as exc:
            analyze_mood_risk([], window_days=window, reference_time=NOW)
        assert exc.value.field == "window_days"

    def test_window_wrong_type(self):
        with pytest.raises(ResponseTypeError) as exc:
            analyze_mood_risk([], window_days="7", reference_time=NOW)
        assert exc.value.field == "window_days"

    def test_mood_out_of_range_names_field(self):
        with pytest.raises(InvalidMoodEntry) as exc:
            analyze_mood_risk([{"timestamp": "2026-10-09T08:00:00", "mood_score": 11}])
        assert exc.value.field == "mood_score"

    def test_missing_timestamp(self):
        with pytest.raises(InvalidMoodEntry) as exc:
            analyze_mood_risk([{"mood_score": 5}])
        assert exc.value.field == "timestamp"

    def test_entries_must_be_list(self):
        with pytest.raises(ResponseTypeError):
            analyze_mood_risk({"mood_score": 5})

    def test_config_rejects_bad_window(self):
        with pytest.raises(ValueError):
            MoodAnalysisConfig(window_days=0)
