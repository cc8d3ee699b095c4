"""Tests for the insulin on board decay engine."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from dosewatch.core.insulin_on_board import (
    DEFAULT_DURATION_HOURS,
    InconsistentDoseDuration,
    InsulinClass,
    InsulinDose,
    InsulinOnBoardError,
    InvalidInsulinClass,
    InvalidTimestamp,
    compute_iob,
    duration_for,
    project_iob_curve,
    remaining_fraction,
    resolve_insulin_class,
)
from tests.factories import NOW, make_dose


class TestRemainingFraction:
    """Tests for the straight-line decay curve."""

    def test_full_at_zero_hours(self):
        """Nothing has decayed at the moment of injection."""
        assert remaining_fraction(0, 4) == 1.0

    def test_negative_elapsed_is_full(self):
        """Future-dated doses never count for more than their amount."""
        assert remaining_fraction(-2, 4) == 1.0

    def test_zero_at_duration(self):
        assert remaining_fraction(4, 4) == 0.0

    def test_zero_after_duration(self):
        assert remaining_fraction(10, 4) == 0.0

    def test_linear_midpoint(self):
        assert remaining_fraction(2, 4) == pytest.approx(0.5)
        assert remaining_fraction(3, 6) == pytest.approx(0.5)

    def test_non_increasing(self):
        """The curve never rises as time passes."""
        samples = [remaining_fraction(h / 4, 4) for h in range(0, 24)]
        assert all(a >= b for a, b in zip(samples, samples[1:]))

    def test_rejects_non_positive_duration(self):
        with pytest.raises(ValueError):
            remaining_fraction(1, 0)


class TestInsulinClasses:
    """Tests for class resolution and the duration table."""

    def test_canonical_durations(self):
        assert DEFAULT_DURATION_HOURS[InsulinClass.rapid] == 4.0
        assert DEFAULT_DURATION_HOURS[InsulinClass.short] == 6.0
        assert DEFAULT_DURATION_HOURS[InsulinClass.intermediate] == 12.0
        assert DEFAULT_DURATION_HOURS[InsulinClass.long] == 24.0

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("rapid", InsulinClass.rapid),
            ("  Rapid ", InsulinClass.rapid),
            ("fast", InsulinClass.rapid),
            ("regular", InsulinClass.short),
            ("NPH", InsulinClass.intermediate),
            ("basal", InsulinClass.long),
            (InsulinClass.long, InsulinClass.long),
        ],
    )
    def test_resolves_names_and_aliases(self, value, expected):
        assert resolve_insulin_class(value) is expected

    @pytest.mark.parametrize("value", ["ultra", "", None, 4])
    def test_unknown_class_raises(self, value):
        with pytest.raises(InvalidInsulinClass):
            resolve_insulin_class(value)

    def test_invalid_class_is_a_value_error(self):
        """Callers catching ValueError still see the failure."""
        assert issubclass(InvalidInsulinClass, ValueError)
        assert issubclass(InvalidInsulinClass, InsulinOnBoardError)

    def test_duration_override(self):
        assert duration_for("short") == 6.0
        assert duration_for("short", {InsulinClass.short: 8.0}) == 8.0
        assert duration_for("rapid", {InsulinClass.short: 8.0}) == 4.0

    def test_duration_override_must_be_positive(self):
        with pytest.raises(ValueError):
            duration_for("short", {InsulinClass.short: 0})


class TestInsulinDoseModel:
    """Tests for dose validation at construction."""

    def test_rejects_naive_timestamp(self):
        with pytest.raises(ValidationError):
            InsulinDose(
                id="d1",
                amount=2.0,
                timestamp=datetime(2024, 3, 10, 12, 0),
                insulin_class="rapid",
            )

    def test_rejects_non_positive_amount(self):
        with pytest.raises(ValidationError):
            InsulinDose(id="d1", amount=0, timestamp=NOW, insulin_class="rapid")

    def test_normalises_class(self):
        dose = InsulinDose(id="d1", amount=1, timestamp=NOW, insulin_class=" RAPID ")
        assert dose.insulin_class == "rapid"

    def test_is_immutable(self):
        dose = make_dose(2.0, 1)
        with pytest.raises(ValidationError):
            dose.amount = 3.0


class TestComputeIOB:
    """Tests for compute_iob."""

    def test_empty_doses(self):
        result = compute_iob([], NOW)
        assert result.total_iob == 0
        assert result.active_dose_count == 0
        assert result.doses == []
        assert result.evaluated_at == NOW

    def test_rapid_dose_half_decayed(self):
        """6 units of rapid insulin 2 hours ago leaves 3.0 units."""
        result = compute_iob([make_dose(6.0, 2)], NOW)
        assert result.total_iob == 3.0
        assert result.active_dose_count == 1

    def test_dose_at_evaluation_instant_counts_fully(self):
        result = compute_iob([make_dose(4.0, 0)], NOW)
        assert result.total_iob == 4.0

    def test_expired_dose_contributes_nothing(self):
        result = compute_iob([make_dose(5.0, 4)], NOW)
        assert result.total_iob == 0
        assert result.active_dose_count == 0
        assert result.doses[0].remaining_fraction == 0.0

    def test_short_acting_uses_six_hours(self):
        result = compute_iob([make_dose(6.0, 3, "short")], NOW)
        assert result.total_iob == 3.0

    def test_long_acting_never_contributes(self):
        """20 units of long-acting insulin a minute ago gives 0."""
        result = compute_iob([make_dose(20.0, 1 / 60, "long")], NOW)
        assert result.total_iob == 0
        assert result.doses == []

    def test_intermediate_never_contributes(self):
        result = compute_iob([make_dose(10.0, 1, "nph")], NOW)
        assert result.total_iob == 0

    def test_basal_dose_still_class_checked(self):
        with pytest.raises(InvalidInsulinClass) as exc_info:
            compute_iob([make_dose(10.0, 1, "mystery", dose_id="bad")], NOW)
        assert exc_info.value.dose_id == "bad"

    def test_future_dose_clamps_to_full(self):
        result = compute_iob([make_dose(3.0, -1)], NOW)
        assert result.total_iob == 3.0
        assert result.doses[0].hours_elapsed == 0.0

    def test_sums_multiple_doses(self):
        doses = [make_dose(4.0, 1), make_dose(2.0, 3), make_dose(6.0, 3, "short")]
        # 4*0.75 + 2*0.25 + 6*0.5
        result = compute_iob(doses, NOW)
        assert result.total_iob == 6.5
        assert result.active_dose_count == 3

    def test_total_rounded_to_one_decimal(self):
        # 1 unit at 1h20m: 1 * (4 - 4/3) / 4 = 0.666...
        result = compute_iob([make_dose(1.0, 4 / 3)], NOW)
        assert result.total_iob == 0.7
        assert result.doses[0].remaining_amount == 0.67

    def test_breakdown_ordered_by_time(self):
        doses = [
            make_dose(1.0, 1, dose_id="later"),
            make_dose(1.0, 3, dose_id="earlier"),
        ]
        result = compute_iob(doses, NOW)
        assert [d.dose_id for d in result.doses] == ["earlier", "later"]

    def test_order_of_input_does_not_matter(self):
        doses = [make_dose(2.0, 0.5), make_dose(3.0, 2.5), make_dose(1.0, 1)]
        assert compute_iob(doses, NOW) == compute_iob(list(reversed(doses)), NOW)

    def test_repeated_calls_are_equal(self):
        doses = [make_dose(2.0, 0.5), make_dose(3.0, 2.5)]
        assert compute_iob(doses, NOW) == compute_iob(doses, NOW)

    def test_short_acting_override(self):
        doses = [make_dose(8.0, 4, "short")]
        result = compute_iob(doses, NOW, {InsulinClass.short: 8.0})
        assert result.total_iob == 4.0

    def test_precomputed_duration_must_match(self):
        dose = InsulinDose(
            id="d1",
            amount=2.0,
            timestamp=NOW - timedelta(hours=1),
            insulin_class="rapid",
            duration_hours=5.0,
        )
        with pytest.raises(InconsistentDoseDuration) as exc_info:
            compute_iob([dose], NOW)
        assert exc_info.value.expected == 4.0

    def test_precomputed_duration_matching_is_accepted(self):
        dose = InsulinDose(
            id="d1",
            amount=2.0,
            timestamp=NOW - timedelta(hours=2),
            insulin_class="rapid",
            duration_hours=4.0,
        )
        assert compute_iob([dose], NOW).total_iob == 1.0

    def test_naive_evaluation_instant_rejected(self):
        with pytest.raises(InvalidTimestamp):
            compute_iob([], datetime(2024, 3, 10, 12, 0))

    def test_non_datetime_evaluation_instant_rejected(self):
        with pytest.raises(InvalidTimestamp):
            compute_iob([], "2024-03-10T12:00:00Z")

    def test_mixed_timezones(self):
        """Offsets are compared as instants, not wall-clock times."""
        from zoneinfo import ZoneInfo

        taken = (NOW - timedelta(hours=2)).astimezone(ZoneInfo("America/New_York"))
        dose = InsulinDose(id="d1", amount=6.0, timestamp=taken, insulin_class="rapid")
        assert compute_iob([dose], NOW).total_iob == 3.0


class TestProjectIOBCurve:
    """Tests for the IOB projection used by the decay chart."""

    def test_points_every_step(self):
        points = project_iob_curve([make_dose(4.0, 0)], NOW, hours=2, step_minutes=30)
        assert [p.minutes_from_start for p in points] == [0, 30, 60, 90, 120]
        assert [p.total_iob for p in points] == [4.0, 3.5, 3.0, 2.5, 2.0]

    def test_first_point_matches_compute_iob(self):
        doses = [make_dose(3.0, 1), make_dose(2.0, 2, "short")]
        points = project_iob_curve(doses, NOW, hours=1)
        assert points[0].total_iob == compute_iob(doses, NOW).total_iob
        assert points[0].at == NOW

    def test_curve_is_non_increasing(self):
        doses = [make_dose(3.0, 1), make_dose(5.0, 0.2)]
        points = project_iob_curve(doses, NOW, hours=6, step_minutes=15)
        values = [p.total_iob for p in points]
        assert all(a >= b for a, b in zip(values, values[1:]))
        assert values[-1] == 0

    def test_rejects_bad_horizon(self):
        with pytest.raises(ValueError):
            project_iob_curve([], NOW, hours=0)
        with pytest.raises(ValueError):
            project_iob_curve([], NOW, hours=1, step_minutes=0)

    def test_rejects_naive_start(self):
        with pytest.raises(InvalidTimestamp):
            project_iob_curve([], datetime(2024, 1, 1), hours=1)

    def test_start_is_timezone_preserved(self):
        start = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
        points = project_iob_curve([], start, hours=0.5, step_minutes=30)
        assert points[-1].at == start + timedelta(minutes=30)
