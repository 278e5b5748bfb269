"""Derived metric tests — turnaround time, man-hours, parts cost."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.core.metrics import man_hours, total_parts_cost, turnaround_hours
from app.utils.exceptions import InvalidInputError

UTC = timezone.utc


class TestTurnaround:

    def test_two_and_a_half_days_is_sixty_hours(self):
        created = datetime(2024, 1, 1, 0, 0, tzinfo=UTC)
        closed = datetime(2024, 1, 3, 12, 0, tzinfo=UTC)
        assert turnaround_hours(created, closed) == 60

    def test_half_hour_rounds_up(self):
        created = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
        assert turnaround_hours(created, created + timedelta(hours=1, minutes=30)) == 2

    def test_just_under_half_hour_rounds_down(self):
        created = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
        assert turnaround_hours(created, created + timedelta(minutes=29, seconds=59)) == 0

    def test_same_moment_is_zero(self):
        moment = datetime(2024, 5, 5, 10, 0, tzinfo=UTC)
        assert turnaround_hours(moment, moment) == 0

    def test_naive_datetimes_read_as_utc(self):
        created = datetime(2024, 1, 1, 0, 0)
        closed = datetime(2024, 1, 1, 5, 0, tzinfo=UTC)
        assert turnaround_hours(created, closed) == 5

    def test_offsets_are_normalized(self):
        created = datetime(2024, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=9)))
        closed = datetime(2024, 1, 1, 3, 0, tzinfo=UTC)
        assert turnaround_hours(created, closed) == 3

    def test_closed_before_created_is_an_error(self):
        created = datetime(2024, 1, 2, tzinfo=UTC)
        with pytest.raises(ValueError):
            turnaround_hours(created, created - timedelta(seconds=1))


class TestManHours:

    def test_two_and_a_half_hours(self):
        start = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
        end = datetime(2024, 3, 1, 11, 30, tzinfo=UTC)
        assert man_hours(start, end) == 2.5

    def test_equal_times_rejected(self):
        moment = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
        with pytest.raises(InvalidInputError):
            man_hours(moment, moment)

    def test_end_before_start_rejected(self):
        start = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
        with pytest.raises(InvalidInputError) as exc:
            man_hours(start, start - timedelta(hours=1))
        assert exc.value.status_code == 400


class TestPartsCost:

    def test_quantity_times_cost(self):
        parts = [
            SimpleNamespace(quantity=2, cost=Decimal("50")),
            SimpleNamespace(quantity=1, cost=Decimal("20")),
        ]
        assert total_parts_cost(parts) == Decimal("120")

    def test_empty_list_costs_nothing(self):
        assert total_parts_cost([]) == Decimal("0")

    def test_float_costs_are_summed_exactly(self):
        parts = [SimpleNamespace(quantity=3, cost=0.1)]
        assert total_parts_cost(parts) == Decimal("0.3")

    @pytest.mark.parametrize("quantity, cost", [(-1, Decimal("5")), (1, Decimal("-5"))])
    def test_negative_values_rejected(self, quantity, cost):
        with pytest.raises(InvalidInputError):
            total_parts_cost([SimpleNamespace(quantity=quantity, cost=cost)])
