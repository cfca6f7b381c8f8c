"""Unit tests for admin performance aggregation."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from staypoint.booking import aggregate_property_stats, summarize_dashboard

AS_OF = datetime(2024, 6, 30, 12, 0)


@dataclass
class Prop:
    title: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class Row:
    property_id: uuid.UUID
    total_price: Decimal | None
    created_at: datetime


def _days_ago(days: float) -> datetime:
    return AS_OF - timedelta(days=days)


class TestAggregatePropertyStats:
    def test_ranks_booked_property_first(self):
        p1, p2 = Prop("Quiet Cabin"), Prop("Beach Villa")
        stats = aggregate_property_stats([p1, p2], [Row(p2.id, Decimal("200"), _days_ago(3))], AS_OF)

        assert [s.property_id for s in stats] == [p2.id, p1.id]
        assert stats[0].total_revenue == Decimal("200.00")
        assert stats[0].bookings_count == 1
        assert stats[0].occupancy_rate > 0
        assert stats[1].total_revenue == Decimal("0.00")
        assert stats[1].bookings_count == 0
        assert stats[1].occupancy_rate == Decimal("0.00")

    def test_occupancy_counts_only_recent_bookings(self):
        prop = Prop("Loft")
        rows = [
            Row(prop.id, Decimal("100"), _days_ago(1)),
            Row(prop.id, Decimal("100"), _days_ago(29)),
            Row(prop.id, Decimal("100"), _days_ago(31)),
            Row(prop.id, Decimal("100"), AS_OF + timedelta(hours=1)),
        ]
        [stat] = aggregate_property_stats([prop], rows, AS_OF)
        assert stat.bookings_count == 4
        assert stat.total_revenue == Decimal("400.00")
        assert stat.occupancy_rate == Decimal("6.67")

    def test_occupancy_is_capped_at_100(self):
        prop = Prop("Busy House")
        rows = [Row(prop.id, Decimal("10"), _days_ago(0.5)) for _ in range(45)]
        [stat] = aggregate_property_stats([prop], rows, AS_OF)
        assert stat.occupancy_rate == Decimal("100.00")

    def test_missing_total_price_counts_as_zero(self):
        prop = Prop("Studio")
        rows = [Row(prop.id, None, _days_ago(2)), Row(prop.id, Decimal("55.50"), _days_ago(2))]
        [stat] = aggregate_property_stats([prop], rows, AS_OF)
        assert stat.total_revenue == Decimal("55.50")
        assert stat.bookings_count == 2

    def test_orphan_bookings_are_dropped(self):
        prop = Prop("Cottage")
        rows = [Row(uuid.uuid4(), Decimal("999"), _days_ago(1))]
        [stat] = aggregate_property_stats([prop], rows, AS_OF)
        assert stat.bookings_count == 0

    def test_ties_keep_property_order(self):
        props = [Prop("A"), Prop("B"), Prop("C")]
        rows = [Row(props[2].id, Decimal("50"), _days_ago(1))]
        stats = aggregate_property_stats(props, rows, AS_OF)
        assert [s.title for s in stats] == ["C", "A", "B"]

    def test_timezone_aware_as_of(self):
        prop = Prop("Condo")
        rows = [Row(prop.id, Decimal("10"), _days_ago(1))]
        aware = AS_OF.replace(tzinfo=timezone.utc)
        assert aggregate_property_stats([prop], rows, aware) == aggregate_property_stats([prop], rows, AS_OF)

    def test_custom_window(self):
        prop = Prop("Townhouse")
        rows = [Row(prop.id, Decimal("10"), _days_ago(5))]
        [stat] = aggregate_property_stats([prop], rows, AS_OF, window_days=10)
        assert stat.occupancy_rate == Decimal("10.00")

    def test_date_as_of_covers_the_whole_day(self):
        prop = Prop("Bungalow")
        rows = [
            Row(prop.id, Decimal("10"), datetime(2024, 6, 30, 23, 0)),
            Row(prop.id, Decimal("10"), datetime(2024, 7, 1, 0, 30)),
        ]
        [stat] = aggregate_property_stats([prop], rows, date(2024, 6, 30))
        assert stat.bookings_count == 2
        assert stat.occupancy_rate == Decimal("3.33")

    @pytest.mark.parametrize("window_days", [0, -7])
    def test_non_positive_window_rejected(self, window_days):
        with pytest.raises(ValueError):
            aggregate_property_stats([Prop("Flat")], [], AS_OF, window_days=window_days)

    def test_empty_inputs(self):
        assert aggregate_property_stats([], [], AS_OF) == []


class TestSummarizeDashboard:
    def test_totals(self):
        p1, p2 = Prop("One"), Prop("Two")
        rows = [
            Row(p1.id, Decimal("100"), _days_ago(2)),
            Row(p2.id, Decimal("250.25"), _days_ago(40)),
        ]
        summary = summarize_dashboard([p1, p2], rows, total_users=7, as_of=AS_OF)

        assert summary.total_properties == 2
        assert summary.total_bookings == 2
        assert summary.total_revenue == Decimal("350.25")
        assert summary.total_users == 7
        assert summary.recent_bookings == 1
        assert [s.title for s in summary.property_stats] == ["Two", "One"]

    def test_date_as_of(self):
        prop = Prop("Villa")
        summary = summarize_dashboard([prop], [Row(prop.id, Decimal("80"), _days_ago(1))], 1, date(2024, 6, 30))
        assert summary.recent_bookings == 1

    def test_zero_window_rejected(self):
        with pytest.raises(ValueError):
            summarize_dashboard([], [], total_users=0, as_of=AS_OF, window_days=0)
