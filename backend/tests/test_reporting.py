# Overview: Pytest coverage for report aggregation and the dashboard summary.

from datetime import date
from types import SimpleNamespace

import pytest

from mineor.services import (
    inventory_service,
    production_service,
    reporting_service,
    settings_service,
    worker_service,
)
from mineor.errors import MineOrError, NotFoundError, ValidationError
from mineor.services.reporting_service import ReportError


def _prod(day, grams, team="Équipe A", shift="morning"):
    return SimpleNamespace(date=date.fromisoformat(day), quantity_grams=grams, team=team, shift=shift)


class TestArithmetic:
    def test_daily_average_counts_both_ends(self):
        assert reporting_service.daily_average(900, "2024-01-01", "2024-01-03") == 300

    def test_single_day_range(self):
        assert reporting_service.inclusive_day_count("2024-01-05", "2024-01-05") == 1

    def test_percentage(self):
        assert reporting_service.percentage(50, 200) == 25
        assert reporting_service.percentage(1, 8) == 13  # 12.5 rounds up

    def test_percentage_of_zero_total(self):
        assert reporting_service.percentage(40, 0) == 0

    @pytest.mark.parametrize(
        "current,previous,expected",
        [
            (150, 100, (50, "positive")),
            (50, 100, (-50, "negative")),
            (100, 100, (0, "neutral")),
            (100, 0, (0, "neutral")),
        ],
    )
    def test_percent_change(self, current, previous, expected):
        assert reporting_service.percent_change(current, previous) == expected

    def test_target_progress_is_capped(self):
        assert reporting_service.target_progress(150, 300) == 50
        assert reporting_service.target_progress(450, 300) == 100
        assert reporting_service.target_progress(10, 0) == 0

    def test_low_stock_boundary(self):
        items = [
            SimpleNamespace(quantity=5, min_quantity=5),
            SimpleNamespace(quantity=6, min_quantity=5),
            SimpleNamespace(quantity=0, min_quantity=1),
        ]
        assert reporting_service.count_low_stock(items) == 2


class TestSummarizeProduction:
    def test_totals_shares_and_counts(self):
        productions = [
            _prod("2024-01-01", 300, "Équipe A", "morning"),
            _prod("2024-01-02", 100, "Équipe B", "night"),
            _prod("2024-01-03", 200, "Équipe A", "afternoon"),
            _prod("2024-01-09", 999),  # outside the range
        ]
        workers = [SimpleNamespace(status="active"), SimpleNamespace(status="leave")]
        items = [SimpleNamespace(quantity=1, min_quantity=2)]

        report = reporting_service.summarize_production(
            productions, workers, items, start="2024-01-01", end="2024-01-03"
        )

        assert report["day_count"] == 3
        assert report["entries"] == 3
        assert report["total_production"] == 600
        assert report["daily_average"] == 200
        assert report["production_by_team"] == [
            {"key": "Équipe A", "grams": 500, "percent": 83},
            {"key": "Équipe B", "grams": 100, "percent": 17},
        ]
        assert {row["key"] for row in report["production_by_shift"]} == {"morning", "afternoon", "night"}
        assert report["active_workers"] == 1
        assert report["total_workers"] == 2
        assert report["low_stock_items"] == 1

    def test_is_deterministic(self):
        productions = [_prod("2024-01-01", 120), _prod("2024-01-02", 80, "Équipe B")]
        first = reporting_service.summarize_production(productions, [], [], start="2024-01-01", end="2024-01-02")
        second = reporting_service.summarize_production(productions, [], [], start="2024-01-01", end="2024-01-02")
        assert first == second

    def test_empty_range_has_zero_shares(self):
        report = reporting_service.summarize_production([], [], [], start="2024-01-01", end="2024-01-02")
        assert report["total_production"] == 0
        assert report["daily_average"] == 0
        assert all(row["percent"] == 0 for row in report["production_by_shift"])


class TestSummarizeDashboard:
    def test_period_totals(self):
        today = date(2024, 3, 15)
        productions = [
            _prod("2024-03-15", 150),
            _prod("2024-03-14", 100),
            _prod("2024-03-10", 50),
            _prod("2024-03-02", 200),  # last week window
            _prod("2024-02-28", 400),  # previous month
        ]
        purchases = [
            SimpleNamespace(purchase_date=date(2024, 3, 15), amount=30),
            SimpleNamespace(purchase_date=date(2024, 3, 14), amount=60),
        ]

        summary = reporting_service.summarize_dashboard(
            productions, purchases, [SimpleNamespace(status="active")], today=today, daily_target=300
        )

        assert summary["today_production"] == 150
        assert summary["yesterday_production"] == 100
        assert summary["week_production"] == 300
        assert summary["last_week_production"] == 200
        assert summary["month_production"] == 500
        assert summary["working_days_this_month"] == 4
        assert summary["target_progress"] == 50
        assert summary["comparisons"]["vs_yesterday"] == {"value": 50, "type": "positive"}
        assert summary["comparisons"]["purchases_vs_yesterday"] == {"value": -50, "type": "negative"}


class TestFetchLayer:
    def _fill(self, site_id):
        for day, grams, team in (("2024-01-01", 300, "Équipe A"), ("2024-01-02", 300, "Équipe B"),
                                 ("2024-01-03", 300, "Équipe A")):
            production_service.create_production(site_id, date=day, quantity_grams=grams, team=team, shift="morning")
        worker_service.create_worker(site_id, first_name="Jean", last_name="Kabongo")
        inventory_service.create_item(site_id, name="Casques", category="safety", quantity=5, min_quantity=5)

    def test_production_report_is_site_scoped(self, db_session, site_a, site_b):
        self._fill(site_a.id)
        production_service.create_production(site_b.id, date="2024-01-02", quantity_grams=5000, team="Équipe C", shift="night")

        report = reporting_service.production_report(site_id=site_a.id, start="2024-01-01", end="2024-01-03")

        assert report["total_production"] == 900
        assert report["daily_average"] == 300
        assert report["active_workers"] == 1
        assert report["low_stock_items"] == 1
        assert report["site"]["id"] == site_a.id

    def test_inverted_range_rejected(self, db_session, site_a):
        with pytest.raises(ReportError):
            reporting_service.production_report(site_id=site_a.id, start="2024-01-03", end="2024-01-01")

    def test_unknown_site_is_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            reporting_service.production_report(site_id=404, start="2024-01-01", end="2024-01-03")

    @pytest.mark.parametrize("start,end", [("2024-13-01", "2024-01-03"), ("", "2024-01-03"), ("2024-01-01", None)])
    def test_malformed_dates_rejected(self, db_session, site_a, start, end):
        with pytest.raises(ReportError):
            reporting_service.production_report(site_id=site_a.id, start=start, end=end)

    def test_report_error_belongs_to_error_taxonomy(self):
        assert issubclass(ReportError, ValidationError)
        assert issubclass(ReportError, MineOrError)

    def test_dashboard_respects_display_toggles(self, db_session, site_a):
        self._fill(site_a.id)

        summary = reporting_service.dashboard(site_id=site_a.id, today="2024-01-03")
        assert summary["today_production"] == 300
        assert summary["daily_target"] == 300
        assert set(summary["comparisons"]) == {"vs_yesterday", "vs_last_week", "purchases_vs_yesterday"}
        assert summary["working_days_this_month"] == 3

        settings_service.update_settings(show_production_comparison=False, show_working_days=False)

        summary = reporting_service.dashboard(site_id=site_a.id, today="2024-01-03")
        assert set(summary["comparisons"]) == {"purchases_vs_yesterday"}
        assert "working_days_this_month" not in summary
