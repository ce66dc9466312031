# Overview: Derived reporting; pure aggregation over fetched rows plus the thin fetch layer that feeds it.

"""
Reporting Service

Aggregation rules (authoritative):
- Day counts are inclusive: 2024-01-01..2024-01-03 is 3 days, floored at 1.
- Percentages and averages round half-up to the nearest integer.
- A percentage of a zero total is 0.
- Low stock means quantity <= min_quantity.

The summarize_* and arithmetic helpers never touch the database; they take
rows (or anything with the same attributes) and return plain dicts, so the
same input always yields the same output.
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Iterable

from flask import current_app

from ..errors import ValidationError
from ..models import Site, SHIFTS
from . import inventory_service, production_service, purchase_service, settings_service, worker_service
from .record_service import require_record
from mineor.time_utils import parse_iso_date, to_iso_date, today as local_today


class ReportError(ValidationError):
    """Raised for an unusable report request (missing, malformed or inverted dates)."""
    pass


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


# ---------------------------------------------------------------------------
# Pure aggregation
# ---------------------------------------------------------------------------

def total_grams(productions: Iterable) -> float:
    return sum(p.quantity_grams for p in productions)


def _sum_by(productions: Iterable, attr: str) -> dict[str, float]:
    totals: dict[str, float] = {}
    for p in productions:
        key = getattr(p, attr)
        totals[key] = totals.get(key, 0) + p.quantity_grams
    return totals


def sum_by_team(productions: Iterable) -> dict[str, float]:
    return _sum_by(productions, "team")


def sum_by_shift(productions: Iterable) -> dict[str, float]:
    return _sum_by(productions, "shift")


def _parse_day(value, label: str) -> date:
    try:
        day = parse_iso_date(value)
    except ValueError:
        raise ReportError(f"{label} must be a YYYY-MM-DD date") from None
    if day is None:
        raise ReportError(f"{label} date is required")
    return day


def inclusive_day_count(start, end) -> int:
    start_d, end_d = _parse_day(start, "start"), _parse_day(end, "end")
    return max(1, (end_d - start_d).days + 1)


def daily_average(total: float, start, end) -> int:
    return _round_half_up(total / inclusive_day_count(start, end))


def percentage(value: float, total: float) -> int:
    if not total:
        return 0
    return _round_half_up(value / total * 100)


def percent_change(current: float, previous: float) -> tuple[int, str]:
    """Change relative to the previous period and its direction."""
    if not previous:
        return 0, "neutral"
    change = _round_half_up((current - previous) / previous * 100)
    if change > 0:
        return change, "positive"
    if change < 0:
        return change, "negative"
    return 0, "neutral"


def target_progress(today_total: float, daily_target: float) -> int:
    if not daily_target:
        return 0
    return min(100, _round_half_up(today_total / daily_target * 100))


def working_days(productions: Iterable, since: date) -> int:
    return len({p.date for p in productions if p.date >= since})


def is_low_stock(item) -> bool:
    return item.quantity <= item.min_quantity


def count_low_stock(items: Iterable) -> int:
    return sum(1 for item in items if is_low_stock(item))


def count_active_workers(workers: Iterable) -> int:
    return sum(1 for w in workers if w.status == "active")


def _with_shares(totals: dict[str, float], grand_total: float) -> list[dict]:
    rows = [
        {"key": key, "grams": grams, "percent": percentage(grams, grand_total)}
        for key, grams in totals.items()
    ]
    return sorted(rows, key=lambda r: (-r["grams"], r["key"]))


def summarize_production(productions: list, workers: list, items: list, *, start, end) -> dict:
    start_d, end_d = _parse_day(start, "start"), _parse_day(end, "end")
    in_range = [p for p in productions if start_d <= p.date <= end_d]
    total = total_grams(in_range)

    by_shift = sum_by_shift(in_range)
    for shift in SHIFTS:
        by_shift.setdefault(shift, 0)

    return {
        "start": to_iso_date(start_d),
        "end": to_iso_date(end_d),
        "day_count": inclusive_day_count(start_d, end_d),
        "entries": len(in_range),
        "total_production": total,
        "daily_average": daily_average(total, start_d, end_d),
        "production_by_team": _with_shares(sum_by_team(in_range), total),
        "production_by_shift": _with_shares(by_shift, total),
        "active_workers": count_active_workers(workers),
        "total_workers": len(workers),
        "inventory_items": len(items),
        "low_stock_items": count_low_stock(items),
    }


def summarize_dashboard(
    productions: list,
    purchases: list,
    workers: list,
    *,
    today: date,
    daily_target: float,
) -> dict:
    yesterday = today - timedelta(days=1)
    week_ago = today - timedelta(days=7)
    two_weeks_ago = today - timedelta(days=14)
    month_start = today.replace(day=1)

    today_prod = total_grams(p for p in productions if p.date == today)
    yesterday_prod = total_grams(p for p in productions if p.date == yesterday)
    week_prod = total_grams(p for p in productions if p.date >= week_ago)
    last_week_prod = total_grams(p for p in productions if two_weeks_ago <= p.date < week_ago)
    month_prod = total_grams(p for p in productions if p.date >= month_start)

    today_purch = sum(p.amount for p in purchases if p.purchase_date == today)
    yesterday_purch = sum(p.amount for p in purchases if p.purchase_date == yesterday)

    vs_yesterday, vs_yesterday_dir = percent_change(today_prod, yesterday_prod)
    vs_last_week, vs_last_week_dir = percent_change(week_prod, last_week_prod)
    purch_change, purch_dir = percent_change(today_purch, yesterday_purch)

    return {
        "today": to_iso_date(today),
        "today_production": today_prod,
        "yesterday_production": yesterday_prod,
        "week_production": week_prod,
        "last_week_production": last_week_prod,
        "month_production": month_prod,
        "working_days_this_month": working_days(productions, month_start),
        "today_purchases": today_purch,
        "yesterday_purchases": yesterday_purch,
        "active_workers": count_active_workers(workers),
        "daily_target": daily_target,
        "target_progress": target_progress(today_prod, daily_target),
        "comparisons": {
            "vs_yesterday": {"value": vs_yesterday, "type": vs_yesterday_dir},
            "vs_last_week": {"value": vs_last_week, "type": vs_last_week_dir},
            "purchases_vs_yesterday": {"value": purch_change, "type": purch_dir},
        },
    }


# ---------------------------------------------------------------------------
# Fetch layer
# ---------------------------------------------------------------------------

def production_report(*, site_id: int, start, end) -> dict:
    start_d, end_d = _parse_day(start, "start"), _parse_day(end, "end")
    if start_d > end_d:
        raise ReportError("start must not be after end")

    site = require_record(Site, site_id)
    productions = production_service.productions_between(site_id, start_d, end_d)
    workers = worker_service.list_workers(site_id)
    items = inventory_service.list_items(site_id)

    report = summarize_production(productions, workers, items, start=start_d, end=end_d)
    report["site"] = site.to_dict()
    return report


# Display toggles that must all be on for a comparison to be returned
_COMPARISON_TOGGLES = {
    "vs_yesterday": ("show_vs_yesterday", "show_production_comparison"),
    "vs_last_week": ("show_vs_last_week", "show_production_comparison"),
    "purchases_vs_yesterday": ("show_purchase_comparison",),
}


def dashboard(*, site_id: int, today: date | None = None) -> dict:
    site = require_record(Site, site_id)
    today = _parse_day(today, "today") if today else local_today()

    since = min(today.replace(day=1), today - timedelta(days=14))
    summary = summarize_dashboard(
        production_service.productions_between(site_id, since, today),
        purchase_service.purchases_between(site_id, today - timedelta(days=1), today),
        worker_service.list_workers(site_id),
        today=today,
        daily_target=current_app.config.get("DAILY_PRODUCTION_TARGET_GRAMS", 300),
    )

    settings = settings_service.get_settings()
    summary["comparisons"] = {
        key: value
        for key, value in summary["comparisons"].items()
        if all(getattr(settings, toggle) for toggle in _COMPARISON_TOGGLES[key])
    }
    if not settings.show_working_days:
        summary.pop("working_days_this_month")
    summary["site"] = site.to_dict()
    return summary
