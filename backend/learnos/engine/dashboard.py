"""
Dashboard aggregations — pure functions over session rows, no DB access.

Session rows are plain dicts as returned by Supabase (or `Session.model_dump()`),
with `date` already a `datetime.date`.
"""
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any


@dataclass
class Category:
    value: str
    label: str
    color: str


CATEGORIES: list[Category] = [
    Category("DSA",             "DSA",               "#3B82F6"),
    Category("Course/Learning", "Course / Learning", "#8B5CF6"),
    Category("Projects",        "Projects",          "#10B981"),
    Category("College Work",    "College Work",      "#F59E0B"),
    Category("Other",           "Other",             "#6B7280"),
]

CATEGORY_BY_VALUE: dict[str, Category] = {c.value: c for c in CATEGORIES}

DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
OPEN_STATUSES = ("In Progress", "Paused")
DEFAULT_COLOR = "#6B7280"


def category_color(value: str) -> str:
    cat = CATEGORY_BY_VALUE.get(value)
    return cat.color if cat else DEFAULT_COLOR


def _minutes(session: dict) -> int:
    return session.get("duration_minutes") or 0


def _percent(part: int | float, whole: int | float) -> int:
    # JS Math.round semantics: halves round up
    return int(math.floor(part / whole * 100 + 0.5)) if whole > 0 else 0


def week_start(today: date) -> date:
    """Monday of the week containing `today`."""
    return today - timedelta(days=today.weekday())


def month_start(today: date) -> date:
    return today.replace(day=1)


def week_days(today: date) -> list[dict[str, Any]]:
    monday = week_start(today)
    days = []
    for i, label in enumerate(DAY_LABELS):
        d = monday + timedelta(days=i)
        days.append({"label": label, "date": d, "is_today": d == today})
    return days


def minutes_by_date(sessions: list[dict]) -> dict[date, int]:
    totals: dict[date, int] = {}
    for s in sessions:
        totals[s["date"]] = totals.get(s["date"], 0) + _minutes(s)
    return totals


def intensity(minutes: int) -> int:
    """Heatmap bucket: 0 none, 1 up to 30m, 2 up to an hour, 3 beyond."""
    if minutes <= 0:
        return 0
    if minutes <= 30:
        return 1
    if minutes <= 60:
        return 2
    return 3


def weekly_heatmap(sessions: list[dict], today: date) -> list[dict[str, Any]]:
    totals = minutes_by_date(sessions)
    cells = []
    for day in week_days(today):
        mins = totals.get(day["date"], 0)
        cells.append({**day, "minutes": mins, "intensity": intensity(mins)})
    return cells


def category_minutes(sessions: list[dict]) -> list[dict[str, Any]]:
    """Minutes per category in display order; empty categories are dropped."""
    totals: dict[str, int] = {}
    for s in sessions:
        totals[s["category"]] = totals.get(s["category"], 0) + _minutes(s)
    return [
        {"category": c.value, "label": c.label, "color": c.color, "minutes": totals[c.value]}
        for c in CATEGORIES
        if totals.get(c.value, 0) > 0
    ]


def usefulness_breakdown(sessions: list[dict]) -> dict[str, Any]:
    total = len(sessions)
    useful = sum(1 for s in sessions if s.get("was_useful"))

    by_category = []
    for c in CATEGORIES:
        cat_sessions = [s for s in sessions if s["category"] == c.value]
        if not cat_sessions:
            continue
        cat_useful = sum(1 for s in cat_sessions if s.get("was_useful"))
        by_category.append({
            "category": c.value,
            "label": c.label,
            "color": c.color,
            "useful": cat_useful,
            "total": len(cat_sessions),
            "percentage": _percent(cat_useful, len(cat_sessions)),
        })

    return {
        "total": total,
        "useful": useful,
        "not_useful": total - useful,
        "percentage": _percent(useful, total),
        "by_category": by_category,
    }


def today_summary(sessions: list[dict], today: date) -> dict[str, Any]:
    """`sessions` is the month so far; open ones are listed newest first."""
    todays = [s for s in sessions if s["date"] == today]
    total_minutes = sum(_minutes(s) for s in todays)
    return {
        "count": len(todays),
        "total_minutes": total_minutes,
        "hours": total_minutes // 60,
        "minutes": total_minutes % 60,
        "open_sessions": sorted(
            (s for s in sessions if s.get("status") in OPEN_STATUSES),
            key=lambda s: s["date"],
            reverse=True,
        ),
    }


def semester_progress(start: date | None, end: date | None, today: date) -> dict[str, Any] | None:
    """
    Position of `today` within the semester.
    Returns None when the profile has no semester dates.
    """
    if start is None or end is None:
        return None

    total_days = (end - start).days
    total_weeks = math.ceil(total_days / 7)

    if today < start:
        return {"percentage": 0, "current_week": 0, "total_weeks": total_weeks, "done": False, "color": "green"}
    # any time on the end date already counts as done
    if today >= end:
        return {"percentage": 100, "current_week": total_weeks, "total_weeks": total_weeks, "done": True, "color": "red"}

    elapsed = (today - start).days
    percentage = _percent(elapsed, total_days)

    color = "green"
    if 80 <= percentage <= 95:
        color = "amber"
    elif percentage > 95:
        color = "red"

    return {
        "percentage": percentage,
        "current_week": elapsed // 7 + 1,
        "total_weeks": total_weeks,
        "done": False,
        "color": color,
    }


def weekly_leaderboard(sessions: list[dict], profiles: list[dict]) -> list[dict[str, Any]]:
    """Rank profiles by minutes logged; ties keep profile order."""
    minute_map: dict[str, int] = {}
    for s in sessions:
        minute_map[s["user_id"]] = minute_map.get(s["user_id"], 0) + _minutes(s)

    ranked = sorted(
        ({**p, "total_minutes": minute_map.get(p["id"], 0)} for p in profiles),
        key=lambda row: row["total_minutes"],
        reverse=True,
    )
    top = ranked[0]["total_minutes"] if ranked else 0
    for rank, row in enumerate(ranked, start=1):
        row["rank"] = rank
        row["percentage"] = _percent(row["total_minutes"], top)
    return ranked


def format_minutes(mins: int) -> str:
    if mins == 0:
        return "0m"
    h, m = divmod(mins, 60)
    if h == 0:
        return f"{m}m"
    if m == 0:
        return f"{h}h"
    return f"{h}h {m}m"
