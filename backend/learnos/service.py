"""
Per-user results: reads rows, validates them, runs the engine.
"""
import logging
from datetime import datetime
from typing import Any

from .config import get_settings
from .db import (
    get_profile, get_profiles, get_session_dates, get_sessions_between,
    get_friend_ids, get_nptel_courses, get_nptel_weeks,
)
from .engine.streak import compute_streak, longest_streak, is_streak_at_risk
from .engine.dashboard import (
    week_start, month_start, weekly_heatmap, category_minutes,
    usefulness_breakdown, today_summary, semester_progress, weekly_leaderboard,
)
from .engine.nptel import course_progress
from .models import Session, Profile, NptelCourse, NptelWeek, parse_rows, parse_session_dates

logger = logging.getLogger(__name__)


def local_now(now: datetime | None = None) -> datetime:
    """Current time in the configured zone; aware inputs are converted."""
    tz = get_settings().timezone
    if now is None:
        return datetime.now(tz)
    return now.astimezone(tz) if now.tzinfo else now


def get_streak_for_user(db, user_id: str, now: datetime | None = None) -> dict[str, Any]:
    settings = get_settings()
    now = local_now(now)
    today = now.date()

    dates = parse_session_dates(get_session_dates(db, user_id), settings.timezone)
    if dates and max(dates) > today:
        logger.debug("User %s... has sessions dated after %s; check client time zone", user_id[:8], today)

    current = compute_streak(dates, today)
    sessions_today = sum(1 for d in dates if d == today)

    return {
        "user_id": user_id,
        "current_streak": current,
        "longest_streak": longest_streak(dates),
        "last_session_date": max(dates).isoformat() if dates else None,
        "sessions_today": sessions_today,
        "at_risk": is_streak_at_risk(sessions_today, now, settings.streak_risk_hour),
    }


def build_dashboard(db, user_id: str, now: datetime | None = None) -> dict[str, Any]:
    now = local_now(now)
    today = now.date()
    week_from = week_start(today)
    month_from = month_start(today)

    rows = get_sessions_between(db, [user_id], min(week_from, month_from), today)
    sessions = [s.model_dump() for s in parse_rows(Session, rows)]
    week_sessions = [s for s in sessions if s["date"] >= week_from]
    month_sessions = [s for s in sessions if s["date"] >= month_from]

    profile_row = get_profile(db, user_id)
    semester = None
    if profile_row:
        profile = parse_rows(Profile, [profile_row])[0]
        if profile.semester is not None:
            semester = semester_progress(profile.semester_start, profile.semester_end, today)

    return {
        "streak": get_streak_for_user(db, user_id, now),
        "today": today_summary(month_sessions, today),
        "heatmap": weekly_heatmap(week_sessions, today),
        "categories": category_minutes(week_sessions),
        "usefulness": {
            "week": usefulness_breakdown(week_sessions),
            "month": usefulness_breakdown(month_sessions),
        },
        "semester": semester,
        "nptel": build_nptel_progress(db, user_id),
    }


def build_nptel_progress(db, user_id: str) -> list[dict[str, Any]]:
    courses = parse_rows(NptelCourse, get_nptel_courses(db, user_id))
    weeks = parse_rows(NptelWeek, get_nptel_weeks(db, [c.id for c in courses]))

    result = []
    for course in courses:
        course_weeks = [w.model_dump() for w in weeks if w.course_id == course.id]
        result.append({
            "course_id": course.id,
            "course_name": course.course_name,
            **course_progress(course.total_weeks, course_weeks),
        })
    return result


def build_leaderboard(db, user_id: str, now: datetime | None = None) -> list[dict[str, Any]]:
    """This week's minutes for the user and their accepted friends."""
    today = local_now(now).date()
    user_ids = [*get_friend_ids(db, user_id), user_id]

    rows = get_sessions_between(db, user_ids, week_start(today), today)
    sessions = [s.model_dump() for s in parse_rows(Session, rows)]
    profiles = [p.model_dump() for p in parse_rows(Profile, get_profiles(db, user_ids))]

    board = weekly_leaderboard(sessions, profiles)
    for row in board:
        row["is_me"] = row["id"] == user_id
    return board
