import os
import logging
from datetime import date
from functools import lru_cache
from supabase import create_client, Client

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000  # Supabase row limit per request


@lru_cache(maxsize=1)
def get_client() -> Client:
    url = os.environ["SUPABASE_URL"]
    key = os.environ["SUPABASE_SERVICE_KEY"]
    return create_client(url, key)


def _execute(query, what: str):
    try:
        return query.execute()
    except Exception as e:
        logger.error("Supabase query failed (%s): %s", what, e)
        raise


def get_profile(db: Client, user_id: str) -> dict | None:
    res = _execute(db.table("users").select("*").eq("id", user_id), "profile")
    return res.data[0] if res.data else None


def get_profiles(db: Client, user_ids: list[str]) -> list[dict]:
    if not user_ids:
        return []
    res = _execute(
        db.table("users").select("id, full_name, email, avatar_url, college, year").in_("id", user_ids),
        "profiles",
    )
    return res.data or []


def get_session_dates(db: Client, user_id: str) -> list[str]:
    """All session dates for a user, newest first, paged past the row limit."""
    dates: list[str] = []
    offset = 0
    while True:
        res = _execute(
            db.table("sessions")
            .select("date")
            .eq("user_id", user_id)
            .order("date", desc=True)
            .range(offset, offset + PAGE_SIZE - 1),
            "session dates",
        )
        batch = res.data or []
        dates.extend(row["date"] for row in batch)
        if len(batch) < PAGE_SIZE:
            break
        offset += PAGE_SIZE
    return dates


def get_sessions_between(db: Client, user_ids: list[str], start: date, end: date) -> list[dict]:
    res = _execute(
        db.table("sessions")
        .select("*")
        .in_("user_id", user_ids)
        .gte("date", start.isoformat())
        .lte("date", end.isoformat())
        .order("date", desc=True),
        "sessions in range",
    )
    return res.data or []


def get_friend_ids(db: Client, user_id: str) -> list[str]:
    res = _execute(
        db.table("friendships")
        .select("requester_id, addressee_id")
        .or_(f"requester_id.eq.{user_id},addressee_id.eq.{user_id}")
        .eq("status", "Accepted"),
        "friendships",
    )
    return [
        row["addressee_id"] if row["requester_id"] == user_id else row["requester_id"]
        for row in (res.data or [])
    ]


def get_nptel_courses(db: Client, user_id: str) -> list[dict]:
    res = _execute(db.table("nptel_courses").select("*").eq("user_id", user_id).order("created_at"), "nptel courses")
    return res.data or []


def get_nptel_weeks(db: Client, course_ids: list[str]) -> list[dict]:
    if not course_ids:
        return []
    res = _execute(db.table("nptel_weeks").select("*").in_("course_id", course_ids).order("week_number"), "nptel weeks")
    return res.data or []
