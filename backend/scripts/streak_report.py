"""
Print a user's streak, dashboard summary and weekly leaderboard.

Read-only: nothing is written back to Supabase.

Usage:
    cd backend
    SUPABASE_URL=... SUPABASE_SERVICE_KEY=... python scripts/streak_report.py <user_id> [--json]

Or with a .env file:
    python scripts/streak_report.py <user_id>
"""
import json
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Add project root to path so we can import learnos without installing it
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from learnos.config import get_settings
from learnos.db import get_client
from learnos.engine.dashboard import format_minutes
from learnos.models import InvalidInput
from learnos.service import build_dashboard, build_leaderboard

logger = logging.getLogger("streak_report")


def print_report(dashboard: dict, leaderboard: list[dict]) -> None:
    streak = dashboard["streak"]
    print(f"\n🔥 Current streak: {streak['current_streak']} day(s)"
          f"  (longest {streak['longest_streak']})")
    if streak["current_streak"] == 0:
        print("   No active streak")
    if streak["at_risk"]:
        print("   ⚠️  Streak at risk! Nothing logged today yet.")

    today = dashboard["today"]
    print(f"\n  Today: {today['count']} session(s), {format_minutes(today['total_minutes'])}")
    for s in today["open_sessions"]:
        print(f"    • {s['title']} ({s['status']})")

    print("\n  This week:")
    for cell in dashboard["heatmap"]:
        marker = " ←" if cell["is_today"] else ""
        print(f"    {cell['label']} {cell['date'].isoformat()}  {format_minutes(cell['minutes']):>7}{marker}")

    if dashboard["categories"]:
        print("\n  By category:")
        for c in dashboard["categories"]:
            print(f"    {c['label']:<18} {format_minutes(c['minutes'])}")

    week = dashboard["usefulness"]["week"]
    print(f"\n  Useful sessions this week: {week['useful']}/{week['total']} ({week['percentage']}%)")

    semester = dashboard["semester"]
    if semester:
        if semester["done"]:
            print("\n  Semester: done")
        else:
            print(f"\n  Semester: week {semester['current_week']} of {semester['total_weeks']}"
                  f" ({semester['percentage']}%)")

    for course in dashboard["nptel"]:
        print(f"  NPTEL {course['course_name']}: {course['completed']}/{course['total']} weeks"
              f" ({course['percentage']}%)")

    if leaderboard:
        print("\n  Leaderboard (this week):")
        for row in leaderboard:
            name = row.get("full_name") or row.get("email") or row["id"][:8]
            me = " (you)" if row["is_me"] else ""
            print(f"    {row['rank']:>2}. {name}{me}  {format_minutes(row['total_minutes'])}")
    print()


def run(user_id: str, as_json: bool = False) -> int:
    db = get_client()
    try:
        dashboard = build_dashboard(db, user_id)
        leaderboard = build_leaderboard(db, user_id)
    except InvalidInput as e:
        logger.error("Bad session data for %s...: %s", user_id[:8], e)
        return 1

    if as_json:
        print(json.dumps({"dashboard": dashboard, "leaderboard": leaderboard}, default=str, indent=2))
    else:
        print_report(dashboard, leaderboard)
    return 0


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if a != "--json"]
    as_json = "--json" in sys.argv

    if not args:
        print("Usage: python scripts/streak_report.py <user_id> [--json]")
        sys.exit(1)

    logging.basicConfig(level=get_settings().log_level, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(run(args[0], as_json=as_json))
