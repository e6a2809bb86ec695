"""
NPTEL course progress.
"""
import math


def progress_color(percentage: int) -> str:
    if percentage >= 95:
        return "red"
    if percentage >= 80:
        return "amber"
    return "green"


def course_progress(total_weeks: int, weeks: list[dict]) -> dict:
    """
    Summarise a course from its week rows.
    The percentage is against the course's declared `total_weeks`, not the
    number of week rows, since weeks are created lazily.
    """
    completed = sum(1 for w in weeks if w.get("status") == "Completed")
    in_progress = sum(1 for w in weeks if w.get("status") == "In Progress")
    pct = int(math.floor(completed / total_weeks * 100 + 0.5)) if total_weeks > 0 else 0
    return {
        "completed": completed,
        "in_progress": in_progress,
        "total": total_weeks,
        "percentage": pct,
        "color": progress_color(pct),
    }
