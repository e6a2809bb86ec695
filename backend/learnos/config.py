import os
from dataclasses import dataclass
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(frozen=True)
class Settings:
    timezone: ZoneInfo
    streak_risk_hour: int
    log_level: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    tz_name = os.environ.get("LEARNOS_TIMEZONE", "UTC")
    try:
        tz = ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        raise ValueError(f"LEARNOS_TIMEZONE is not a known time zone: {tz_name!r}")

    risk_hour = int(os.environ.get("LEARNOS_STREAK_RISK_HOUR", "21"))
    if not 0 <= risk_hour <= 23:
        raise ValueError("LEARNOS_STREAK_RISK_HOUR must be between 0 and 23")

    return Settings(
        timezone=tz,
        streak_risk_hour=risk_hour,
        log_level=os.environ.get("LEARNOS_LOG_LEVEL", "INFO").upper(),
    )
