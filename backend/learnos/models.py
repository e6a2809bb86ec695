from datetime import date, datetime, tzinfo
from typing import Any, Iterable, Literal, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

CategoryType = Literal["DSA", "Course/Learning", "Projects", "College Work", "Other"]
SessionStatus = Literal["In Progress", "Completed", "Paused"]
NptelStatus = Literal["Not Started", "In Progress", "Completed"]

Day = date  # Session.date shadows the type inside the class body

_DATE = TypeAdapter(date)
_DATETIME = TypeAdapter(datetime)


class InvalidInput(ValueError):
    """A value that cannot be normalized to a calendar day."""


def to_calendar_day(value: Any, tz: tzinfo | None = None) -> date:
    """
    Normalize a date, datetime or ISO string to a calendar day.

    Aware datetimes are converted to `tz` first so that every day is read in
    the same zone; naive ones are taken as already local.
    """
    try:
        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, date):
            return value
        elif isinstance(value, str):
            if "T" not in value and " " not in value.strip():
                return _DATE.validate_python(value.strip())
            dt = _DATETIME.validate_python(value.strip())
        else:
            raise ValueError(f"unsupported type {type(value).__name__}")
    except ValueError as e:
        # pydantic's ValidationError is a ValueError
        raise InvalidInput(f"not a calendar day: {value!r}") from e

    if tz is not None and dt.tzinfo is not None:
        dt = dt.astimezone(tz)
    return dt.date()


def parse_session_dates(values: Iterable[Any], tz: tzinfo | None = None) -> list[date]:
    return [to_calendar_day(v, tz) for v in values]


class Session(BaseModel):
    id: str
    user_id: str
    date: Day
    title: str = ""
    category: CategoryType = "Other"
    status: SessionStatus = "Completed"
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    was_useful: bool = False
    what_i_did: str = ""
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    next_action: Optional[str] = None
    next_action_done: Optional[bool] = None
    created_at: Optional[str] = None
    model_config = {"extra": "ignore"}

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return to_calendar_day(v)


class Profile(BaseModel):
    id: str
    email: str = ""
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    college: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[int] = None
    semester_start: Optional[date] = None
    semester_end: Optional[date] = None
    model_config = {"extra": "ignore"}

    @field_validator("semester_start", "semester_end", mode="before")
    @classmethod
    def validate_semester_dates(cls, v):
        return to_calendar_day(v) if v else None


class NptelWeek(BaseModel):
    course_id: str
    week_number: int = Field(ge=1)
    status: NptelStatus = "Not Started"
    model_config = {"extra": "ignore"}


class NptelCourse(BaseModel):
    id: str
    course_name: str
    instructor_name: Optional[str] = None
    course_provider: Optional[str] = None
    credits: Optional[int] = None
    total_weeks: int = Field(ge=0)
    model_config = {"extra": "ignore"}


def parse_rows(model: type[BaseModel], rows: list[dict]) -> list[BaseModel]:
    """Validate raw Supabase rows, surfacing bad rows as InvalidInput."""
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        raise InvalidInput(f"invalid {model.__name__} row: {e}") from e
