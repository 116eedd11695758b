from datetime import date

from pydantic import Field

from app.schemas.base import MAX_INT, CamelModel


class ActivityUpsert(CamelModel):
    date: date
    steps: int = Field(default=0, ge=0, le=MAX_INT)
    calories: int = Field(default=0, ge=0, le=MAX_INT)
    distance: float = Field(default=0, ge=0, allow_inf_nan=False)
    active_time: int = Field(default=0, ge=0, le=MAX_INT)


class ActivityRead(CamelModel):
    id: int
    user_id: int
    date: date
    steps: int
    calories: int
    distance: float
    active_time: int
