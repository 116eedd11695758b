from datetime import datetime

from pydantic import Field, model_validator

from app.schemas.base import CamelModel


class GoalCreate(CamelModel):
    title: str = Field(min_length=1)
    current: float = Field(ge=0, allow_inf_nan=False)
    target: float = Field(ge=0, allow_inf_nan=False)
    unit: str
    icon_name: str
    color: str
    inverse: bool = False

    @model_validator(mode="after")
    def check_target(self):
        if not self.inverse and self.target <= 0:
            raise ValueError("target must be greater than 0")
        return self


class GoalProgressUpdate(CamelModel):
    # strict: строка "5" или true не принимаются как число
    current: float = Field(ge=0, strict=True, allow_inf_nan=False)


class GoalRead(CamelModel):
    id: int
    user_id: int
    title: str
    current: float
    target: float
    unit: str
    inverse: bool
    icon_name: str
    color: str
    created_at: datetime
    percent: int
    achieved: bool
