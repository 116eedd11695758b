from datetime import date
from enum import Enum
from typing import List

from app.schemas.base import CamelModel


class ReportPeriod(str, Enum):
    week = "week"
    month = "month"


class MetricTrend(CamelModel):
    current: float
    previous: float
    change: int


class ReportTotals(CamelModel):
    steps: MetricTrend
    calories: MetricTrend
    distance: MetricTrend
    workouts: MetricTrend


class DailyPoint(CamelModel):
    date: date
    steps: int
    calories: int
    distance: float


class GoalProgress(CamelModel):
    id: int
    title: str
    current: float
    target: float
    unit: str
    inverse: bool
    color: str
    percent: int
    achieved: bool


class ReportResponse(CamelModel):
    period: ReportPeriod
    start: date
    end: date
    previous_start: date
    previous_end: date
    totals: ReportTotals
    average_daily_steps: int
    average_daily_calories: int
    daily: List[DailyPoint]
    goals: List[GoalProgress]
    completed_goals: int
