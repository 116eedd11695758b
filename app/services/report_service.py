import calendar
import logging
from datetime import date, timedelta
from typing import Dict, List, Sequence, Tuple

from app.models.activity import Activity
from app.models.goal import Goal
from app.repositories.activity_repository import ActivityRepository
from app.repositories.goal_repository import GoalRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.report import (
    DailyPoint,
    GoalProgress,
    MetricTrend,
    ReportPeriod,
    ReportResponse,
    ReportTotals,
)
from app.services.progress import goal_progress_percent, percent_change, round_half_up

logger = logging.getLogger(__name__)

Window = Tuple[date, date]


def period_bounds(period: ReportPeriod, today: date) -> Tuple[Window, Window]:
    """
    Текущий и предыдущий период.

    week: понедельник..воскресенье, предыдущий: семь дней до понедельника;
    month: календарный месяц, предыдущий: прошлый календарный месяц.
    """
    if period == ReportPeriod.week:
        start = today - timedelta(days=today.weekday())
        end = start + timedelta(days=6)
        return (start, end), (start - timedelta(days=7), start - timedelta(days=1))

    start = today.replace(day=1)
    end = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    previous_end = start - timedelta(days=1)
    previous_start = previous_end.replace(day=1)
    return (start, end), (previous_start, previous_end)


def _sum(activities: Sequence[Activity], field: str) -> float:
    return sum(getattr(a, field) or 0 for a in activities)


def _trend(current: float, previous: float) -> MetricTrend:
    return MetricTrend(current=current, previous=previous, change=percent_change(current, previous))


def _daily_series(activities: Sequence[Activity], start: date, end: date) -> List[DailyPoint]:
    by_date: Dict[date, Activity] = {a.date: a for a in activities}
    points = []
    day = start
    while day <= end:
        activity = by_date.get(day)
        points.append(DailyPoint(
            date=day,
            steps=activity.steps if activity else 0,
            calories=activity.calories if activity else 0,
            distance=activity.distance if activity else 0,
        ))
        day += timedelta(days=1)
    return points


def _goal_progress(goal: Goal) -> GoalProgress:
    percent = goal_progress_percent(goal.current, goal.target, goal.inverse)
    return GoalProgress(
        id=goal.id,
        title=goal.title,
        current=goal.current,
        target=goal.target,
        unit=goal.unit,
        inverse=goal.inverse,
        color=goal.color,
        percent=round_half_up(percent),
        achieved=percent >= 100,
    )


def build_report(
    period: ReportPeriod,
    window: Window,
    previous_window: Window,
    current_activities: Sequence[Activity],
    previous_activities: Sequence[Activity],
    current_workouts: int,
    previous_workouts: int,
    goals: Sequence[Goal],
) -> ReportResponse:
    """Чистая агрегация: все данные уже выбраны из БД."""
    start, end = window
    previous_start, previous_end = previous_window

    totals = ReportTotals(
        steps=_trend(_sum(current_activities, "steps"), _sum(previous_activities, "steps")),
        calories=_trend(_sum(current_activities, "calories"), _sum(previous_activities, "calories")),
        distance=_trend(_sum(current_activities, "distance"), _sum(previous_activities, "distance")),
        workouts=_trend(current_workouts, previous_workouts),
    )

    days_recorded = len(current_activities)
    goals_progress = [_goal_progress(goal) for goal in goals]

    return ReportResponse(
        period=period,
        start=start,
        end=end,
        previous_start=previous_start,
        previous_end=previous_end,
        totals=totals,
        average_daily_steps=round_half_up(totals.steps.current / days_recorded) if days_recorded else 0,
        average_daily_calories=round_half_up(totals.calories.current / days_recorded) if days_recorded else 0,
        daily=_daily_series(current_activities, start, end),
        goals=goals_progress,
        completed_goals=sum(1 for g in goals_progress if g.achieved),
    )


class ReportService:
    def __init__(
        self,
        activities: ActivityRepository,
        workouts: WorkoutRepository,
        goals: GoalRepository,
    ):
        self.activities = activities
        self.workouts = workouts
        self.goals = goals

    async def summary(self, user_id: int, period: ReportPeriod, today: date) -> ReportResponse:
        window, previous_window = period_bounds(period, today)

        current_activities = await self.activities.list_between(user_id, *window)
        previous_activities = await self.activities.list_between(user_id, *previous_window)
        current_workouts = await self.workouts.count_between(user_id, *window)
        previous_workouts = await self.workouts.count_between(user_id, *previous_window)
        goals = await self.goals.list_for_user(user_id)

        logger.debug(
            "Отчёт %s для пользователя %s: %s..%s", period.value, user_id, window[0], window[1]
        )
        return build_report(
            period,
            window,
            previous_window,
            current_activities,
            previous_activities,
            current_workouts,
            previous_workouts,
            goals,
        )
