"""
Модульные тесты агрегации отчётов.

Покрываемые функции:
- period_bounds: неделя пн–вс, календарный месяц, переход через год
- build_report: суммы, изменения, дневной ряд, средние, прогресс целей
- ReportService.summary: какие окна запрашиваются у репозиториев

Расчёт не зависит от БД: записи — несохранённые ORM-объекты.
"""

import pytest
from datetime import date
from unittest.mock import AsyncMock

from app.models.activity import Activity
from app.models.goal import Goal
from app.repositories.activity_repository import ActivityRepository
from app.repositories.goal_repository import GoalRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.report import ReportPeriod
from app.services.report_service import ReportService, build_report, period_bounds

pytestmark = pytest.mark.unit


def make_activity(day: date, steps=0, calories=0, distance=0.0) -> Activity:
    return Activity(user_id=1, date=day, steps=steps, calories=calories, distance=distance, active_time=0)


def make_goal(goal_id: int, current: float, target: float, inverse: bool = False) -> Goal:
    return Goal(
        id=goal_id, user_id=1, title=f"Goal {goal_id}", current=current, target=target,
        unit="km", inverse=inverse, icon_name="target", color="bg-primary",
    )


# ---------------------------------------------------------------------------
# period_bounds
# ---------------------------------------------------------------------------

def test_week_bounds_monday_to_sunday():
    # 2024-01-10 — среда
    (start, end), (prev_start, prev_end) = period_bounds(ReportPeriod.week, date(2024, 1, 10))
    assert start == date(2024, 1, 8)
    assert end == date(2024, 1, 14)
    assert prev_start == date(2024, 1, 1)
    assert prev_end == date(2024, 1, 7)


def test_week_bounds_on_sunday():
    (start, end), _ = period_bounds(ReportPeriod.week, date(2024, 1, 14))
    assert start == date(2024, 1, 8)
    assert end == date(2024, 1, 14)


def test_month_bounds_leap_february():
    (start, end), (prev_start, prev_end) = period_bounds(ReportPeriod.month, date(2024, 2, 15))
    assert (start, end) == (date(2024, 2, 1), date(2024, 2, 29))
    assert (prev_start, prev_end) == (date(2024, 1, 1), date(2024, 1, 31))


def test_month_bounds_across_year():
    _, (prev_start, prev_end) = period_bounds(ReportPeriod.month, date(2024, 1, 3))
    assert (prev_start, prev_end) == (date(2023, 12, 1), date(2023, 12, 31))


# ---------------------------------------------------------------------------
# build_report
# ---------------------------------------------------------------------------

def test_build_report_totals_and_changes():
    window, previous = period_bounds(ReportPeriod.week, date(2024, 1, 10))
    current = [
        make_activity(date(2024, 1, 8), steps=6000, calories=300, distance=4.0),
        make_activity(date(2024, 1, 9), steps=9000, calories=500, distance=6.5),
    ]
    before = [make_activity(date(2024, 1, 2), steps=10000, calories=0, distance=0)]

    report = build_report(ReportPeriod.week, window, previous, current, before, 3, 0, [])

    assert report.totals.steps.current == 15000
    assert report.totals.steps.previous == 10000
    assert report.totals.steps.change == 50
    assert report.totals.calories.change == 100
    assert report.totals.distance.current == pytest.approx(10.5)
    assert report.totals.workouts.current == 3
    assert report.totals.workouts.change == 100
    assert report.average_daily_steps == 7500
    assert report.average_daily_calories == 400


def test_build_report_daily_series_fills_missing_days():
    window, previous = period_bounds(ReportPeriod.week, date(2024, 1, 10))
    current = [make_activity(date(2024, 1, 9), steps=1234)]

    report = build_report(ReportPeriod.week, window, previous, current, [], 0, 0, [])

    assert len(report.daily) == 7
    assert report.daily[0].date == date(2024, 1, 8)
    assert report.daily[0].steps == 0
    assert report.daily[1].steps == 1234


def test_build_report_empty_periods():
    window, previous = period_bounds(ReportPeriod.month, date(2024, 4, 10))
    report = build_report(ReportPeriod.month, window, previous, [], [], 0, 0, [])

    assert report.totals.steps.change == 0
    assert report.average_daily_steps == 0
    assert len(report.daily) == 30


def test_build_report_goal_progress_and_completed_count():
    window, previous = period_bounds(ReportPeriod.week, date(2024, 1, 10))
    goals = [
        make_goal(1, current=50, target=100),
        make_goal(2, current=150, target=100),
        make_goal(3, current=70, target=75, inverse=True),
        make_goal(4, current=80, target=75, inverse=True),
    ]

    report = build_report(ReportPeriod.week, window, previous, [], [], 0, 0, goals)

    assert [g.percent for g in report.goals] == [50, 100, 100, 94]
    assert report.completed_goals == 2


def test_build_report_serializes_camel_case():
    window, previous = period_bounds(ReportPeriod.week, date(2024, 1, 10))
    report = build_report(ReportPeriod.week, window, previous, [], [], 0, 0, [])

    data = report.model_dump(by_alias=True)
    assert "previousStart" in data
    assert "averageDailySteps" in data
    assert "completedGoals" in data


# ---------------------------------------------------------------------------
# ReportService.summary
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_summary_queries_both_windows():
    activities = AsyncMock(spec=ActivityRepository)
    workouts = AsyncMock(spec=WorkoutRepository)
    goals = AsyncMock(spec=GoalRepository)
    activities.list_between.return_value = []
    workouts.count_between.side_effect = [2, 1]
    goals.list_for_user.return_value = []

    service = ReportService(activities, workouts, goals)
    report = await service.summary(7, ReportPeriod.week, date(2024, 1, 10))

    activities.list_between.assert_any_await(7, date(2024, 1, 8), date(2024, 1, 14))
    activities.list_between.assert_any_await(7, date(2024, 1, 1), date(2024, 1, 7))
    goals.list_for_user.assert_awaited_once_with(7)
    assert report.totals.workouts.current == 2
    assert report.totals.workouts.previous == 1
    assert report.totals.workouts.change == 100
