from app.models.goal import Goal
from app.schemas.goal import GoalRead
from app.services.progress import goal_progress_percent, round_half_up


def serialize_goal(goal: Goal) -> GoalRead:
    percent = goal_progress_percent(goal.current, goal.target, goal.inverse)
    return GoalRead(
        id=goal.id,
        user_id=goal.user_id,
        title=goal.title,
        current=goal.current,
        target=goal.target,
        unit=goal.unit,
        inverse=goal.inverse,
        icon_name=goal.icon_name,
        color=goal.color,
        created_at=goal.created_at,
        percent=round_half_up(percent),
        achieved=percent >= 100,
    )
