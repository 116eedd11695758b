from typing import List

from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_user, get_goal_repository
from app.core.exceptions import ensure_owner
from app.models.goal import Goal
from app.models.user import User
from app.repositories.goal_repository import GoalRepository
from app.schemas.base import SuccessResponse
from app.schemas.goal import GoalCreate, GoalProgressUpdate, GoalRead
from app.services.goal_service import serialize_goal

router = APIRouter(tags=["goals"])


@router.get("", response_model=List[GoalRead])
async def list_goals(
    current_user: User = Depends(get_current_user),
    repo: GoalRepository = Depends(get_goal_repository),
):
    goals = await repo.list_for_user(current_user.id)
    return [serialize_goal(goal) for goal in goals]


@router.post("", response_model=GoalRead)
async def create_goal(
    data: GoalCreate,
    current_user: User = Depends(get_current_user),
    repo: GoalRepository = Depends(get_goal_repository),
):
    goal = Goal(user_id=current_user.id, **data.model_dump())
    return serialize_goal(await repo.create(goal))


@router.patch("/{goal_id}", response_model=GoalRead)
async def update_goal_progress(
    goal_id: int,
    data: GoalProgressUpdate,
    current_user: User = Depends(get_current_user),
    repo: GoalRepository = Depends(get_goal_repository),
):
    """Обновление прогресса: меняется только current"""
    goal = ensure_owner(await repo.get_by_id(goal_id), current_user.id, "Goal")
    return serialize_goal(await repo.update_current(goal, data.current))


@router.delete("/{goal_id}", response_model=SuccessResponse)
async def delete_goal(
    goal_id: int,
    current_user: User = Depends(get_current_user),
    repo: GoalRepository = Depends(get_goal_repository),
):
    goal = ensure_owner(await repo.get_by_id(goal_id), current_user.id, "Goal")
    await repo.delete(goal)
    return SuccessResponse()
