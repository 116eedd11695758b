from app.models.user import User
from app.models.session import UserSession
from app.models.workout import Workout, Exercise
from app.models.goal import Goal
from app.models.activity import Activity

__all__ = [
    "User", "UserSession",
    "Workout", "Exercise",
    "Goal",
    "Activity",
]
