from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.api.v1.workouts import router as workouts_router
from app.api.v1.goals import router as goals_router
from app.api.v1.activities import router as activities_router
from app.api.v1.reports import router as reports_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(workouts_router, prefix="/workouts", tags=["workouts"])
api_router.include_router(goals_router, prefix="/goals", tags=["goals"])
api_router.include_router(activities_router, prefix="/activities", tags=["activities"])
api_router.include_router(reports_router, prefix="/reports", tags=["reports"])


@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
