from fastapi import APIRouter
from app.api.v2 import activity_logs

api_router = APIRouter()

api_router.include_router(activity_logs.router, prefix="/activity-logs", tags=["activity-logs"])
