from fastapi import APIRouter

from src.timetrack.api.v1 import account, auth, client, profile, report, task, time

api_router = APIRouter(prefix="/api")
api_router.include_router(account.router)
api_router.include_router(auth.router)
api_router.include_router(profile.router)
api_router.include_router(client.router)
api_router.include_router(task.router)
api_router.include_router(time.router)
api_router.include_router(report.router)
