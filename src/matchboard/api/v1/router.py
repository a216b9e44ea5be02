from fastapi import APIRouter

from src.matchboard.api.v1 import nominations, projects, tasks, tendering

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(tendering.router)
api_router.include_router(nominations.router)
