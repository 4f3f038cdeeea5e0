from fastapi import APIRouter

from src.research_notes.api.v1 import notes, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(notes.router)
