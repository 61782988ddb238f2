# lan_share/backend/app/api/router.py
from fastapi import APIRouter

from lan_share.backend.app.api.files import router as files_router
from lan_share.backend.app.api.system import router as system_router

api_router = APIRouter()
api_router.include_router(system_router.router)
api_router.include_router(files_router.router)
