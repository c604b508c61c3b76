from fastapi import APIRouter

from src.ems.api.v1 import admin, auth, reference

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(reference.router)
api_router.include_router(admin.router)
