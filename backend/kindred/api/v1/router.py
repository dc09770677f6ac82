from fastapi import APIRouter

from kindred.api.v1.endpoints import admin_map, auth, health, password

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(password.router)
api_router.include_router(admin_map.router)
