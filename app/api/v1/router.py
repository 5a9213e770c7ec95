from fastapi import APIRouter

from app.api.routers import colonies, rentals, rooms, summaries

api_router = APIRouter()

api_router.include_router(colonies.router)
api_router.include_router(rooms.router)
api_router.include_router(rentals.router)
api_router.include_router(summaries.router)
