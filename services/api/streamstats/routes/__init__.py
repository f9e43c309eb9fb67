"""API routes."""

from fastapi import APIRouter

from streamstats.routes import statistics

api_router = APIRouter()

# Statistics endpoints (user / livestream rankings)
api_router.include_router(statistics.router, prefix="/api", tags=["statistics"])
