"""Aggregate API v1 router."""

from fastapi import APIRouter

from aus_lotto.api.v1.endpoints import games

api_router = APIRouter()

api_router.include_router(games.router, prefix="/games", tags=["games"])
