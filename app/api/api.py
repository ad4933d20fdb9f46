# app/api/api.py
"""
Main API router that combines all endpoint routers
"""
from fastapi import APIRouter

from app.api.endpoints import eightk

api_router = APIRouter()

# 8-K digest endpoints
api_router.include_router(eightk.router, prefix="/eightk", tags=["eightk"])
