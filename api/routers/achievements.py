"""Achievement catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List
from database.db_manager import DatabaseManager
from api.dependencies import get_db
from models import Achievement

router = APIRouter()


@router.get("", response_model=List[Achievement])
async def list_achievements(
    include_inactive: bool = Query(False),
    db: DatabaseManager = Depends(get_db),
):
    return await db.achievements.list_achievements(active_only=not include_inactive)


@router.get("/{achievement_id}", response_model=Achievement)
async def get_achievement(achievement_id: str, db: DatabaseManager = Depends(get_db)):
    achievement = await db.achievements.get_achievement(achievement_id)
    if not achievement:
        raise HTTPException(404, "Achievement not found")
    return achievement


@router.post("", response_model=Achievement, status_code=201)
async def create_achievement(req: Achievement, db: DatabaseManager = Depends(get_db)):
    return await db.achievements.create_achievement(req)
