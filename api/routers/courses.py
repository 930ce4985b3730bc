"""Course API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from database.db_manager import DatabaseManager
from database.exceptions import DuplicateError, IntegrityError
from api.dependencies import get_db
from api.schemas import CourseSummaryResponse
from models import Course, Hole

router = APIRouter()


class HoleInput(BaseModel):
    number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=5)
    handicap: Optional[int] = Field(None, ge=1, le=18)
    yardages: Dict[str, int] = {}


class CreateCourseRequest(BaseModel):
    name: str
    location: Optional[str] = None
    description: Optional[str] = None
    holes: List[HoleInput] = []


def _summarize_course(c: Course) -> CourseSummaryResponse:
    return CourseSummaryResponse(
        id=c.id,
        name=c.name,
        location=c.location,
        par=c.total_par,
        total_holes=len(c.holes),
    )


@router.get("", response_model=List[CourseSummaryResponse])
async def list_courses(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: DatabaseManager = Depends(get_db),
):
    courses = await db.courses.list_courses(limit=limit, offset=offset)
    return [_summarize_course(c) for c in courses]


@router.get("/search", response_model=List[CourseSummaryResponse])
async def search_courses(
    q: str = Query(..., min_length=1),
    db: DatabaseManager = Depends(get_db),
):
    courses = await db.courses.search_courses(q)
    return [_summarize_course(c) for c in courses]


@router.get("/{course_id}", response_model=Course)
async def get_course(course_id: str, db: DatabaseManager = Depends(get_db)):
    course = await db.courses.get_course(course_id)
    if not course:
        raise HTTPException(404, "Course not found")
    return course


@router.post("", response_model=Course, status_code=201)
async def create_course(req: CreateCourseRequest, db: DatabaseManager = Depends(get_db)):
    try:
        holes = [
            Hole(number=h.number, par=h.par, handicap=h.handicap, yardages=h.yardages)
            for h in req.holes
        ]
        course = Course(name=req.name, location=req.location, description=req.description, holes=holes)
    except ValueError as e:
        raise HTTPException(422, str(e))
    try:
        return await db.courses.create_course(course)
    except DuplicateError:
        raise HTTPException(409, "Course has duplicate hole numbers")
    except IntegrityError as e:
        raise HTTPException(400, str(e))


@router.delete("/{course_id}", status_code=204)
async def delete_course(course_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        deleted = await db.courses.delete_course(course_id)
    except IntegrityError as e:
        raise HTTPException(409, str(e))
    if not deleted:
        raise HTTPException(404, "Course not found")
