"""CRUD operations for the courses schema (courses, holes)."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import Course, Hole
from database.converters import course_from_rows, hole_from_row, hole_to_row
from database.exceptions import DuplicateError, IntegrityError


class CourseRepositoryDB:
    """Async CRUD for courses and their holes."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _assemble(self, conn, course_row) -> Course:
        """Build a full Course model from a course row + holes."""
        hole_rows = await conn.fetch(
            "SELECT * FROM courses.holes WHERE course_id = $1 ORDER BY hole_number",
            course_row["id"],
        )
        return course_from_rows(course_row, hole_rows)

    # ================================================================
    # Read
    # ================================================================

    async def get_course(self, course_id: str) -> Optional[Course]:
        """Get a fully-populated Course by ID."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM courses.courses WHERE id = $1",
                UUID(course_id),
            )
            if not row:
                return None
            return await self._assemble(conn, row)

    async def list_courses(self, *, limit: int = 50, offset: int = 0) -> List[Course]:
        """List courses alphabetically."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM courses.courses
                   ORDER BY name
                   LIMIT $1 OFFSET $2""",
                limit, offset,
            )
            return [await self._assemble(conn, r) for r in rows]

    async def search_courses(self, term: str, *, limit: int = 20) -> List[Course]:
        """Case-insensitive partial match on name or location."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM courses.courses
                   WHERE name ILIKE $1 OR location ILIKE $1
                   ORDER BY name
                   LIMIT $2""",
                f"%{term}%", limit,
            )
            return [await self._assemble(conn, r) for r in rows]

    async def get_hole(self, course_id: str, hole_number: int) -> Optional[Hole]:
        """Get one hole of a course."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """SELECT * FROM courses.holes
                   WHERE course_id = $1 AND hole_number = $2""",
                UUID(course_id), hole_number,
            )
            return hole_from_row(row) if row else None

    # ================================================================
    # Create
    # ================================================================

    async def create_course(self, course: Course) -> Course:
        """Create a course with its holes in a transaction."""
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        """INSERT INTO courses.courses (name, location, description)
                           VALUES ($1, $2, $3) RETURNING *""",
                        course.name, course.location, course.description,
                    )
                    if course.holes:
                        await conn.executemany(
                            """INSERT INTO courses.holes
                               (course_id, hole_number, par, handicap, yardages)
                               VALUES ($1, $2, $3, $4, $5)""",
                            [hole_to_row(h, row["id"]) for h in course.holes],
                        )
                    return await self._assemble(conn, row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(str(e)) from e
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(str(e)) from e

    # ================================================================
    # Delete
    # ================================================================

    async def delete_course(self, course_id: str) -> bool:
        """Delete a course and its holes (CASCADE). Returns True if deleted."""
        try:
            async with self._pool.acquire() as conn:
                result = await conn.execute(
                    "DELETE FROM courses.courses WHERE id = $1", UUID(course_id)
                )
                return result == "DELETE 1"
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Course {course_id} is used by a tournament") from e
