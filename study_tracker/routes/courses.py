from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from study_tracker.models import Course
from study_tracker.services.entry_form import EntryForm
from study_tracker.services.ledger import Ledger, format_duration

router = APIRouter(prefix="/api", tags=["courses"])


# ------------------------------------------------------------------
# Request bodies
# ------------------------------------------------------------------


class EntryCreate(BaseModel):
    course: str = ""
    hours: str = ""
    minutes: str = ""
    note: str = ""


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


def _course_view(index: int, course: Course) -> dict:
    total = course.total_time
    return {
        "index": index,
        "name": course.name,
        "total_time": total,
        "total_display": format_duration(total),
        "sessions": [
            {
                "index": j,
                "time": s.time,
                "time_display": format_duration(s.time),
                "note": s.note,
            }
            for j, s in enumerate(course.sessions)
        ],
    }


def _snapshot(ledger: Ledger) -> list[dict]:
    return [_course_view(i, c) for i, c in enumerate(ledger.courses)]


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------


@router.get("/courses")
async def list_courses(ledger: Ledger = Depends(get_ledger)) -> list[dict]:
    return _snapshot(ledger)


@router.post("/entries")
async def add_entry(body: EntryCreate, ledger: Ledger = Depends(get_ledger)) -> dict:
    """Log a session for a course, creating the course if it is new."""
    form = EntryForm(**body.model_dump())
    added = form.submit(ledger)
    return {"added": added, "courses": _snapshot(ledger)}


@router.delete("/courses/{course_index}/sessions/{session_index}")
async def delete_session(
    course_index: int, session_index: int, ledger: Ledger = Depends(get_ledger)
) -> dict:
    removed = ledger.delete_session(course_index, session_index)
    return {"removed": removed, "courses": _snapshot(ledger)}


@router.delete("/courses/{course_index}")
async def delete_course(course_index: int, ledger: Ledger = Depends(get_ledger)) -> dict:
    removed = ledger.delete_course(course_index)
    return {"removed": removed, "courses": _snapshot(ledger)}


@router.get("/format-duration")
async def format_minutes(minutes: int = Query(..., ge=0)) -> dict:
    return {"minutes": minutes, "display": format_duration(minutes)}
