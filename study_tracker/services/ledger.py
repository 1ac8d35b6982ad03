import dataclasses
import logging
from typing import Iterable

from study_tracker.models import Course, Session, parse_int
from study_tracker.services.storage import CourseStore
from study_tracker.services.writer import SnapshotWriter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def format_duration(total_minutes: int) -> str:
    """Render minutes as ``"{hours}h {minutes}m"``. Expects ``total_minutes >= 0``."""
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


def total_course_time(sessions: Iterable[Session]) -> int:
    return sum(s.time for s in sessions)


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------


class Ledger:
    """In-memory list of courses, mirrored to a ``CourseStore`` on every change.

    Mutations build a new tuple of courses, swap it in, then hand it to the
    writer. The in-memory snapshot is authoritative; a failed save is logged
    by the store and otherwise ignored.
    """

    def __init__(self, store: CourseStore, writer: SnapshotWriter | None = None) -> None:
        self.store = store
        self.writer = writer or SnapshotWriter(store)
        self._courses: tuple[Course, ...] = ()

    @property
    def courses(self) -> tuple[Course, ...]:
        return self._courses

    async def load(self) -> None:
        """Replace state with the persisted courses, if any could be read."""
        loaded = await self.store.load()
        if loaded is None:
            return
        self._courses = tuple(loaded)
        logger.info("Ledger loaded with %d courses", len(self._courses))

    def find_course(self, name: str) -> int:
        """Index of the course matching ``name`` case-insensitively, or -1."""
        wanted = name.lower()
        for i, course in enumerate(self._courses):
            if course.name.lower() == wanted:
                return i
        return -1

    def add_entry(
        self,
        course_name: str,
        hours_text: str = "",
        minutes_text: str = "",
        note_text: str = "",
    ) -> bool:
        """Log a study session, creating the course on first use.

        Returns False (and changes nothing) when the trimmed course name is
        empty. A session is only recorded when it carries time or a note.
        """
        name = (course_name or "").strip()
        if not name:
            return False

        hours = max(parse_int(hours_text), 0)
        minutes = max(parse_int(minutes_text), 0)
        total = hours * 60 + minutes
        note = (note_text or "").strip()
        session = Session(time=total, note=note) if total > 0 or note else None

        idx = self.find_course(name)
        if idx >= 0:
            courses = list(self._courses)
            if session is not None:
                existing = courses[idx]
                courses[idx] = dataclasses.replace(
                    existing, sessions=existing.sessions + (session,)
                )
            updated = tuple(courses)
        else:
            new_course = Course(name=name, sessions=(session,) if session else ())
            updated = self._courses + (new_course,)
            logger.info("Created course '%s'", name)

        self._commit(updated)
        return True

    def delete_session(self, course_index: int, session_index: int) -> bool:
        """Remove one session by position. Out-of-range indices are a no-op."""
        if not 0 <= course_index < len(self._courses):
            return False
        course = self._courses[course_index]
        if not 0 <= session_index < len(course.sessions):
            return False

        sessions = course.sessions[:session_index] + course.sessions[session_index + 1:]
        courses = list(self._courses)
        courses[course_index] = dataclasses.replace(course, sessions=sessions)
        self._commit(tuple(courses))
        return True

    def delete_course(self, course_index: int) -> bool:
        """Remove a course and all its sessions. Out-of-range is a no-op."""
        if not 0 <= course_index < len(self._courses):
            return False
        removed = self._courses[course_index]
        self._commit(self._courses[:course_index] + self._courses[course_index + 1:])
        logger.info("Deleted course '%s'", removed.name)
        return True

    def _commit(self, updated: tuple[Course, ...]) -> None:
        self._courses = updated
        self.writer.submit(updated)
