import json
import logging
from typing import Sequence

from study_tracker.errors import LoadFailure, SaveFailure, StorageError
from study_tracker.models import Course
from study_tracker.services.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_KEY = "courses"


class CourseStore:
    """Mirror the course list into a key-value store as one JSON array.

    The stored value under ``key`` is::

        [{"name": str, "sessions": [{"time": int, "note": str}, ...]}, ...]

    Neither ``load`` nor ``save`` raises on store or decode errors. The
    failure is logged and kept on ``last_error``; callers carry on with
    their in-memory state.
    """

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_KEY) -> None:
        self.kv = kv
        self.key = key
        self.last_error: StorageError | None = None

    async def load(self) -> list[Course] | None:
        """Return the persisted courses, or ``None`` when nothing was loaded."""
        try:
            raw = await self.kv.get(self.key)
            if raw is None:
                logger.debug("No stored value under '%s'", self.key)
                return None
            parsed = json.loads(raw)
            if not isinstance(parsed, list):
                raise ValueError(f"expected a JSON array, got {type(parsed).__name__}")
            courses = [Course.from_dict(c) for c in parsed]
        except Exception as e:
            self.last_error = LoadFailure(str(e))
            logger.exception("Error loading courses from '%s'", self.key)
            return None
        logger.debug("Loaded %d courses from '%s'", len(courses), self.key)
        return courses

    async def save(self, courses: Sequence[Course]) -> bool:
        """Overwrite the stored list with ``courses``. Returns False on failure."""
        try:
            payload = json.dumps([c.to_dict() for c in courses])
            await self.kv.set(self.key, payload)
        except Exception as e:
            self.last_error = SaveFailure(str(e))
            logger.exception("Error saving courses to '%s'", self.key)
            return False
        logger.debug("Saved %d courses to '%s'", len(courses), self.key)
        return True
