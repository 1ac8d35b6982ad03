import asyncio
import logging
from typing import Sequence

from study_tracker.models import Course
from study_tracker.services.storage import CourseStore

logger = logging.getLogger(__name__)


class SnapshotWriter:
    """Hand ledger snapshots to the course store without blocking the caller.

    With ``serialize=True`` there is at most one save in flight and at most
    one snapshot waiting behind it; a newer snapshot replaces the waiting
    one, so the last snapshot submitted is always the last one written.

    With ``serialize=False`` every snapshot gets its own save task and
    whichever finishes last wins.

    Outside a running event loop ``submit`` saves synchronously.
    """

    def __init__(self, store: CourseStore, serialize: bool = True) -> None:
        self.store = store
        self.serialize = serialize
        self._pending: tuple[Course, ...] | None = None
        self._drain_task: asyncio.Task | None = None
        self._loose_tasks: set[asyncio.Task] = set()

    def submit(self, snapshot: Sequence[Course]) -> None:
        snapshot = tuple(snapshot)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self.store.save(snapshot))
            return

        if not self.serialize:
            task = loop.create_task(self.store.save(snapshot))
            self._loose_tasks.add(task)
            task.add_done_callback(self._loose_tasks.discard)
            return

        if self._pending is not None:
            logger.debug("Superseding queued snapshot of %d courses", len(self._pending))
        self._pending = snapshot
        if self._drain_task is None or self._drain_task.done():
            self._drain_task = loop.create_task(self._drain())

    async def _drain(self) -> None:
        while self._pending is not None:
            snapshot, self._pending = self._pending, None
            await self.store.save(snapshot)

    async def flush(self) -> None:
        """Wait until every submitted snapshot is written or superseded."""
        while self._drain_task is not None and not self._drain_task.done():
            await self._drain_task
        if self._loose_tasks:
            await asyncio.gather(*list(self._loose_tasks))

    @property
    def idle(self) -> bool:
        drain_busy = self._drain_task is not None and not self._drain_task.done()
        return not drain_busy and not self._loose_tasks
