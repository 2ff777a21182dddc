"""Periodic driver for the due-date reminder sweeps."""
import asyncio
import logging
from datetime import datetime

from agribooks.db.models import ReminderType
from agribooks.reminders.notifications import DUE_DATE_TYPES, NotificationService
from agribooks.schemas import SweepReport

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Runs the TRANSACTION and GENERAL sweeps on a fixed interval.

    Construct once at process start, call start() inside the running event
    loop and stop() on shutdown. The first run happens immediately. The two
    sweeps of a run execute concurrently; each sweep type holds its own lock,
    so a sweep never overlaps its next invocation even when run_once() is
    triggered by hand.

    Threshold reminders are not driven from here; transaction writes evaluate
    them reactively.

    Running several processes with a scheduler each emits duplicate alerts;
    there is no cross-process coordination.
    """

    def __init__(self, notifications: NotificationService, interval_seconds: float = 3600.0) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._notifications = notifications
        self._interval = interval_seconds
        self._task: asyncio.Task | None = None
        self._stop_event: asyncio.Event | None = None
        self._locks: dict[ReminderType, asyncio.Lock] = {}
        self._last_run_at: datetime | None = None
        self._last_reports: dict[str, SweepReport] = {}

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Begin sweeping in the background. Calling start() twice is a no-op."""
        if self.running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._loop(self._stop_event), name="reminder-scheduler")
        logger.info(
            "Reminder scheduler started",
            extra={"interval_minutes": self._interval / 60},
        )

    async def stop(self) -> None:
        """Stop scheduling new runs; an in-flight run is allowed to finish."""
        if self._task is None or self._stop_event is None:
            return
        self._stop_event.set()
        try:
            await self._task
        finally:
            self._task = None
            self._stop_event = None
        logger.info("Reminder scheduler stopped")

    async def run_once(self, now: datetime | None = None) -> list[SweepReport]:
        """Run both due-date sweeps concurrently and wait for them."""
        reports = await asyncio.gather(*(self._sweep(t, now) for t in DUE_DATE_TYPES))
        self._last_run_at = datetime.now()
        return list(reports)

    def status(self) -> dict[str, object]:
        return {
            "running": self.running,
            "interval_seconds": self._interval,
            "last_run_at": self._last_run_at,
            "last_reports": [r.model_dump() for r in self._last_reports.values()],
        }

    async def _sweep(self, reminder_type: ReminderType, now: datetime | None) -> SweepReport:
        lock = self._locks.setdefault(reminder_type, asyncio.Lock())
        async with lock:
            report = await self._notifications.run_sweep(reminder_type, now)
        self._last_reports[reminder_type.value] = report
        return report

    async def _loop(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            try:
                await self.run_once()
            except Exception as e:  # pylint: disable=broad-except
                logger.error("Error checking reminders: %s", e)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                pass
