"""Notification service: reactive threshold checks and due-date sweeps.

Every entry point here is a background path. Failures are logged with the
reminder/user context and swallowed; nothing propagates to the transaction
write or to the scheduler loop. Delivery is at-least-once.
"""
import asyncio
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from decimal import Decimal

from agribooks.core.exceptions import StorageUnavailable
from agribooks.core.utils import end_of_day
from agribooks.db.models import Reminder, ReminderType
from agribooks.reminders.evaluator import TriggerEvaluator
from agribooks.reminders.store import ReminderStore
from agribooks.schemas import SweepReport

logger = logging.getLogger(__name__)

# Reminder types swept by the scheduler, in no particular order.
DUE_DATE_TYPES: tuple[ReminderType, ...] = (ReminderType.TRANSACTION, ReminderType.GENERAL)


def _context(reminder: Reminder) -> dict[str, str]:
    return {
        "reminder_id": reminder.id,
        "user_id": reminder.user_id,
        "reminder_type": reminder.reminder_type.value,
    }


class NotificationService:
    """Runs the evaluator over sets of reminders.

    Args:
        store: Reminder queries.
        evaluator: Per-reminder trigger logic.
        concurrency: Max reminders evaluated at once within one sweep.
        hook_workers: Threads available to reactive threshold checks.
        max_pending: Queued plus running threshold checks allowed before new
            ones are dropped.
        clock: Source of "now"; injectable for tests.
    """

    def __init__(
        self,
        store: ReminderStore,
        evaluator: TriggerEvaluator,
        *,
        concurrency: int = 8,
        hook_workers: int = 4,
        max_pending: int = 1000,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._evaluator = evaluator
        self._concurrency = max(1, concurrency)
        self._clock = clock
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, hook_workers), thread_name_prefix="threshold-hook"
        )
        self._max_pending = max(1, max_pending)
        self._pending = 0
        self._pending_lock = threading.Lock()

    # ---- Reactive path ----
    def evaluate_threshold_reminders(self, user_id: str, category_id: str, amount: Decimal) -> int:
        """Evaluate every active threshold reminder watching ``category_id``.

        Called after an EXPENSE transaction is persisted. Each matching
        reminder is evaluated independently, so several may fire for one
        expense. Never raises.

        Returns:
            Number of alerts emitted.
        """
        logger.info(
            "Checking threshold reminders",
            extra={"user_id": user_id, "category_id": category_id, "amount": amount},
        )
        try:
            reminders = self._store.find_active_threshold_reminders(user_id, category_id)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "Error loading threshold reminders: %s",
                e,
                extra={"user_id": user_id, "category_id": category_id, "amount": amount},
            )
            return 0

        triggered = 0
        for reminder in reminders:
            try:
                if self._evaluator.evaluate_threshold(reminder, amount) is not None:
                    triggered += 1
            except Exception as e:  # pylint: disable=broad-except
                logger.error("Error evaluating threshold reminder: %s", e, extra=_context(reminder))
        return triggered

    def dispatch_threshold_check(
        self, user_id: str, category_id: str, amount: Decimal
    ) -> Future | None:
        """Submit evaluate_threshold_reminders without waiting for it.

        Returns:
            The pending Future, or None if the backlog is full or the service
            is already shut down.
        """
        with self._pending_lock:
            if self._pending >= self._max_pending:
                logger.warning(
                    "Threshold check dropped, backlog full",
                    extra={"user_id": user_id, "category_id": category_id, "pending": self._pending},
                )
                return None
            self._pending += 1
            pending = self._pending
        try:
            future = self._executor.submit(
                self.evaluate_threshold_reminders, user_id, category_id, amount
            )
        except RuntimeError as e:
            self._release_pending()
            logger.warning(
                "Threshold check not dispatched: %s",
                e,
                extra={"user_id": user_id, "category_id": category_id},
            )
            return None
        logger.debug("Threshold check queued", extra={"pending": pending})
        future.add_done_callback(self._on_dispatch_done)
        return future

    @property
    def pending_threshold_checks(self) -> int:
        with self._pending_lock:
            return self._pending

    def _release_pending(self) -> None:
        with self._pending_lock:
            self._pending -= 1

    def _on_dispatch_done(self, future: Future) -> None:
        self._release_pending()
        _log_dispatch_failure(future)

    # ---- Scheduled path ----
    async def run_sweep(self, reminder_type: ReminderType, now: datetime | None = None) -> SweepReport:
        """Evaluate every due reminder of ``reminder_type`` once.

        A reminder is due when its due date falls on or before today's date,
        so the store is asked for everything up to the end of the current day.
        Store outages skip the sweep; per-reminder failures are counted and
        logged while the rest of the sweep continues.
        """
        now = now or self._clock()
        report = SweepReport(reminder_type=reminder_type.value)
        logger.info("Checking %s reminders by due date", reminder_type.value.lower())
        try:
            reminders = await asyncio.to_thread(
                self._store.find_due_reminders, reminder_type, end_of_day(now)
            )
        except StorageUnavailable as e:
            logger.warning(
                "Skipping %s sweep, storage unavailable: %s",
                reminder_type.value,
                e,
                extra={"reminder_type": reminder_type.value},
            )
            report.skipped = True
            return report
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "Error loading due %s reminders: %s",
                reminder_type.value,
                e,
                extra={"reminder_type": reminder_type.value},
            )
            report.skipped = True
            return report

        semaphore = asyncio.Semaphore(self._concurrency)

        async def _evaluate(reminder: Reminder) -> bool | None:
            async with semaphore:
                try:
                    alert = await asyncio.to_thread(self._evaluator.evaluate_due, reminder, now)
                except Exception as e:  # pylint: disable=broad-except
                    logger.error("Error evaluating due reminder: %s", e, extra=_context(reminder))
                    return None
                return alert is not None

        outcomes = await asyncio.gather(*(_evaluate(r) for r in reminders))
        report.checked = len(reminders)
        report.triggered = sum(1 for o in outcomes if o)
        report.failed = sum(1 for o in outcomes if o is None)
        logger.info(
            "%s reminders check completed",
            reminder_type.value.capitalize(),
            extra={
                "reminder_type": reminder_type.value,
                "checked": report.checked,
                "triggered": report.triggered,
                "failed": report.failed,
            },
        )
        return report

    async def check_transaction_reminders(self, now: datetime | None = None) -> SweepReport:
        return await self.run_sweep(ReminderType.TRANSACTION, now)

    async def check_general_reminders(self, now: datetime | None = None) -> SweepReport:
        return await self.run_sweep(ReminderType.GENERAL, now)

    def close(self, wait: bool = True) -> None:
        """Stop accepting threshold checks; by default wait for queued ones."""
        self._executor.shutdown(wait=wait)


def _log_dispatch_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Threshold check failed: %s", exc)
