"""DI container. Wire via init_container(); endpoints use Depends(Provide[Container.*]).

Tests override ``engine`` (and ``clock``) before first use, e.g.
``container.engine.override(providers.Object(test_engine))``.
"""
from datetime import datetime

from dependency_injector import containers, providers

from agribooks import config
from agribooks.db import sessions
from agribooks.ledger import LedgerStore, TransactionService
from agribooks.reminders import (AlertSink, NotificationService,
                                 ReminderLifecycleManager, ReminderScheduler,
                                 ReminderStore, TriggerEvaluator)


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
            "agribooks.deps",
            "agribooks.routers.admin",
            "agribooks.routers.alerts",
            "agribooks.routers.categories",
            "agribooks.routers.reminders",
            "agribooks.routers.transactions",
        ]
    )

    engine = providers.Object(sessions.engine)
    clock = providers.Object(datetime.now)

    reminder_store = providers.Singleton(ReminderStore, engine)
    ledger_store = providers.Singleton(LedgerStore, engine)
    alert_sink = providers.Singleton(AlertSink, engine)

    evaluator = providers.Singleton(
        TriggerEvaluator,
        reminder_store,
        alert_sink,
        complete_on_trigger=config.REMINDER_COMPLETE_ON_TRIGGER,
    )
    notifications = providers.Singleton(
        NotificationService,
        reminder_store,
        evaluator,
        concurrency=config.REMINDER_SWEEP_CONCURRENCY,
        hook_workers=config.REMINDER_HOOK_WORKERS,
        max_pending=config.REMINDER_HOOK_QUEUE_LIMIT,
        clock=clock,
    )
    scheduler = providers.Singleton(
        ReminderScheduler,
        notifications,
        interval_seconds=config.REMINDER_CHECK_INTERVAL_SECONDS,
    )

    reminder_manager = providers.Singleton(ReminderLifecycleManager, reminder_store)
    transaction_service = providers.Singleton(TransactionService, ledger_store, notifications)


def init_container() -> Container:
    """Create container and wire to router modules."""
    container = Container()
    container.wire()
    return container
