"""Shared fixtures: a throwaway SQLite database, the engine services and a test app."""
from datetime import datetime
from decimal import Decimal

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from agribooks.container import Container
from agribooks.db.models import (Category, Reminder, ReminderType,
                                 TransactionType, User)
from agribooks.db.sessions import create_db_engine, get_session, init_db
from agribooks.ledger import LedgerStore, TransactionService
from agribooks.main import create_app
from agribooks.reminders import (AlertSink, NotificationService,
                                 ReminderLifecycleManager, ReminderScheduler,
                                 ReminderStore, TriggerEvaluator)

NOW = datetime(2024, 6, 15, 10, 0)


@pytest.fixture
def engine(tmp_path):
    # File-backed so worker threads get their own connections.
    engine = create_db_engine(f"sqlite:///{tmp_path / 'agribooks-test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def user(engine):
    with get_session(engine) as session:
        u = User(id="user-1", name="Farmer Joe", email="joe@example.com")
        session.add(u)
    return u


@pytest.fixture
def admin(engine):
    with get_session(engine) as session:
        u = User(id="admin-1", name="Admin", email="admin@example.com", role="admin")
        session.add(u)
    return u


@pytest.fixture
def category(engine, user):
    with get_session(engine) as session:
        c = Category(id="util-cat", user_id=user.id, name="Utilities", type=TransactionType.EXPENSE)
        session.add(c)
    return c


@pytest.fixture
def income_category(engine, user):
    with get_session(engine) as session:
        c = Category(id="sales-cat", user_id=user.id, name="Crop Sales", type=TransactionType.INCOME)
        session.add(c)
    return c


@pytest.fixture
def foreign_category(engine):
    """Expense category owned by a different user."""
    with get_session(engine) as session:
        session.add(User(id="user-2", name="Neighbour", email="neighbour@example.com"))
        c = Category(id="secret-cat", user_id="user-2", name="Secret Payroll", type=TransactionType.EXPENSE)
        session.add(c)
    return c


@pytest.fixture
def system_category(engine):
    with get_session(engine) as session:
        c = Category(id="fuel-cat", user_id=None, name="Fuel", type=TransactionType.EXPENSE)
        session.add(c)
    return c


@pytest.fixture
def store(engine):
    return ReminderStore(engine)


@pytest.fixture
def sink(engine):
    return AlertSink(engine)


@pytest.fixture
def evaluator(store, sink):
    return TriggerEvaluator(store, sink)


@pytest.fixture
def notifications(store, evaluator):
    service = NotificationService(store, evaluator, concurrency=2, hook_workers=1, clock=lambda: NOW)
    yield service
    service.close()


@pytest.fixture
def scheduler(notifications):
    return ReminderScheduler(notifications, interval_seconds=3600)


@pytest.fixture
def manager(store):
    return ReminderLifecycleManager(store)


@pytest.fixture
def ledger(engine):
    return LedgerStore(engine)


@pytest.fixture
def transactions(ledger, notifications):
    return TransactionService(ledger, notifications)


@pytest.fixture
def add_reminder(engine, user):
    """Insert a reminder row directly, bypassing create-time validation."""

    def _add(**fields) -> Reminder:
        fields.setdefault("user_id", user.id)
        fields.setdefault("title", "Reminder")
        fields.setdefault("due_date", NOW)
        fields.setdefault("reminder_type", ReminderType.GENERAL)
        if fields.get("threshold_amount") is not None:
            fields["threshold_amount"] = Decimal(str(fields["threshold_amount"]))
        with get_session(engine) as session:
            reminder = Reminder(**fields)
            session.add(reminder)
        return reminder

    return _add


@pytest.fixture
def container(engine):
    c = Container()
    c.engine.override(providers.Object(engine))
    c.notifications.override(
        providers.Singleton(
            NotificationService,
            c.reminder_store,
            c.evaluator,
            concurrency=2,
            hook_workers=1,
            clock=c.clock,
        )
    )
    yield c
    c.unwire()
    c.reset_override()


@pytest.fixture
def client(container, user, admin, category):
    app = create_app(container, start_scheduler=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_headers(user):
    return {"X-User-Id": user.id}


@pytest.fixture
def admin_headers(admin):
    return {"X-User-Id": admin.id}
