"""Shared fixtures for the notification service tests."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"

from app.domain.entities import (  # noqa: E402
    DISPLAY_SUGGESTED_ACTIONS,
    STATUS_ACTIVE,
    VISIBILITY_BOTH,
    Notification,
    NotificationMetadata,
    NotificationPriority,
    PriorityModifiers,
)


@pytest.fixture()
def db_session():
    """Yield a session bound to a freshly created in-memory schema."""

    from app.infrastructure import database

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def build_notification(**overrides) -> Notification:
    """Return an in-memory notification with sensible defaults."""

    metadata_values = {
        "gradient": "from-blue-500 to-blue-600",
        "action_required": False,
        "dismissible": True,
        "visibility": VISIBILITY_BOTH,
    }
    metadata_values.update(overrides.pop("metadata", {}))
    metadata = NotificationMetadata(**metadata_values)
    values = {
        "id": "n-1",
        "user_id": "alice",
        "type": "transaction",
        "title": "Payment received",
        "description": "You received 5,000 sats",
        "status": STATUS_ACTIVE,
        "priority": NotificationPriority(
            base="medium",
            modifiers=PriorityModifiers(
                action_required=False, time_constraint=False, amount=5000, role="recipient"
            ),
            calculated_priority=45,
        ),
        "display_location": DISPLAY_SUGGESTED_ACTIONS,
        "metadata": metadata,
    }
    values.update(overrides)
    return Notification(**values)


@pytest.fixture()
def make_notification():
    return build_notification
