"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text

from app.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for wallet notifications.

    Fields the service filters on (owner, status, expiry, pairing) are stored
    as columns; the remaining display metadata lives in a JSON document.
    """

    __tablename__ = "notification"

    id = Column(String(32), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    title = Column(String(120), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, index=True)
    priority_base = Column(String(8), nullable=False)
    priority_modifiers = Column(JSON, nullable=False, default=dict)
    calculated_priority = Column(Integer, nullable=False, index=True)
    display_location = Column(String(32), nullable=False)
    metadata_payload = Column("metadata", JSON, nullable=False, default=dict)
    counterparty_id = Column(String(64), nullable=True)
    parent_notification_id = Column(String(32), nullable=True, index=True)
    expires_at = Column(DateTime(), nullable=True, index=True)
    created_at = Column(DateTime(), nullable=False)
    updated_at = Column(DateTime(), nullable=False)


__all__ = ["NotificationModel"]
