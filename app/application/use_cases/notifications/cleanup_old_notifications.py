"""Use case for purging closed notifications past their retention window."""

from datetime import datetime

from sqlalchemy.orm import Session

from app.config import get_settings
from app.infrastructure.repositories import NotificationRepository


def cleanup_old_notifications(
    session: Session, *, user_id: str, older_than: datetime
) -> int:
    """Delete the user's dismissed, actioned or expired notifications created before ``older_than``."""

    return NotificationRepository(session).delete_terminal_before(
        user_id, older_than, batch_size=get_settings().cleanup_batch_size
    )
