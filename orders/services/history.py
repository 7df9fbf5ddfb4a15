import logging

from ..models import HistoryEntry

logger = logging.getLogger(__name__)


def add_history(user, user_type, action, action_type, related_id=None, related_type=None, details=None):
    entry = HistoryEntry.objects.create(
        user=user,
        user_type=user_type,
        action=action,
        action_type=action_type,
        related_id=str(related_id) if related_id is not None else None,
        related_type=related_type,
        details=details or {},
    )
    logger.debug("History for user %s: %s", user.id, action)
    return entry


def history_for(user, action_type=None):
    entries = HistoryEntry.objects.filter(user=user)
    if action_type:
        entries = entries.filter(action_type=action_type)
    return entries
