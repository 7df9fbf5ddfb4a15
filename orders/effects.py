"""
Notification and audit side effects.

Services describe what should be announced as effect values and hand them to
dispatch(), which runs them once the surrounding transaction commits. A failing
effect is logged and skipped; it never undoes the state change that caused it.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from django.contrib.auth.models import User
from django.db import transaction

from .models import UserType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notify:
    user_id: int
    user_type: str
    message: str
    title: Optional[str] = None
    type: Optional[str] = None

    def run(self):
        from .services.notifications import create_notification
        user = User.objects.get(id=self.user_id)
        create_notification(user, self.user_type, self.message, title=self.title, type=self.type)


@dataclass(frozen=True)
class NotifyAdmins:
    message: str
    title: Optional[str] = None
    type: Optional[str] = None

    def run(self):
        from .services.notifications import admin_users, create_notification_for_multiple_users
        create_notification_for_multiple_users(
            admin_users(), UserType.ADMIN, self.message, title=self.title, type=self.type
        )


@dataclass(frozen=True)
class Audit:
    user_id: int
    user_type: str
    action: str
    action_type: str
    related_id: Any = None
    related_type: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def run(self):
        from .services.history import add_history
        user = User.objects.get(id=self.user_id)
        add_history(user, self.user_type, self.action, self.action_type,
                    related_id=self.related_id, related_type=self.related_type, details=self.details)


def run_effects(effects: Sequence):
    for effect in effects:
        try:
            effect.run()
        except Exception:
            logger.exception("Side effect failed: %r", effect)


def dispatch(effects: Sequence):
    """Schedule effects to run after the current transaction commits."""
    pending = [e for e in effects if e is not None]
    if pending:
        transaction.on_commit(lambda: run_effects(pending))
    return pending
