import logging

from django.conf import settings
from django.contrib.auth.models import User
from django.core.mail import send_mail

from ..exceptions import NotFound
from ..models import Designer, Notification, UserType

logger = logging.getLogger(__name__)


def user_type_of(user):
    if user.is_staff:
        return UserType.ADMIN
    if Designer.objects.filter(userId=user).exists():
        return UserType.DESIGNER
    return UserType.CLIENT


def admin_users():
    return User.objects.filter(is_staff=True, is_active=True).order_by("id")


def send_email_notification(email, subject, message):
    send_mail(
        subject=subject,
        message=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[email],
        fail_silently=False,
    )


def create_notification(user, user_type, message, title=None, type=None):
    """Store an in-app notification and mirror it by email when the user has one."""
    notification = Notification.objects.create(
        recipient=user,
        recipient_user_type=user_type,
        title=title,
        type=type,
        notif_content=message,
    )
    if user.email:
        send_email_notification(user.email, title or "TechShirt update", message)
    logger.info("Notified user %s (%s): %s", user.id, type or "general", message)
    return notification


def create_notification_for_multiple_users(users, user_type, message, title=None, type=None):
    """Notify each user in turn. A failure for one recipient does not stop the others."""
    notifications = []
    for user in users:
        try:
            notifications.append(create_notification(user, user_type, message, title=title, type=type))
        except Exception:
            logger.exception("Failed to notify user %s", user.id)
    return notifications


def notifications_for(user, unread_only=False):
    notifications = Notification.objects.filter(recipient=user)
    if unread_only:
        notifications = notifications.filter(is_read=False)
    return notifications


def mark_notification_as_read(user, notification_id):
    try:
        notification = Notification.objects.get(id=notification_id, recipient=user)
    except Notification.DoesNotExist:
        raise NotFound("Notification not found")
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=["is_read"])
    return notification


def mark_all_notifications_as_read(user):
    return Notification.objects.filter(recipient=user, is_read=False).update(is_read=True)


def delete_notification(user, notification_id):
    deleted, _ = Notification.objects.filter(id=notification_id, recipient=user).delete()
    if not deleted:
        raise NotFound("Notification not found")
