"""
Status transition tables for requests, designs, billings and add-ons.

Each table maps (current status, operation) to the next status. Any pair that
is not listed is rejected with InvalidState.
"""
from django.db import models

from .exceptions import InvalidState
from .models import AddOnStatus, AddOnType, BillingStatus, DesignStatus, RequestStatus


class RequestOp(models.TextChoices):
    ASSIGN = "assign"
    DECLINE = "decline"
    CANCEL = "cancel"


class DesignOp(models.TextChoices):
    REQUEST_REVISION = "request_revision"
    POST_PREVIEW = "post_preview"
    RESUME = "resume"
    APPROVE = "approve"
    START_PRODUCTION = "start_production"
    READY_FOR_PICKUP = "ready_for_pickup"
    COMPLETE = "complete"


class BillingOp(models.TextChoices):
    NEGOTIATE = "negotiate"
    APPROVE = "approve"


class AddOnOp(models.TextChoices):
    APPROVE = "approve"
    DECLINE = "decline"
    CANCEL = "cancel"


REQUEST_TRANSITIONS = {
    (RequestStatus.PENDING, RequestOp.ASSIGN): RequestStatus.APPROVED,
    (RequestStatus.PENDING, RequestOp.DECLINE): RequestStatus.DECLINED,
    (RequestStatus.PENDING, RequestOp.CANCEL): RequestStatus.CANCELLED,
}

DESIGN_TRANSITIONS = {
    (DesignStatus.IN_PROGRESS, DesignOp.REQUEST_REVISION): DesignStatus.PENDING_REVISION,
    (DesignStatus.IN_PROGRESS, DesignOp.POST_PREVIEW): DesignStatus.IN_PROGRESS,
    (DesignStatus.PENDING_REVISION, DesignOp.POST_PREVIEW): DesignStatus.IN_PROGRESS,
    (DesignStatus.PENDING_REVISION, DesignOp.RESUME): DesignStatus.IN_PROGRESS,
    (DesignStatus.IN_PROGRESS, DesignOp.APPROVE): DesignStatus.APPROVED,
    (DesignStatus.PENDING_REVISION, DesignOp.APPROVE): DesignStatus.APPROVED,
    (DesignStatus.APPROVED, DesignOp.APPROVE): DesignStatus.APPROVED,
    (DesignStatus.APPROVED, DesignOp.START_PRODUCTION): DesignStatus.IN_PRODUCTION,
    (DesignStatus.IN_PRODUCTION, DesignOp.READY_FOR_PICKUP): DesignStatus.PENDING_PICKUP,
    (DesignStatus.PENDING_PICKUP, DesignOp.COMPLETE): DesignStatus.COMPLETED,
}

BILLING_TRANSITIONS = {
    (BillingStatus.PENDING, BillingOp.NEGOTIATE): BillingStatus.PENDING,
    (BillingStatus.PENDING, BillingOp.APPROVE): BillingStatus.APPROVED,
    (BillingStatus.APPROVED, BillingOp.APPROVE): BillingStatus.APPROVED,
}

ADDON_TRANSITIONS = {
    (AddOnStatus.PENDING, AddOnOp.APPROVE): AddOnStatus.APPROVED,
    (AddOnStatus.PENDING, AddOnOp.DECLINE): AddOnStatus.DECLINED,
    (AddOnStatus.PENDING, AddOnOp.CANCEL): AddOnStatus.CANCELLED,
}

# Statuses a quantity add-on pulls back into production
REOPENS_PRODUCTION = (DesignStatus.PENDING_PICKUP, DesignStatus.COMPLETED)


def _next(table, current, op, label, message=None):
    try:
        return table[(current, op)]
    except KeyError:
        raise InvalidState(message or f"{label.capitalize()} is {current}; cannot {op.label.lower()}")


def next_request_status(current, op):
    return _next(REQUEST_TRANSITIONS, current, op, "request")


def next_design_status(current, op):
    message = None
    if op == DesignOp.REQUEST_REVISION and current == DesignStatus.PENDING_REVISION:
        message = "Revision already in progress"
    return _next(DESIGN_TRANSITIONS, current, op, "design", message)


def next_billing_status(current, op):
    return _next(BILLING_TRANSITIONS, current, op, "billing")


def next_addon_status(current, op):
    return _next(ADDON_TRANSITIONS, current, op, "add-on")


def design_status_after_addon(current, addon_type):
    """
    Design status implied by an add-on of the given type.

    Any add-on with design work reopens the design. A quantity-only add-on pulls
    a finished order back into production and leaves other statuses alone,
    including in_production.
    """
    if addon_type in (AddOnType.DESIGN, AddOnType.DESIGN_AND_QUANTITY):
        return DesignStatus.IN_PROGRESS
    if current in REOPENS_PRODUCTION:
        return DesignStatus.IN_PRODUCTION
    return current
