import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from ..catalog import policy
from ..effects import Audit, Notify, NotifyAdmins, dispatch
from ..exceptions import InvalidAmount, LimitReached, NotFound, Unauthorized
from ..lifecycle import BillingOp, next_billing_status
from ..models import AddOnStatus, Billing, BillingStatus, UserType
from ..pricing import CENTS, negotiation_floor

logger = logging.getLogger(__name__)


def invoice_number(billing):
    return f"INV-{billing.billingID:06d}"


def open_billing(design, breakdown):
    """
    Create the design's Billing from a pricing breakdown unless one exists.

    Add-ons approved before the bill existed are carried into its add-on totals.
    """
    approved = design.addons.filter(status=AddOnStatus.APPROVED).aggregate(
        shirt_price=Sum("price"), fee=Sum("fee"),
    )
    billing, created = Billing.objects.get_or_create(
        design=design,
        defaults={
            "clientID_id": design.clientID_id,
            "designerID_id": design.designerID_id,
            "shirts": [line.as_dict() for line in breakdown.shirts],
            "total_shirts": breakdown.total_shirts,
            "printing_fee": breakdown.printing_fee,
            "designer_fee": breakdown.designer_fee,
            "revision_fee": breakdown.revision_fee,
            "starting_amount": breakdown.starting_amount,
            "addons_shirt_price": approved["shirt_price"] or Decimal("0"),
            "addons_fee": approved["fee"] or Decimal("0"),
            "final_amount": Decimal("0"),
            "negotiation_history": [],
            "negotiation_rounds": 0,
            "status": BillingStatus.PENDING,
        },
    )
    if created:
        billing.invoice_no = invoice_number(billing)
        billing.save(update_fields=["invoice_no"])
        logger.info("Billing %s opened for design %s at %s", billing.invoice_no, design.designID,
                    billing.starting_amount)
    return billing, created


def parse_amount(value):
    """Parse a money amount, rounded to cents."""
    try:
        amount = Decimal(str(value))
        if not amount.is_finite():
            raise InvalidAmount("Amount must be a number")
        amount = amount.quantize(CENTS)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount("Amount must be a number")
    if amount < 0:
        raise InvalidAmount("Amount must be a non-negative number")
    return amount


def _billing_for_design(design_id, lock=False):
    billings = Billing.objects.select_related("design", "design__request")
    if lock:
        billings = billings.select_for_update()
    try:
        return billings.get(design_id=design_id)
    except Billing.DoesNotExist:
        raise NotFound("Billing not found for this design")


def get_billing(design_id, user):
    billing = _billing_for_design(design_id)
    if not (user.is_staff or user.id in (billing.clientID_id, billing.designerID_id)):
        raise Unauthorized("You do not have access to this billing")
    return billing


def billing_detail(billing):
    rounds_left = max(0, policy()["MAX_NEGOTIATION_ROUNDS"] - billing.negotiation_rounds)
    return {
        "billingID": billing.billingID,
        "invoice_no": billing.invoice_no,
        "design_id": billing.design_id,
        "request_title": billing.design.request.request_title,
        "client_id": billing.clientID_id,
        "designer_id": billing.designerID_id,
        "status": billing.status,
        "breakdown": {
            "shirts": billing.shirts,
            "total_shirts": billing.total_shirts,
            "printing_fee": billing.printing_fee,
            "designer_fee": billing.designer_fee,
            "revision_fee": billing.revision_fee,
        },
        "starting_amount": billing.starting_amount,
        "final_amount": billing.final_amount,
        "addons_shirt_price": billing.addons_shirt_price,
        "addons_fee": billing.addons_fee,
        "total_amount": billing.total_amount,
        "negotiation_floor": negotiation_floor(billing.starting_amount),
        "negotiation_rounds": billing.negotiation_rounds,
        "negotiation_rounds_left": rounds_left,
        "negotiation_history": billing.negotiation_history,
        "created_at": billing.created_at,
    }


def negotiate(design_id, user, amount):
    """
    Record a client counter-offer on the base price.

    Offers below the floor are refused, and only a limited number of rounds are
    accepted. The offer covers the base price only: final_amount is set to the
    offer plus the approved add-on charges, and the history records the offer.
    """
    amount = parse_amount(amount)
    with transaction.atomic():
        billing = _billing_for_design(design_id, lock=True)
        if user.id != billing.clientID_id:
            raise Unauthorized("Only the client can negotiate this bill")

        next_billing_status(billing.status, BillingOp.NEGOTIATE)
        max_rounds = policy()["MAX_NEGOTIATION_ROUNDS"]
        if billing.negotiation_rounds >= max_rounds:
            raise LimitReached(f"Negotiation limit of {max_rounds} rounds reached")
        floor = negotiation_floor(billing.starting_amount)
        if amount < floor:
            raise InvalidAmount(f"Proposed amount must be at least {floor}")

        billing.negotiation_history = list(billing.negotiation_history) + [{
            "amount": str(amount),
            "date": timezone.now().isoformat(),
            "added_by": UserType.CLIENT.value,
        }]
        billing.negotiation_rounds += 1
        billing.final_amount = amount + billing.addons_total
        billing.save(update_fields=["negotiation_history", "negotiation_rounds", "final_amount"])

        title = billing.design.request.request_title
        dispatch([
            Notify(billing.designerID_id, UserType.DESIGNER,
                   f'The client proposed {amount} for "{title}" (round {billing.negotiation_rounds} of {max_rounds}).',
                   title="Price negotiation", type="negotiation"),
            Audit(user.id, UserType.CLIENT, f'Proposed {amount} for "{title}"', "negotiation",
                  billing.billingID, "billing",
                  {"amount": str(amount), "round": billing.negotiation_rounds}),
        ])

    logger.info("Billing %s negotiated to %s (round %s)", billing.invoice_no, amount, billing.negotiation_rounds)
    return billing


def approve_billing(design_id, user):
    with transaction.atomic():
        billing = _billing_for_design(design_id, lock=True)
        if not (user.is_staff or user.id == billing.clientID_id):
            raise Unauthorized("Only the client can approve this bill")

        previous = billing.status
        billing.status = next_billing_status(billing.status, BillingOp.APPROVE)
        if previous == BillingStatus.APPROVED:
            return billing
        if not billing.final_amount:
            billing.final_amount = billing.starting_amount + billing.addons_total
        billing.save(update_fields=["status", "final_amount"])

        title = billing.design.request.request_title
        dispatch([
            Notify(billing.designerID_id, UserType.DESIGNER,
                   f'The client approved the bill for "{title}" at {billing.total_amount}.',
                   title="Bill approved", type="billing_approved"),
            NotifyAdmins(f'Invoice {billing.invoice_no} for "{title}" was approved at {billing.total_amount}.',
                         title="Bill approved", type="billing_approved"),
            Audit(billing.clientID_id, UserType.CLIENT, f'Approved the bill for "{title}"', "approve",
                  billing.billingID, "billing", {"final_amount": str(billing.final_amount)}),
        ])

    logger.info("Billing %s approved at %s", billing.invoice_no, billing.final_amount)
    return billing
