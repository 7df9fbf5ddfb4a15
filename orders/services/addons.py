import logging
from decimal import Decimal

from django.db import transaction

from ..catalog import load_catalog
from ..effects import Audit, Notify, NotifyAdmins, dispatch
from ..exceptions import InvalidAmount, InvalidState, NotFound, Unauthorized
from ..lifecycle import AddOnOp, design_status_after_addon, next_addon_status
from ..models import AddOnImage, AddOnRequest, AddOnSize, AddOnStatus, AddOnType, Billing, BillingStatus, ShirtSize, UserType
from ..pricing import quantity_price
from .billing import parse_amount
from .design_requests import display_name
from .designs import get_design

logger = logging.getLogger(__name__)

TYPE_LABELS = {
    AddOnType.DESIGN: "design",
    AddOnType.QUANTITY: "quantity",
    AddOnType.DESIGN_AND_QUANTITY: "design and quantity",
}


def _locked_addon(addon_id):
    try:
        return AddOnRequest.objects.select_for_update().select_related("design", "design__request").get(addOnID=addon_id)
    except AddOnRequest.DoesNotExist:
        raise NotFound("Add-on request not found")


def submit_addon(design_id, user, type, reason="", sizes=(), images=()):
    """
    File an add-on request against a design.

    The design is reopened right away: design work puts it back in progress and
    extra shirts on a finished order put it back in production.
    """
    if type not in AddOnType.values:
        raise InvalidState(f"Unknown add-on type '{type}'")

    with transaction.atomic():
        design = get_design(design_id, lock=True)
        if not (user.is_staff or user.id == design.clientID_id):
            raise Unauthorized("Only the client who owns this design can request add-ons")

        addon = AddOnRequest.objects.create(design=design, userID=user, type=type, reason=reason or "")
        if addon.has_quantity:
            if not sizes:
                raise InvalidAmount("Quantity add-ons need at least one size")
            for size_id, quantity in sizes:
                if int(quantity) <= 0:
                    raise InvalidAmount(f"Quantity for size {size_id} must be positive")
                try:
                    size = ShirtSize.objects.get(id=size_id)
                except ShirtSize.DoesNotExist:
                    raise NotFound(f"Shirt size {size_id} not found")
                AddOnSize.objects.create(addon=addon, size=size, quantity=int(quantity))
        for image in images:
            AddOnImage.objects.create(addon=addon, image=image)

        previous = design.status
        design.status = design_status_after_addon(design.status, type)
        if design.status != previous:
            design.save(update_fields=["status", "updated_at"])

        label = TYPE_LABELS[type]
        dispatch([
            NotifyAdmins(f"{display_name(user)} submitted {label} add-ons for design #{design.designID}. "
                         f"Reason: {addon.reason}", title="New add-on request", type="addon_request"),
            Audit(user.id, UserType.ADMIN if user.is_staff else UserType.CLIENT,
                  f"Submitted {label} add-ons request", "addon_request", addon.addOnID, "addon",
                  {"design_id": design.designID, "design_status": design.status}),
        ])

    logger.info("Add-on %s (%s) submitted for design %s, status %s -> %s",
                addon.addOnID, type, design.designID, previous, design.status)
    return addon


def approve_addon(addon_id, user, fee, catalog=None):
    """
    Approve a pending add-on and add its cost to the design's bill.

    Extra shirts are priced from the print pricing table; the admin fee is added
    as given. The bill goes back to pending so the client can approve the new
    total. A design that has not been billed yet keeps the charges on the
    add-on, and open_billing adds them when the bill is created.
    """
    if not user.is_staff:
        raise Unauthorized("Only admins can approve add-ons")
    fee = parse_amount(fee)

    with transaction.atomic():
        addon = _locked_addon(addon_id)
        new_status = next_addon_status(addon.status, AddOnOp.APPROVE)
        if addon.type == AddOnType.DESIGN and fee <= 0:
            raise InvalidAmount("A design add-on needs a fee greater than zero")

        design = get_design(addon.design_id, lock=True)
        billing = Billing.objects.select_for_update().filter(design=design).first()

        extra = Decimal("0")
        if addon.has_quantity:
            design_request = design.request
            extra = quantity_price(
                [(s.size_id, s.quantity) for s in addon.sizes.order_by("id")],
                catalog or load_catalog(),
                print_type=design_request.print_type,
                shirt_type=design_request.tshirt_type,
            )

        # An unbilled design keeps the charges on the add-on until its bill opens
        if billing is not None:
            if not billing.final_amount:
                billing.final_amount = billing.starting_amount + billing.addons_total
            billing.addons_shirt_price += extra
            billing.addons_fee += fee
            billing.final_amount += extra + fee
            billing.status = BillingStatus.PENDING
            billing.save(update_fields=["addons_shirt_price", "addons_fee", "final_amount", "status"])

        addon.status = new_status
        addon.fee = fee
        addon.price = extra
        addon.save(update_fields=["status", "fee", "price", "updated_at"])

        previous = design.status
        design.status = design_status_after_addon(design.status, addon.type)
        if design.status != previous:
            design.save(update_fields=["status", "updated_at"])

        label = TYPE_LABELS[addon.type]
        total = extra + fee
        dispatch([
            Notify(design.clientID_id, UserType.CLIENT,
                   f"Your {label} add-ons request was approved. {total} was added to your bill.",
                   title="Add-on approved", type="addon_approved"),
            Audit(user.id, UserType.ADMIN, f"Approved {label} add-ons for design #{design.designID}",
                  "addon_approval", addon.addOnID, "addon",
                  {"fee": str(fee), "price": str(extra), "design_status": design.status}),
            Audit(design.clientID_id, UserType.CLIENT, "Your add-ons request was approved", "addon_approval",
                  addon.addOnID, "addon", {"amount": str(total)}),
        ])

    logger.info("Add-on %s approved: +%s shirts, +%s fee on billing %s",
                addon.addOnID, extra, fee, billing.invoice_no if billing is not None else "(not yet billed)")
    return addon


def decline_addon(addon_id, user, reason):
    if not reason or not str(reason).strip():
        raise InvalidState("A decline reason is required")
    if not user.is_staff:
        raise Unauthorized("Only admins can decline add-ons")

    with transaction.atomic():
        addon = _locked_addon(addon_id)
        addon.status = next_addon_status(addon.status, AddOnOp.DECLINE)
        addon.admin_note = reason.strip()
        addon.save(update_fields=["status", "admin_note", "updated_at"])

        label = TYPE_LABELS[addon.type]
        dispatch([
            Notify(addon.design.clientID_id, UserType.CLIENT,
                   f"Your {label} add-ons request was declined. Reason: {addon.admin_note}",
                   title="Add-on declined", type="addon_declined"),
            Audit(user.id, UserType.ADMIN, f"Declined {label} add-ons for design #{addon.design_id}",
                  "addon_approval", addon.addOnID, "addon", {"reason": addon.admin_note}),
        ])

    logger.info("Add-on %s declined", addon.addOnID)
    return addon


def cancel_addon(addon_id, user):
    with transaction.atomic():
        addon = _locked_addon(addon_id)
        if addon.userID_id != user.id:
            raise Unauthorized("Only the requester can cancel this add-on")
        addon.status = next_addon_status(addon.status, AddOnOp.CANCEL)
        addon.save(update_fields=["status", "updated_at"])
        dispatch([
            Audit(user.id, UserType.CLIENT, f"Cancelled add-ons request for design #{addon.design_id}", "update",
                  addon.addOnID, "addon", {"status": addon.status}),
        ])
    return addon


def addons_for_design(design_id, user):
    design = get_design(design_id, user)
    return design.addons.prefetch_related("sizes__size", "images")


def pending_addons():
    return AddOnRequest.objects.filter(status=AddOnStatus.PENDING).select_related("design", "userID")
