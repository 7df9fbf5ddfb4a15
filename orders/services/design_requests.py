import logging

from django.db import transaction

from ..catalog import has_enough_fabric
from ..effects import Audit, Notify, NotifyAdmins, dispatch
from ..exceptions import InvalidAmount, InvalidState, NotFound, Unauthorized
from ..lifecycle import RequestOp, next_request_status
from ..models import (
    Design, DesignRequest, Designer, DesignStatus, FabricCanvas, InventoryItem,
    RequestReference, RequestSize, RequestStatus, ShirtSize, UserType,
)

logger = logging.getLogger(__name__)


def display_name(user):
    full_name = f"{user.first_name} {user.last_name}".strip()
    return full_name or user.username


def _resolve_sizes(sizes):
    """Turn (size_id, quantity) pairs into (ShirtSize, quantity), validating both."""
    resolved = []
    for size_id, quantity in sizes:
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            raise InvalidAmount(f"Invalid quantity for size {size_id}")
        if quantity <= 0:
            raise InvalidAmount(f"Quantity for size {size_id} must be positive")
        try:
            size = ShirtSize.objects.get(id=size_id)
        except ShirtSize.DoesNotExist:
            raise NotFound(f"Shirt size {size_id} not found")
        resolved.append((size, quantity))
    return resolved


def request_yardage_pairs(design_request):
    return [(rs.size.size_label, rs.quantity) for rs in design_request.sizes.select_related("size")]


def create_design_request(client, textile_id, sizes, request_title, tshirt_type="", gender="",
                          description="", print_type=None, preferred_designer_id=None,
                          preferred_date=None, references=()):
    """
    Register a new design request for a client.

    A shortage of fabric only produces a warning for the client; the request is
    created either way. Returns the new DesignRequest.
    """
    with transaction.atomic():
        try:
            textile = InventoryItem.objects.get(id=textile_id)
        except InventoryItem.DoesNotExist:
            raise NotFound("Fabric not found")
        resolved = _resolve_sizes(sizes)
        if not resolved:
            raise InvalidAmount("At least one shirt size is required")

        preferred_designer = None
        if preferred_designer_id:
            try:
                preferred_designer = Designer.objects.select_related("userId").get(userId_id=preferred_designer_id).userId
            except Designer.DoesNotExist:
                raise NotFound("Preferred designer not found")

        design_request = DesignRequest.objects.create(
            clientID=client,
            textile=textile,
            request_title=request_title,
            tshirt_type=tshirt_type or "",
            gender=gender or "",
            description=description or "",
            print_type=print_type,
            preferred_designer=preferred_designer,
            preferred_date=preferred_date,
        )
        RequestSize.objects.bulk_create([
            RequestSize(request=design_request, size=size, quantity=quantity)
            for size, quantity in resolved
        ])
        for reference in references:
            RequestReference.objects.create(
                request=design_request,
                design_image=reference["design_image"],
                description=reference.get("description"),
            )

        effects = []
        pairs = [(size.size_label, quantity) for size, quantity in resolved]
        if not has_enough_fabric(textile.stock, pairs):
            effects.append(Notify(
                client.id, UserType.CLIENT,
                f'Warning: Your order "{request_title}" may be delayed for at least 7 days due to '
                f'insufficient stock of fabric that you have chosen.',
                title="Possible delay", type="stock_warning",
            ))
        effects += [
            NotifyAdmins(
                f'{display_name(client)} has submitted a new design request: "{request_title}"',
                title="New design request", type="design_request",
            ),
            Audit(client.id, UserType.CLIENT, f'Submitted design request: "{request_title}"',
                  "design_request", design_request.requestID, "design_request",
                  {"status": RequestStatus.PENDING.value, "total_shirts": sum(q for _, q in resolved)}),
        ]
        dispatch(effects)

    logger.info("Design request %s created by user %s", design_request.requestID, client.id)
    return design_request


def _locked_request(request_id):
    try:
        return DesignRequest.objects.select_for_update().get(requestID=request_id)
    except DesignRequest.DoesNotExist:
        raise NotFound("Design request not found")


def assign_designer(request_id, designer_id, admin=None):
    """
    Approve a pending request and hand it to a designer.

    Creates the Design and its empty canvas in the same transaction as the
    request approval. Returns the new Design.
    """
    with transaction.atomic():
        design_request = _locked_request(request_id)
        new_status = next_request_status(design_request.status, RequestOp.ASSIGN)

        textile = design_request.textile
        if textile is None:
            raise NotFound("Fabric for this request no longer exists")
        try:
            designer = Designer.objects.select_related("userId").get(userId_id=designer_id).userId
        except Designer.DoesNotExist:
            raise NotFound("Designer not found")

        design_request.status = new_status
        design_request.preferred_designer = designer
        design_request.save(update_fields=["status", "preferred_designer"])

        design = Design.objects.create(
            request=design_request,
            clientID=design_request.clientID,
            designerID=designer,
            revision_count=0,
            status=DesignStatus.IN_PROGRESS,
            deadline=design_request.preferred_date,
        )
        FabricCanvas.objects.create(design=design)

        title = design_request.request_title
        client_id = design_request.clientID_id
        designer_name = display_name(designer)
        if has_enough_fabric(textile.stock, request_yardage_pairs(design_request)):
            client_message = f'Your order "{title}" has been approved and been assigned to a designer'
        else:
            client_message = (
                f'Heads up: Your order "{title}" has now been approved. However, production will be '
                f'delayed due to insufficient stock of the chosen fabric. We are sourcing additional '
                f'yards to fulfill your request.'
            )
        effects = [
            Notify(client_id, UserType.CLIENT, client_message, title="Request approved", type="request_approved"),
            Notify(designer.id, UserType.DESIGNER, f'You have been assigned a new design request: "{title}"',
                   title="New assignment", type="design_assigned"),
        ]
        if admin is not None:
            effects.append(Audit(admin.id, UserType.ADMIN,
                                 f'Approved and assigned design request "{title}" to {designer_name}',
                                 "assign", design_request.requestID, "design_request",
                                 {"designer_id": designer.id}))
        effects += [
            Audit(designer.id, UserType.DESIGNER, f'Assigned to design request: "{title}"',
                  "assign", design.designID, "design"),
            Audit(client_id, UserType.CLIENT,
                  f'Your design request "{title}" was approved and assigned to {designer_name}',
                  "assign", design_request.requestID, "design_request"),
        ]
        dispatch(effects)

    logger.info("Request %s assigned to designer %s as design %s", request_id, designer.id, design.designID)
    return design


def decline_request(request_id, reason, admin=None):
    if not reason or not str(reason).strip():
        raise InvalidState("A decline reason is required")

    with transaction.atomic():
        design_request = _locked_request(request_id)
        design_request.status = next_request_status(design_request.status, RequestOp.DECLINE)
        design_request.decline_reason = reason.strip()
        design_request.save(update_fields=["status", "decline_reason"])

        title = design_request.request_title
        effects = [
            Notify(design_request.clientID_id, UserType.CLIENT,
                   f'Your design request "{title}" was rejected. Reason: {design_request.decline_reason}',
                   title="Request declined", type="request_declined"),
        ]
        if admin is not None:
            effects.append(Audit(admin.id, UserType.ADMIN, f'Declined design request "{title}"', "decline",
                                 design_request.requestID, "design_request",
                                 {"reason": design_request.decline_reason}))
        dispatch(effects)

    logger.info("Request %s declined", request_id)
    return design_request


def cancel_request(request_id, user):
    with transaction.atomic():
        design_request = _locked_request(request_id)
        if design_request.clientID_id != user.id:
            raise Unauthorized("Only the client who submitted this request can cancel it")
        design_request.status = next_request_status(design_request.status, RequestOp.CANCEL)
        design_request.save(update_fields=["status"])

        title = design_request.request_title
        dispatch([
            Notify(user.id, UserType.CLIENT, f'Your request "{title}" has been cancelled.',
                   title="Request cancelled", type="request_cancelled"),
            Audit(user.id, UserType.CLIENT, f'Cancelled design request: "{title}"', "update",
                  design_request.requestID, "design_request", {"status": design_request.status}),
        ])

    logger.info("Request %s cancelled by user %s", request_id, user.id)
    return design_request


def requests_visible_to(user):
    requests = DesignRequest.objects.select_related("clientID", "textile", "preferred_designer")
    if user.is_staff:
        return requests.order_by("-created_at")
    return requests.filter(clientID=user).order_by("-created_at")
