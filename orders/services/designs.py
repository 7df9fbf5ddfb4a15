import logging

from django.db import transaction
from django.db.models import Q

from ..catalog import load_catalog
from ..effects import Audit, Notify, NotifyAdmins, dispatch
from ..exceptions import InvalidState, NotFound, Unauthorized
from ..lifecycle import DesignOp, next_design_status
from ..models import Billing, Comment, Design, DesignPreview, DesignStatus, FabricCanvas, UserType
from ..pricing import compute_bill
from .billing import open_billing

logger = logging.getLogger(__name__)


def is_party(user, design):
    return user.is_staff or user.id in (design.clientID_id, design.designerID_id)


def get_design(design_id, user=None, lock=False):
    designs = Design.objects.select_related("request", "clientID", "designerID")
    if lock:
        designs = designs.select_for_update()
    try:
        design = designs.get(designID=design_id)
    except Design.DoesNotExist:
        raise NotFound("Design not found")
    if user is not None and not is_party(user, design):
        raise Unauthorized("You are not part of this design")
    return design


def _require_designer(user, design):
    if not (user.is_staff or user.id == design.designerID_id):
        raise Unauthorized("Only the assigned designer can do this")


def _require_client(user, design):
    if not (user.is_staff or user.id == design.clientID_id):
        raise Unauthorized("Only the client who owns this design can do this")


def designs_visible_to(user):
    designs = Design.objects.select_related("request", "clientID", "designerID").order_by("-created_at")
    if user.is_staff:
        return designs
    return designs.filter(Q(clientID=user) | Q(designerID=user))


def save_canvas(design_id, user, canvas_json, thumbnail=None, version=None):
    with transaction.atomic():
        design = get_design(design_id, lock=True)
        _require_designer(user, design)
        canvas, _ = FabricCanvas.objects.select_for_update().get_or_create(design=design)
        canvas.canvas_json = canvas_json or ""
        if thumbnail is not None:
            canvas.thumbnail = thumbnail
        if version:
            canvas.version = version
        canvas.save()
    return canvas


def post_preview(design_id, user, preview_image):
    """
    Publish a new preview snapshot for the client.

    A preview posted while a revision is pending puts the design back in progress.
    """
    with transaction.atomic():
        design = get_design(design_id, lock=True)
        _require_designer(user, design)
        previous = design.status
        design.status = next_design_status(design.status, DesignOp.POST_PREVIEW)
        if design.status != previous:
            design.save(update_fields=["status", "updated_at"])
        preview = DesignPreview.objects.create(design=design, preview_image=preview_image)

        title = design.request.request_title
        dispatch([
            Notify(design.clientID_id, UserType.CLIENT, f'A new preview is available for "{title}"',
                   title="New preview", type="preview_posted"),
            Audit(user.id, UserType.DESIGNER, f'Posted a preview for "{title}"', "post",
                  design.designID, "design", {"preview_id": preview.id}),
        ])

    logger.info("Preview %s posted for design %s (%s -> %s)", preview.id, design.designID, previous, design.status)
    return preview


def list_previews(design_id, user):
    design = get_design(design_id, user)
    return design.previews.all()


def latest_preview(design_id, user):
    preview = list_previews(design_id, user).first()
    if preview is None:
        raise NotFound("No previews for this design yet")
    return preview


def add_comment(preview_id, user, comment, images=()):
    """Attach a comment to a preview. Never changes the design status."""
    with transaction.atomic():
        try:
            preview = DesignPreview.objects.select_related("design", "design__request").get(id=preview_id)
        except DesignPreview.DoesNotExist:
            raise NotFound("Preview not found")
        design = preview.design
        if not is_party(user, design):
            raise Unauthorized("You are not part of this design")

        new_comment = Comment.objects.create(preview=preview, user=user, comment=comment, images=list(images))

        if user.id == design.designerID_id:
            recipient, recipient_type, author_type = design.clientID_id, UserType.CLIENT, UserType.DESIGNER
        else:
            recipient, recipient_type = design.designerID_id, UserType.DESIGNER
            author_type = UserType.ADMIN if user.is_staff and user.id != design.clientID_id else UserType.CLIENT
        title = design.request.request_title
        dispatch([
            Notify(recipient, recipient_type, f'New comment on the design for "{title}"',
                   title="New comment", type="comment"),
            Audit(user.id, author_type, "Posted a comment on design", "comment",
                  design.designID, "design", {"preview_id": preview.id}),
        ])
    return new_comment


def request_revision(design_id, user):
    with transaction.atomic():
        design = get_design(design_id, lock=True)
        _require_client(user, design)
        design.status = next_design_status(design.status, DesignOp.REQUEST_REVISION)
        design.revision_count += 1
        design.save(update_fields=["status", "revision_count", "updated_at"])

        title = design.request.request_title
        dispatch([
            Notify(design.designerID_id, UserType.DESIGNER,
                   f'A revision has been requested for the design "{title}"',
                   title="Revision requested", type="revision_requested"),
            Audit(design.clientID_id, UserType.CLIENT, f'Requested revision for design "{title}"', "update",
                  design.designID, "design",
                  {"status": DesignStatus.PENDING_REVISION.value, "revision_count": design.revision_count}),
        ])

    logger.info("Revision %s requested for design %s", design.revision_count, design.designID)
    return design


def approve_design(design_id, user, catalog=None):
    """
    Client sign-off on a design. Returns the design's Billing.

    The bill is priced and created only the first time; approving again, or
    approving a design that an add-on reopened, keeps the existing Billing.
    """
    with transaction.atomic():
        design = get_design(design_id, lock=True)
        _require_client(user, design)
        previous = design.status
        design.status = next_design_status(design.status, DesignOp.APPROVE)

        billing = Billing.objects.filter(design=design).first()
        if previous == DesignStatus.APPROVED and billing is not None:
            return billing

        if billing is None:
            design_request = design.request
            if not design_request.tshirt_type:
                raise InvalidState("Tshirt type not set on request")
            sizes = [(rs.size_id, rs.quantity) for rs in design_request.sizes.order_by("id")]
            breakdown = compute_bill(
                design_request.print_type,
                design_request.tshirt_type,
                sizes,
                design.designerID_id,
                design.revision_count,
                catalog or load_catalog(),
            )
            billing, _ = open_billing(design, breakdown)

        design.save(update_fields=["status", "updated_at"])

        title = design.request.request_title
        dispatch([
            Notify(design.designerID_id, UserType.DESIGNER, f'Your design for "{title}" has been approved.',
                   title="Design approved", type="design_approved"),
            NotifyAdmins(f'The design for "{title}" was approved by the client.',
                         title="Design approved", type="design_approved"),
            Audit(design.clientID_id, UserType.CLIENT, f'Approved design for "{title}"', "design_approval",
                  design.designID, "design",
                  {"status": DesignStatus.APPROVED.value, "amount": str(billing.starting_amount)}),
            Audit(design.designerID_id, UserType.DESIGNER, f'Design for "{title}" was approved', "design_approval",
                  design.designID, "design", {"status": DesignStatus.APPROVED.value}),
        ])

    logger.info("Design %s approved (%s -> approved), billing %s", design.designID, previous, billing.billingID)
    return billing


def _admin_transition(design_id, user, op, client_message, notification_type):
    if not user.is_staff:
        raise Unauthorized("Only admins can change production status")
    with transaction.atomic():
        design = get_design(design_id, lock=True)
        previous = design.status
        design.status = next_design_status(design.status, op)
        design.save(update_fields=["status", "updated_at"])

        title = design.request.request_title
        effects = [
            Audit(user.id, UserType.ADMIN, f'Moved design "{title}" from {previous} to {design.status}', "update",
                  design.designID, "design", {"from": previous, "to": design.status}),
        ]
        if client_message:
            effects.insert(0, Notify(design.clientID_id, UserType.CLIENT, client_message.format(title=title),
                                     title="Order update", type=notification_type))
        dispatch(effects)

    logger.info("Design %s moved %s -> %s by admin %s", design.designID, previous, design.status, user.id)
    return design


def resume_design(design_id, user):
    return _admin_transition(design_id, user, DesignOp.RESUME, None, None)


def start_production(design_id, user):
    return _admin_transition(design_id, user, DesignOp.START_PRODUCTION,
                             'Your order "{title}" is now in production.', "in_production")


def mark_ready_for_pickup(design_id, user):
    return _admin_transition(design_id, user, DesignOp.READY_FOR_PICKUP,
                             'Your order "{title}" is ready for pickup.', "pending_pickup")


def mark_completed(design_id, user):
    return _admin_transition(design_id, user, DesignOp.COMPLETE,
                             'Your order "{title}" has been completed. Thank you!', "completed")
