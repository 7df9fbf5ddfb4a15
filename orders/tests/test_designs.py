from decimal import Decimal

from ..exceptions import InvalidState, Mismatch, NotFound, Unauthorized
from ..models import Billing, DesignerPricing, DesignStatus, FabricCanvas, HistoryEntry, Notification
from ..services import designs as design_service
from .base import OrderFlowTestCase


class DesignProgressTestCase(OrderFlowTestCase):
    def setUp(self):
        super().setUp()
        self.design = self.create_design()

    def test_revision_cycle(self):
        with self.captureOnCommitCallbacks(execute=True):
            design = design_service.request_revision(self.design.designID, self.client_user)
        self.assertEqual(design.status, DesignStatus.PENDING_REVISION)
        self.assertEqual(design.revision_count, 1)
        self.assertTrue(Notification.objects.filter(recipient=self.designer_user, type="revision_requested").exists())

        with self.assertRaisesMessage(InvalidState, "Revision already in progress"):
            design_service.request_revision(self.design.designID, self.client_user)
        self.design.refresh_from_db()
        self.assertEqual(self.design.revision_count, 1)

        design_service.post_preview(self.design.designID, self.designer_user, "design-7/v2.png")
        self.design.refresh_from_db()
        self.assertEqual(self.design.status, DesignStatus.IN_PROGRESS)

        design_service.request_revision(self.design.designID, self.client_user)
        self.design.refresh_from_db()
        self.assertEqual(self.design.revision_count, 2)

    def test_only_client_requests_revisions(self):
        with self.assertRaises(Unauthorized):
            design_service.request_revision(self.design.designID, self.other_client)

    def test_previews_are_listed_newest_first(self):
        first = design_service.post_preview(self.design.designID, self.designer_user, "a.png")
        second = design_service.post_preview(self.design.designID, self.designer_user, "b.png")
        previews = list(design_service.list_previews(self.design.designID, self.client_user))
        self.assertEqual([p.id for p in previews], [second.id, first.id])
        self.assertEqual(design_service.latest_preview(self.design.designID, self.client_user), second)

    def test_latest_preview_without_previews(self):
        with self.assertRaises(NotFound):
            design_service.latest_preview(self.design.designID, self.client_user)

    def test_only_designer_posts_previews(self):
        with self.assertRaises(Unauthorized):
            design_service.post_preview(self.design.designID, self.client_user, "a.png")

    def test_comments_do_not_change_status(self):
        preview = design_service.post_preview(self.design.designID, self.designer_user, "a.png")
        design_service.request_revision(self.design.designID, self.client_user)

        with self.captureOnCommitCallbacks(execute=True):
            comment = design_service.add_comment(preview.id, self.client_user, "Make the logo bigger", ["c/1.png"])

        self.design.refresh_from_db()
        self.assertEqual(self.design.status, DesignStatus.PENDING_REVISION)
        self.assertEqual(comment.images, ["c/1.png"])
        self.assertTrue(Notification.objects.filter(recipient=self.designer_user, type="comment").exists())
        self.assertTrue(HistoryEntry.objects.filter(user=self.client_user, action_type="comment").exists())

        with self.assertRaises(Unauthorized):
            design_service.add_comment(preview.id, self.other_client, "hi")

    def test_canvas_is_overwritten(self):
        design_service.save_canvas(self.design.designID, self.designer_user, '{"objects": []}', version="1.0.1")
        canvas = design_service.save_canvas(self.design.designID, self.designer_user, '{"objects": [1]}',
                                            thumbnail="thumb.png")
        self.assertEqual(canvas.canvas_json, '{"objects": [1]}')
        self.assertEqual(canvas.version, "1.0.1")
        self.assertEqual(canvas.thumbnail, "thumb.png")
        self.assertEqual(FabricCanvas.objects.filter(design=self.design).count(), 1)

    def test_admin_resume(self):
        design_service.request_revision(self.design.designID, self.client_user)
        with self.assertRaises(Unauthorized):
            design_service.resume_design(self.design.designID, self.client_user)
        design = design_service.resume_design(self.design.designID, self.admin_user)
        self.assertEqual(design.status, DesignStatus.IN_PROGRESS)


class DesignApprovalTestCase(OrderFlowTestCase):
    def setUp(self):
        super().setUp()
        self.design = self.create_design()

    def test_approval_prices_and_opens_billing(self):
        with self.captureOnCommitCallbacks(execute=True):
            billing = design_service.approve_design(self.design.designID, self.client_user)

        self.design.refresh_from_db()
        self.assertEqual(self.design.status, DesignStatus.APPROVED)
        self.assertEqual(billing.starting_amount, Decimal("2000"))
        self.assertEqual(billing.printing_fee, Decimal("1500"))
        self.assertEqual(billing.designer_fee, Decimal("500"))
        self.assertEqual(billing.final_amount, Decimal("0"))
        self.assertEqual(billing.negotiation_rounds, 0)
        self.assertEqual(billing.negotiation_history, [])
        self.assertEqual(billing.invoice_no, f"INV-{billing.billingID:06d}")
        self.assertEqual(len(billing.shirts), 2)

        self.assertTrue(Notification.objects.filter(recipient=self.designer_user, type="design_approved").exists())
        self.assertTrue(Notification.objects.filter(recipient=self.admin_user, type="design_approved").exists())
        self.assertEqual(HistoryEntry.objects.filter(action_type="design_approval").count(), 2)

    def test_revisions_are_billed(self):
        design_service.request_revision(self.design.designID, self.client_user)
        billing = design_service.approve_design(self.design.designID, self.client_user)
        self.assertEqual(billing.revision_fee, Decimal("200"))
        self.assertEqual(billing.starting_amount, Decimal("2200"))

    def test_reapproval_keeps_existing_billing(self):
        billing = design_service.approve_design(self.design.designID, self.client_user)
        DesignerPricing.objects.update(normal_amount=Decimal("9999"))

        again = design_service.approve_design(self.design.designID, self.client_user)

        self.assertEqual(again.pk, billing.pk)
        self.assertEqual(again.starting_amount, Decimal("2000"))
        self.assertEqual(Billing.objects.filter(design=self.design).count(), 1)

    def test_reopened_design_is_approved_without_repricing(self):
        billing = design_service.approve_design(self.design.designID, self.client_user)
        self.design.status = DesignStatus.IN_PROGRESS
        self.design.revision_count = 5
        self.design.save()

        again = design_service.approve_design(self.design.designID, self.client_user)

        self.assertEqual(again.pk, billing.pk)
        self.assertEqual(again.starting_amount, Decimal("2000"))
        self.design.refresh_from_db()
        self.assertEqual(self.design.status, DesignStatus.APPROVED)

    def test_only_the_client_approves(self):
        with self.assertRaises(Unauthorized):
            design_service.approve_design(self.design.designID, self.designer_user)

    def test_pricing_failure_rolls_back_approval(self):
        self.design.request.tshirt_type = "V Neck"
        self.design.request.save()
        with self.assertRaises(Mismatch):
            design_service.approve_design(self.design.designID, self.client_user)
        self.design.refresh_from_db()
        self.assertEqual(self.design.status, DesignStatus.IN_PROGRESS)
        self.assertFalse(Billing.objects.exists())


class ProductionTestCase(OrderFlowTestCase):
    def test_admin_moves_order_through_production(self):
        design, _ = self.create_billed_design()

        with self.assertRaises(InvalidState):
            design_service.mark_completed(design.designID, self.admin_user)

        with self.captureOnCommitCallbacks(execute=True):
            design_service.start_production(design.designID, self.admin_user)
            design_service.mark_ready_for_pickup(design.designID, self.admin_user)
            design = design_service.mark_completed(design.designID, self.admin_user)

        self.assertEqual(design.status, DesignStatus.COMPLETED)
        self.assertTrue(Notification.objects.filter(recipient=self.client_user, type="pending_pickup").exists())

    def test_production_needs_admin(self):
        design, _ = self.create_billed_design()
        with self.assertRaises(Unauthorized):
            design_service.start_production(design.designID, self.client_user)

    def test_cannot_start_production_before_approval(self):
        design = self.create_design()
        with self.assertRaises(InvalidState):
            design_service.start_production(design.designID, self.admin_user)
