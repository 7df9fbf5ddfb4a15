from django.test import SimpleTestCase

from ..exceptions import InvalidState
from ..lifecycle import (
    AddOnOp, BillingOp, DesignOp, RequestOp, design_status_after_addon, next_addon_status,
    next_billing_status, next_design_status, next_request_status,
)
from ..models import AddOnStatus, AddOnType, BillingStatus, DesignStatus, RequestStatus


class DesignTransitionTestCase(SimpleTestCase):
    def test_happy_path(self):
        status = DesignStatus.IN_PROGRESS
        for op, expected in (
            (DesignOp.REQUEST_REVISION, DesignStatus.PENDING_REVISION),
            (DesignOp.POST_PREVIEW, DesignStatus.IN_PROGRESS),
            (DesignOp.APPROVE, DesignStatus.APPROVED),
            (DesignOp.START_PRODUCTION, DesignStatus.IN_PRODUCTION),
            (DesignOp.READY_FOR_PICKUP, DesignStatus.PENDING_PICKUP),
            (DesignOp.COMPLETE, DesignStatus.COMPLETED),
        ):
            status = next_design_status(status, op)
            self.assertEqual(status, expected)

    def test_second_revision_request_is_rejected(self):
        with self.assertRaisesMessage(InvalidState, "Revision already in progress"):
            next_design_status(DesignStatus.PENDING_REVISION, DesignOp.REQUEST_REVISION)

    def test_revision_after_approval_is_rejected(self):
        with self.assertRaises(InvalidState):
            next_design_status(DesignStatus.APPROVED, DesignOp.REQUEST_REVISION)

    def test_approval_from_pending_revision(self):
        self.assertEqual(next_design_status("pending_revision", DesignOp.APPROVE), DesignStatus.APPROVED)

    def test_production_steps_need_their_predecessor(self):
        with self.assertRaises(InvalidState):
            next_design_status(DesignStatus.IN_PROGRESS, DesignOp.START_PRODUCTION)
        with self.assertRaises(InvalidState):
            next_design_status(DesignStatus.APPROVED, DesignOp.COMPLETE)
        with self.assertRaises(InvalidState):
            next_design_status(DesignStatus.IN_PRODUCTION, DesignOp.APPROVE)

    def test_resume_only_from_pending_revision(self):
        self.assertEqual(next_design_status(DesignStatus.PENDING_REVISION, DesignOp.RESUME), DesignStatus.IN_PROGRESS)
        with self.assertRaises(InvalidState):
            next_design_status(DesignStatus.COMPLETED, DesignOp.RESUME)


class AddOnDesignStatusTestCase(SimpleTestCase):
    def test_quantity_reopens_finished_orders(self):
        self.assertEqual(design_status_after_addon(DesignStatus.COMPLETED, AddOnType.QUANTITY), DesignStatus.IN_PRODUCTION)
        self.assertEqual(design_status_after_addon(DesignStatus.PENDING_PICKUP, "quantity"), DesignStatus.IN_PRODUCTION)

    def test_quantity_leaves_other_statuses_alone(self):
        for current in (DesignStatus.IN_PROGRESS, DesignStatus.PENDING_REVISION, DesignStatus.APPROVED,
                        DesignStatus.IN_PRODUCTION):
            self.assertEqual(design_status_after_addon(current, AddOnType.QUANTITY), current)

    def test_design_work_always_reopens_design(self):
        for addon_type in (AddOnType.DESIGN, AddOnType.DESIGN_AND_QUANTITY):
            self.assertEqual(design_status_after_addon(DesignStatus.COMPLETED, addon_type), DesignStatus.IN_PROGRESS)


class OtherTransitionTestCase(SimpleTestCase):
    def test_request_leaves_pending_once(self):
        self.assertEqual(next_request_status(RequestStatus.PENDING, RequestOp.ASSIGN), RequestStatus.APPROVED)
        for op in RequestOp:
            with self.assertRaises(InvalidState):
                next_request_status(RequestStatus.CANCELLED, op)

    def test_approved_billing_cannot_be_negotiated(self):
        with self.assertRaises(InvalidState):
            next_billing_status(BillingStatus.APPROVED, BillingOp.NEGOTIATE)
        self.assertEqual(next_billing_status(BillingStatus.APPROVED, BillingOp.APPROVE), BillingStatus.APPROVED)

    def test_addon_decisions_need_pending(self):
        self.assertEqual(next_addon_status(AddOnStatus.PENDING, AddOnOp.DECLINE), AddOnStatus.DECLINED)
        with self.assertRaises(InvalidState):
            next_addon_status(AddOnStatus.APPROVED, AddOnOp.CANCEL)
