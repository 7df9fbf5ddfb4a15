from decimal import Decimal

from django.contrib.auth.models import User
from django.test import TestCase

from ..models import Designer, DesignerPricing, InventoryItem, PrintPricing, PrintType, ShirtSize, ShirtType
from ..services.design_requests import assign_designer, create_design_request
from ..services.designs import approve_design


class OrderFlowTestCase(TestCase):
    """Seeds users and a small catalog shared by the service and view tests."""

    def setUp(self):
        """
        One client, one designer, one admin, a tee with S/M/L sizes priced for
        "screen" printing, and a roll of cotton.
        """
        self.client_user = User.objects.create_user(
            username="client", password="pass1234", email="client@example.com", first_name="Ana", last_name="Cruz"
        )
        self.other_client = User.objects.create_user(username="other", password="pass1234", email="other@example.com")
        self.designer_user = User.objects.create_user(
            username="designer", password="pass1234", email="designer@example.com"
        )
        self.admin_user = User.objects.create_user(
            username="admin", password="pass1234", email="admin@example.com", is_staff=True
        )
        self.designer = Designer.objects.create(userId=self.designer_user)

        self.tee = ShirtType.objects.create(type_name="Round Neck")
        self.size_s = ShirtSize.objects.create(type=self.tee, size_label="S")
        self.size_m = ShirtSize.objects.create(type=self.tee, size_label="M")
        self.size_l = ShirtSize.objects.create(type=self.tee, size_label="L")
        self.screen = PrintType.objects.create(print_type="screen")
        for size, amount in ((self.size_s, "150"), (self.size_m, "100"), (self.size_l, "100")):
            PrintPricing.objects.create(print_ref=self.screen, print_type="screen", shirt_type=self.tee,
                                        size=size, amount=Decimal(amount))

        DesignerPricing.objects.create(designer=None, normal_amount=Decimal("500"), revision_fee=Decimal("200"))
        self.fabric = InventoryItem.objects.create(name="Cotton", stock=Decimal("100"))

    def create_request(self, sizes=None, **overrides):
        sizes = sizes if sizes is not None else [(self.size_m.id, 10), (self.size_l.id, 5)]
        data = {
            "client": self.client_user,
            "textile_id": self.fabric.id,
            "sizes": sizes,
            "request_title": "Team shirts",
            "tshirt_type": "Round Neck",
            "print_type": "screen",
        }
        data.update(overrides)
        return create_design_request(**data)

    def create_design(self, **overrides):
        design_request = self.create_request(**overrides)
        return assign_designer(design_request.requestID, self.designer_user.id, admin=self.admin_user)

    def create_billed_design(self, **overrides):
        design = self.create_design(**overrides)
        billing = approve_design(design.designID, self.client_user)
        design.refresh_from_db()
        return design, billing
