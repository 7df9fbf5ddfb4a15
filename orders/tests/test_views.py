from decimal import Decimal
from unittest.mock import patch

from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status
from rest_framework.test import APIClient

from ..models import Design, DesignRequest, Notification
from .base import OrderFlowTestCase


class OrderApiTestCase(OrderFlowTestCase):
    def setUp(self):
        """
        Authenticated API clients for each role.
        """
        super().setUp()
        self.api = APIClient()
        self.api.force_authenticate(user=self.client_user)
        self.admin_api = APIClient()
        self.admin_api.force_authenticate(user=self.admin_user)
        self.designer_api = APIClient()
        self.designer_api.force_authenticate(user=self.designer_user)

    def request_payload(self, **overrides):
        payload = {
            "textile": self.fabric.id,
            "request_title": "Team shirts",
            "tshirt_type": "Round Neck",
            "print_type": "screen",
            "sizes": [{"size": self.size_m.id, "quantity": 10}, {"size": self.size_l.id, "quantity": 5}],
        }
        payload.update(overrides)
        return payload

    def test_anonymous_requests_are_rejected(self):
        response = APIClient().get("/api/design-requests/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_and_list_requests(self):
        response = self.api.post("/api/design-requests/create/", self.request_payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(len(response.data["sizes"]), 2)

        listing = self.api.get("/api/design-requests/")
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual([r["requestID"] for r in listing.data], [response.data["requestID"]])

        other = APIClient()
        other.force_authenticate(user=self.other_client)
        self.assertEqual(other.get("/api/design-requests/").data, [])

    def test_create_request_validation_and_domain_errors(self):
        response = self.api.post("/api/design-requests/create/", self.request_payload(sizes=[]), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("sizes", response.data["error"])

        response = self.api.post("/api/design-requests/create/", self.request_payload(textile=9999), format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Fabric not found")

    def test_assign_is_admin_only(self):
        design_request = self.create_request()
        url = f"/api/design-requests/{design_request.requestID}/assign/"

        response = self.api.post(url, {"designer_id": self.designer_user.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.admin_api.post(url, {"designer_id": self.designer_user.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "in_progress")
        self.assertTrue(Design.objects.filter(request=design_request).exists())

        response = self.admin_api.post(url, {"designer_id": self.designer_user.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_decline_and_cancel(self):
        first = self.create_request()
        second = self.create_request()

        response = self.admin_api.post(f"/api/design-requests/{first.requestID}/decline/", {"reason": ""}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        response = self.admin_api.post(f"/api/design-requests/{first.requestID}/decline/",
                                       {"reason": "Out of scope"}, format="json")
        self.assertEqual(response.data["status"], "declined")

        other = APIClient()
        other.force_authenticate(user=self.other_client)
        response = other.post(f"/api/design-requests/{second.requestID}/cancel/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.api.post(f"/api/design-requests/{second.requestID}/cancel/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(DesignRequest.objects.get(pk=second.pk).status, "cancelled")

    def test_design_flow_through_billing(self):
        design = self.create_design()
        base = f"/api/designs/{design.designID}"

        response = self.api.post(f"{base}/previews/", {"preview_image": "previews/v0.png"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.designer_api.post(f"{base}/previews/", {"preview_image": "previews/v1.png"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        preview_id = response.data["id"]

        response = self.api.post(f"/api/previews/{preview_id}/comments/", {"comment": "Looks great"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.api.get(f"{base}/previews/latest/")
        self.assertEqual(response.data["id"], preview_id)
        self.assertEqual(len(response.data["comments"]), 1)

        response = self.api.post(f"{base}/approve/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["starting_amount"], Decimal("2000"))

        response = self.api.post(f"{base}/billing/negotiate/", {"amount": "1700"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("1800", response.data["error"])

        response = self.api.post(f"{base}/billing/negotiate/", {"amount": "1900"}, format="json")
        self.assertEqual(response.data["final_amount"], Decimal("1900"))
        self.assertEqual(response.data["negotiation_rounds_left"], 4)

        response = self.api.post(f"{base}/billing/approve/")
        self.assertEqual(response.data["status"], "approved")

        response = self.designer_api.get(f"{base}/billing/")
        self.assertEqual(response.data["total_amount"], Decimal("1900"))

    def test_design_status_endpoint(self):
        design, _ = self.create_billed_design()
        url = f"/api/designs/{design.designID}/status/start-production/"

        self.assertEqual(self.api.post(url).status_code, status.HTTP_403_FORBIDDEN)
        response = self.admin_api.post(url)
        self.assertEqual(response.data["status"], "in_production")
        response = self.admin_api.post(f"/api/designs/{design.designID}/status/complete/")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        response = self.admin_api.post(f"/api/designs/{design.designID}/status/teleport/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_addon_endpoints(self):
        design, _ = self.create_billed_design()
        response = self.api.post(f"/api/designs/{design.designID}/addons/",
                                 {"type": "quantity", "reason": "More", "sizes": [{"size": self.size_s.id, "quantity": 2}]},
                                 format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        addon_id = response.data["addOnID"]

        pending = self.admin_api.get("/api/addons/pending/")
        self.assertEqual([a["addOnID"] for a in pending.data], [addon_id])

        response = self.admin_api.post(f"/api/addons/{addon_id}/approve/", {"fee": "0"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "approved")

        billing = self.api.get(f"/api/designs/{design.designID}/billing/")
        self.assertEqual(billing.data["addons_shirt_price"], Decimal("300"))

    def test_notifications_and_history(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.create_request()

        response = self.admin_api.get("/api/notifications/")
        self.assertEqual(len(response.data), 1)
        notification_id = response.data[0]["id"]

        response = self.admin_api.post(f"/api/notifications/{notification_id}/read/")
        self.assertTrue(response.data["is_read"])
        self.assertEqual(self.admin_api.get("/api/notifications/?unread=true").data, [])
        self.assertEqual(self.api.post(f"/api/notifications/{notification_id}/read/").status_code,
                         status.HTTP_404_NOT_FOUND)

        response = self.api.get("/api/history/")
        self.assertEqual(response.data[0]["action_type"], "design_request")

        Notification.objects.create(recipient=self.client_user, recipient_user_type="client", notif_content="x")
        response = self.api.post("/api/notifications/read-all/")
        self.assertEqual(response.data["updated"], 1)

    def test_catalog_listing(self):
        response = APIClient().get("/api/catalog/print-pricing/?print_type=screen")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)
        response = self.api.get("/api/catalog/fabrics/")
        self.assertEqual(response.data[0]["name"], "Cotton")

    @patch("orders.views.files_views.upload_image", return_value="user-1/abc.png")
    def test_file_upload(self, mock_upload):
        upload = SimpleUploadedFile("logo.png", b"\x89PNG", content_type="image/png")
        response = self.api.post("/api/files/upload/", {"file": upload, "kind": "references"}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["handle"], "user-1/abc.png")
        mock_upload.assert_called_once()

        response = self.api.post("/api/files/upload/", {"kind": "references"}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
