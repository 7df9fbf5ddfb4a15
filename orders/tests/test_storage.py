from unittest.mock import MagicMock, patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from ..services import supabase_client
from .base import OrderFlowTestCase


class SupabaseClientTestCase(SimpleTestCase):
    def setUp(self):
        self.storage = MagicMock()
        patcher = patch.object(supabase_client, "get_supabase")
        self.get_supabase = patcher.start()
        self.get_supabase.return_value.storage.from_.return_value = self.storage
        self.addCleanup(patcher.stop)

    def test_upload_image_uses_bucket_for_kind(self):
        upload = SimpleUploadedFile("front.PNG", b"\x89PNG", content_type="image/png")
        handle = supabase_client.upload_image(upload, "previews", prefix="design-3")

        self.assertTrue(handle.startswith("design-3/"))
        self.assertTrue(handle.endswith(".png"))
        self.get_supabase.return_value.storage.from_.assert_called_with("design-previews")
        self.storage.upload.assert_called_once_with(
            file=b"\x89PNG", path=handle, file_options={"content-type": "image/png"}
        )

    def test_file_name_defaults_to_jpg(self):
        self.assertTrue(supabase_client.build_file_name("user-1", "blob").endswith(".jpg"))

    def test_remove_raises_on_storage_error(self):
        self.storage.remove.return_value = [{"error": "not found"}]
        with self.assertRaisesMessage(Exception, "not found"):
            supabase_client.remove_file_from_supabase("design-previews", "x.png")

        self.storage.remove.return_value = []
        self.assertTrue(supabase_client.remove_file_from_supabase("design-previews", "x.png"))
        self.storage.remove.assert_called_with(["x.png"])


class UnconfiguredSupabaseTestCase(SimpleTestCase):
    @override_settings(SUPABASE_URL="", SUPABASE_KEY="")
    @patch.object(supabase_client, "_client", None)
    def test_missing_credentials(self):
        with self.assertRaises(RuntimeError):
            supabase_client.get_supabase()


class FileRemovalViewTestCase(OrderFlowTestCase):
    def setUp(self):
        super().setUp()
        self.api = APIClient()
        self.api.force_authenticate(user=self.client_user)

    @patch("orders.views.files_views.remove_file_from_supabase", return_value=True)
    def test_users_remove_only_their_own_files(self, mock_remove):
        own = f"user-{self.client_user.id}/abc.png"
        response = self.api.delete("/api/files/upload/", {"handle": own, "kind": "references"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        mock_remove.assert_called_once_with("request-references", own)

        response = self.api.delete("/api/files/upload/", {"handle": "user-999/abc.png"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
