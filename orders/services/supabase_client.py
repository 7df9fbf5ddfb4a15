import logging
import uuid

from django.conf import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)

_client = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be configured for file uploads")
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client


def bucket_for(kind):
    return settings.TECHSHIRT["BUCKETS"][kind]


def build_file_name(prefix, original_name=""):
    extension = original_name.rsplit(".", 1)[-1].lower() if "." in original_name else "jpg"
    return f"{prefix}/{uuid.uuid4().hex}.{extension}"


def upload_file_to_supabase(file, bucket_name, file_name, content_type="image/jpeg"):
    get_supabase().storage.from_(bucket_name).upload(
        file=file, path=file_name, file_options={"content-type": content_type}
    )
    logger.info("Uploaded %s to bucket %s", file_name, bucket_name)
    return file_name


def upload_image(uploaded_file, kind, prefix):
    """Upload a Django UploadedFile and return the storage handle to persist."""
    file_name = build_file_name(prefix, getattr(uploaded_file, "name", "") or "")
    content_type = getattr(uploaded_file, "content_type", None) or "image/jpeg"
    return upload_file_to_supabase(uploaded_file.read(), bucket_for(kind), file_name, content_type)


def remove_file_from_supabase(bucket_name, file_name):
    response = get_supabase().storage.from_(bucket_name).remove([file_name])

    for message in response or []:
        if isinstance(message, dict) and "error" in message:
            raise Exception(message["error"])

    return True
