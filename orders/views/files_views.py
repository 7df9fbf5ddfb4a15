import logging

from ..services.supabase_client import bucket_for, remove_file_from_supabase, upload_image
from .general_imports import *

logger = logging.getLogger(__name__)

UPLOAD_KINDS = ("previews", "comments", "addons", "references")


class FileUploadView(APIView):
    """
    Uploads go to the Supabase bucket for their kind under the caller's prefix;
    the returned handle is what other endpoints store.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        file = request.FILES.get("file")
        kind = request.data.get("kind", "references")
        if not file:
            return Response({"error": "No file provided"}, status=status.HTTP_400_BAD_REQUEST)
        if kind not in UPLOAD_KINDS:
            return Response({"error": f"kind must be one of {', '.join(UPLOAD_KINDS)}"},
                            status=status.HTTP_400_BAD_REQUEST)

        try:
            handle = upload_image(file, kind, prefix=f"user-{request.user.id}")
            return Response({"handle": handle, "kind": kind}, status=status.HTTP_201_CREATED)
        except Exception as e:
            logger.exception("Upload failed for user %s", request.user.id)
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def delete(self, request):
        handle = request.data.get("handle", "")
        kind = request.data.get("kind", "references")
        if kind not in UPLOAD_KINDS:
            return Response({"error": f"kind must be one of {', '.join(UPLOAD_KINDS)}"},
                            status=status.HTTP_400_BAD_REQUEST)
        # Users may only remove files under their own prefix
        if not handle.startswith(f"user-{request.user.id}/"):
            return Response({"error": "You can only remove your own files"}, status=status.HTTP_403_FORBIDDEN)

        try:
            remove_file_from_supabase(bucket_for(kind), handle)
        except Exception as e:
            return Response({"error": f"Error removing file: {str(e)}"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"message": "File removed"}, status=status.HTTP_200_OK)
