from ..serializers import (
    CommentSerializer, DesignPreviewSerializer, DesignSerializer, FabricCanvasSerializer,
)
from ..services import designs as design_service
from ..services.billing import billing_detail
from ..services.supabase_client import upload_image
from .general_imports import *


#################
#### DESIGNS ####
#################
class DesignListView(generics.ListAPIView):
    """
    Designs where the user is the client or the designer; admins see all.
    """
    serializer_class = DesignSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        designs = design_service.designs_visible_to(self.request.user)
        status_filter = self.request.query_params.get("status")
        if status_filter:
            designs = designs.filter(status=status_filter)
        return designs


class DesignDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, design_id):
        try:
            design = design_service.get_design(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(DesignSerializer(design).data, status=status.HTTP_200_OK)


class DesignCanvasView(APIView):
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        # Only designers and staff write; any party may read
        if self.request.method in ("POST", "PUT"):
            return [IsDesignerOrAdmin()]
        return super().get_permissions()

    def get(self, request, design_id):
        try:
            design = design_service.get_design(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        canvas = design.canvas if hasattr(design, "canvas") else None
        if canvas is None:
            return Response({"error": "Canvas not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(FabricCanvasSerializer(canvas).data, status=status.HTTP_200_OK)

    def put(self, request, design_id):
        serializer = FabricCanvasSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)
        data = serializer.validated_data
        try:
            canvas = design_service.save_canvas(
                design_id, request.user, data.get("canvas_json", ""),
                thumbnail=data.get("thumbnail"), version=data.get("version"),
            )
        except OrderError as e:
            return error_response(e)
        return Response(FabricCanvasSerializer(canvas).data, status=status.HTTP_200_OK)


class DesignPreviewListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.request.method in ("POST", "PUT"):
            return [IsDesignerOrAdmin()]
        return super().get_permissions()

    def get(self, request, design_id):
        try:
            previews = design_service.list_previews(design_id, request.user).prefetch_related("comments__user")
        except OrderError as e:
            return error_response(e)
        return Response(DesignPreviewSerializer(previews, many=True).data, status=status.HTTP_200_OK)

    def post(self, request, design_id):
        file = request.FILES.get("file")
        preview_image = request.data.get("preview_image")
        if not file and not preview_image:
            return Response({"error": "A preview file or preview_image handle is required"},
                            status=status.HTTP_400_BAD_REQUEST)
        if file:
            try:
                preview_image = upload_image(file, "previews", prefix=f"design-{design_id}")
            except Exception as e:
                return Response({"error": f"Error uploading preview: {str(e)}"},
                                status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        try:
            preview = design_service.post_preview(design_id, request.user, preview_image)
        except OrderError as e:
            return error_response(e)
        return Response(DesignPreviewSerializer(preview).data, status=status.HTTP_201_CREATED)


class LatestDesignPreviewView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, design_id):
        try:
            preview = design_service.latest_preview(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(DesignPreviewSerializer(preview).data, status=status.HTTP_200_OK)


class PreviewCommentCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, preview_id):
        serializer = CommentSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)
        try:
            comment = design_service.add_comment(
                preview_id, request.user, serializer.validated_data["comment"],
                images=serializer.validated_data.get("images", []),
            )
        except OrderError as e:
            return error_response(e)
        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)


class RequestRevisionView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, design_id):
        try:
            design = design_service.request_revision(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(DesignSerializer(design).data, status=status.HTTP_200_OK)


class ApproveDesignView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, design_id):
        try:
            billing = design_service.approve_design(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(billing_detail(billing), status=status.HTTP_200_OK)


class DesignStatusView(APIView):
    """
    Admin-only status moves: resume, start production, ready for pickup, complete.
    """
    permission_classes = [IsAdminUser]

    actions = {
        "resume": design_service.resume_design,
        "start-production": design_service.start_production,
        "ready-for-pickup": design_service.mark_ready_for_pickup,
        "complete": design_service.mark_completed,
    }

    def post(self, request, design_id, action):
        handler = self.actions.get(action)
        if handler is None:
            return Response({"error": f"Unknown action '{action}'"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            design = handler(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(DesignSerializer(design).data, status=status.HTTP_200_OK)
