from ..serializers import AddOnCreateSerializer, AddOnRequestSerializer
from ..services import addons as addon_service
from .general_imports import *


#################
#### ADD-ONS ####
#################
class DesignAddOnListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, design_id):
        try:
            addons = addon_service.addons_for_design(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(AddOnRequestSerializer(addons, many=True).data, status=status.HTTP_200_OK)

    def post(self, request, design_id):
        serializer = AddOnCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)
        data = serializer.validated_data
        try:
            addon = addon_service.submit_addon(
                design_id, request.user, data["type"],
                reason=data.get("reason", ""),
                sizes=[(s["size"], s["quantity"]) for s in data.get("sizes", [])],
                images=data.get("images", []),
            )
        except OrderError as e:
            return error_response(e)
        return Response(AddOnRequestSerializer(addon).data, status=status.HTTP_201_CREATED)


class PendingAddOnListView(generics.ListAPIView):
    serializer_class = AddOnRequestSerializer
    permission_classes = [IsAdminUser]

    def get_queryset(self):
        return addon_service.pending_addons().prefetch_related("sizes__size", "images")


class ApproveAddOnView(APIView):
    permission_classes = [IsAdminUser]

    def post(self, request, addon_id):
        fee = request.data.get("fee", 0)
        try:
            addon = addon_service.approve_addon(addon_id, request.user, fee)
        except OrderError as e:
            return error_response(e)
        return Response(AddOnRequestSerializer(addon).data, status=status.HTTP_200_OK)


class DeclineAddOnView(APIView):
    permission_classes = [IsAdminUser]

    def post(self, request, addon_id):
        try:
            addon = addon_service.decline_addon(addon_id, request.user, request.data.get("reason", ""))
        except OrderError as e:
            return error_response(e)
        return Response(AddOnRequestSerializer(addon).data, status=status.HTTP_200_OK)


class CancelAddOnView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, addon_id):
        try:
            addon = addon_service.cancel_addon(addon_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(AddOnRequestSerializer(addon).data, status=status.HTTP_200_OK)
