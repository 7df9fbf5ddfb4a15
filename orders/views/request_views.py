from ..serializers import DesignRequestCreateSerializer, DesignRequestSerializer, DesignSerializer
from ..services.design_requests import (
    assign_designer, cancel_request, create_design_request, decline_request, requests_visible_to,
)
from .general_imports import *


#########################
#### DESIGN REQUESTS ####
#########################
class DesignRequestCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = DesignRequestCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)
        data = serializer.validated_data

        try:
            design_request = create_design_request(
                client=request.user,
                textile_id=data["textile"],
                sizes=[(s["size"], s["quantity"]) for s in data["sizes"]],
                request_title=data["request_title"],
                tshirt_type=data["tshirt_type"],
                gender=data.get("gender", ""),
                description=data.get("description", ""),
                print_type=data["print_type"],
                preferred_designer_id=data.get("preferred_designer"),
                preferred_date=data.get("preferred_date"),
                references=data.get("references", []),
            )
        except OrderError as e:
            return error_response(e)
        return Response(DesignRequestSerializer(design_request).data, status=status.HTTP_201_CREATED)


class DesignRequestListView(generics.ListAPIView):
    """
    Clients see their own requests, admins see every request.
    """
    serializer_class = DesignRequestSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        requests = requests_visible_to(self.request.user).prefetch_related("sizes__size", "references")
        status_filter = self.request.query_params.get("status")
        if status_filter:
            requests = requests.filter(status=status_filter)
        return requests


class DesignRequestDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, request_id):
        design_request = requests_visible_to(request.user).filter(requestID=request_id).first()
        if design_request is None:
            return Response({"error": "Design request not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(DesignRequestSerializer(design_request).data, status=status.HTTP_200_OK)


class AssignDesignRequestView(APIView):
    permission_classes = [IsAdminUser]

    def post(self, request, request_id):
        designer_id = request.data.get("designer_id")
        if not designer_id:
            return Response({"error": "designer_id is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            design = assign_designer(request_id, designer_id, admin=request.user)
        except OrderError as e:
            return error_response(e)
        return Response(DesignSerializer(design).data, status=status.HTTP_201_CREATED)


class DeclineDesignRequestView(APIView):
    permission_classes = [IsAdminUser]

    def post(self, request, request_id):
        try:
            design_request = decline_request(request_id, request.data.get("reason", ""), admin=request.user)
        except OrderError as e:
            return error_response(e)
        return Response({"message": "Request declined", "status": design_request.status}, status=status.HTTP_200_OK)


class CancelDesignRequestView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, request_id):
        try:
            design_request = cancel_request(request_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response({"message": "Request cancelled", "status": design_request.status}, status=status.HTTP_200_OK)
