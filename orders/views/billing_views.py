from ..services.billing import approve_billing, billing_detail, get_billing, negotiate
from .general_imports import *


#################
#### BILLING ####
#################
class BillingDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, design_id):
        try:
            billing = get_billing(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(billing_detail(billing), status=status.HTTP_200_OK)


class NegotiateBillingView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, design_id):
        amount = request.data.get("amount")
        if amount in (None, ""):
            return Response({"error": "amount is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            billing = negotiate(design_id, request.user, amount)
        except OrderError as e:
            return error_response(e)
        return Response(billing_detail(billing), status=status.HTTP_200_OK)


class ApproveBillingView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, design_id):
        try:
            billing = approve_billing(design_id, request.user)
        except OrderError as e:
            return error_response(e)
        return Response(billing_detail(billing), status=status.HTTP_200_OK)
