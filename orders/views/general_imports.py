# orders/views/general_imports.py

# Django REST Framework imports
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

# Project imports
from ..exceptions import OrderError
from ..permissions import IsDesignerOrAdmin


def error_response(error: OrderError):
    return Response({"error": str(error.detail)}, status=error.status_code)


def validation_error_response(serializer):
    return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)
