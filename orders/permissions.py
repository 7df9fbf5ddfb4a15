from rest_framework import permissions
from .models import Designer


class IsDesigner(permissions.BasePermission):
    """
    Allows access only to users with a designer profile.
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated) and \
            Designer.objects.filter(userId=request.user).exists()


class IsDesignerOrAdmin(IsDesigner):
    """
    Designers and staff users.
    """

    def has_permission(self, request, view):
        if request.user and request.user.is_staff:
            return True
        return super().has_permission(request, view)
