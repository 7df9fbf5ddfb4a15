from ..serializers import NotificationSerializer
from ..services.notifications import (
    delete_notification, mark_all_notifications_as_read, mark_notification_as_read, notifications_for,
)
from .general_imports import *


#######################
#### NOTIFICATIONS ####
#######################
class NotificationListView(generics.ListAPIView):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        unread_only = self.request.query_params.get("unread") in ("1", "true")
        return notifications_for(self.request.user, unread_only=unread_only)


class MarkNotificationReadView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, notification_id):
        try:
            notification = mark_notification_as_read(request.user, notification_id)
        except OrderError as e:
            return error_response(e)
        return Response(NotificationSerializer(notification).data, status=status.HTTP_200_OK)

    def delete(self, request, notification_id):
        try:
            delete_notification(request.user, notification_id)
        except OrderError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MarkAllNotificationsReadView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        updated = mark_all_notifications_as_read(request.user)
        return Response({"updated": updated}, status=status.HTTP_200_OK)
