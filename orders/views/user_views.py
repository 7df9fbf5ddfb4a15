from ..serializers import HistoryEntrySerializer, UserSerializer
from ..services.history import history_for
from .general_imports import *


###############
#### USERS ####
###############
class ReturnUserDataView(generics.RetrieveAPIView):
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user


class UserHistoryListView(generics.ListAPIView):
    serializer_class = HistoryEntrySerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return history_for(self.request.user, self.request.query_params.get("action_type"))
