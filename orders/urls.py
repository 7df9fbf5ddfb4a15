from django.urls import path

from .views.addon_views import (
    ApproveAddOnView, CancelAddOnView, DeclineAddOnView, DesignAddOnListCreateView, PendingAddOnListView,
)
from .views.billing_views import ApproveBillingView, BillingDetailView, NegotiateBillingView
from .views.catalog_views import (
    FabricListView, PrintPricingListView, PrintTypeListView, ShirtSizeListView, ShirtTypeListView,
)
from .views.design_views import (
    ApproveDesignView, DesignCanvasView, DesignDetailView, DesignListView, DesignPreviewListCreateView,
    DesignStatusView, LatestDesignPreviewView, PreviewCommentCreateView, RequestRevisionView,
)
from .views.files_views import FileUploadView
from .views.notification_views import MarkAllNotificationsReadView, MarkNotificationReadView, NotificationListView
from .views.request_views import (
    AssignDesignRequestView, CancelDesignRequestView, DeclineDesignRequestView, DesignRequestCreateView,
    DesignRequestDetailView, DesignRequestListView,
)
from .views.user_views import ReturnUserDataView, UserHistoryListView


urlpatterns = [
    # User-related URLs
    path("user/data/", ReturnUserDataView.as_view(), name="user-data"),
    path("history/", UserHistoryListView.as_view(), name="user-history"),

    # Catalog URLs
    path("catalog/shirt-types/", ShirtTypeListView.as_view(), name="shirt-type-list"),
    path("catalog/shirt-sizes/", ShirtSizeListView.as_view(), name="shirt-size-list"),
    path("catalog/print-types/", PrintTypeListView.as_view(), name="print-type-list"),
    path("catalog/print-pricing/", PrintPricingListView.as_view(), name="print-pricing-list"),
    path("catalog/fabrics/", FabricListView.as_view(), name="fabric-list"),

    # Design Request URLs
    path("design-requests/", DesignRequestListView.as_view(), name="design-request-list"),
    path("design-requests/create/", DesignRequestCreateView.as_view(), name="design-request-create"),
    path("design-requests/<int:request_id>/", DesignRequestDetailView.as_view(), name="design-request-detail"),
    path("design-requests/<int:request_id>/assign/", AssignDesignRequestView.as_view(), name="design-request-assign"),
    path("design-requests/<int:request_id>/decline/", DeclineDesignRequestView.as_view(), name="design-request-decline"),
    path("design-requests/<int:request_id>/cancel/", CancelDesignRequestView.as_view(), name="design-request-cancel"),

    # Design URLs
    path("designs/", DesignListView.as_view(), name="design-list"),
    path("designs/<int:design_id>/", DesignDetailView.as_view(), name="design-detail"),
    path("designs/<int:design_id>/canvas/", DesignCanvasView.as_view(), name="design-canvas"),
    path("designs/<int:design_id>/previews/", DesignPreviewListCreateView.as_view(), name="design-previews"),
    path("designs/<int:design_id>/previews/latest/", LatestDesignPreviewView.as_view(), name="design-preview-latest"),
    path("previews/<int:preview_id>/comments/", PreviewCommentCreateView.as_view(), name="preview-comment-create"),
    path("designs/<int:design_id>/revision/", RequestRevisionView.as_view(), name="design-revision"),
    path("designs/<int:design_id>/approve/", ApproveDesignView.as_view(), name="design-approve"),
    path("designs/<int:design_id>/status/<str:action>/", DesignStatusView.as_view(), name="design-status"),

    # Billing URLs
    path("designs/<int:design_id>/billing/", BillingDetailView.as_view(), name="billing-detail"),
    path("designs/<int:design_id>/billing/negotiate/", NegotiateBillingView.as_view(), name="billing-negotiate"),
    path("designs/<int:design_id>/billing/approve/", ApproveBillingView.as_view(), name="billing-approve"),

    # Add-on URLs
    path("designs/<int:design_id>/addons/", DesignAddOnListCreateView.as_view(), name="design-addons"),
    path("addons/pending/", PendingAddOnListView.as_view(), name="addon-pending-list"),
    path("addons/<int:addon_id>/approve/", ApproveAddOnView.as_view(), name="addon-approve"),
    path("addons/<int:addon_id>/decline/", DeclineAddOnView.as_view(), name="addon-decline"),
    path("addons/<int:addon_id>/cancel/", CancelAddOnView.as_view(), name="addon-cancel"),

    # Notification & file URLs
    path("notifications/", NotificationListView.as_view(), name="notification-list"),
    path("notifications/<int:notification_id>/read/", MarkNotificationReadView.as_view(), name="notification-read"),
    path("notifications/read-all/", MarkAllNotificationsReadView.as_view(), name="notification-read-all"),
    path("files/upload/", FileUploadView.as_view(), name="file-upload"),
]
