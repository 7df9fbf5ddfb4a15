from ..models import InventoryItem, PrintPricing, PrintType, ShirtSize, ShirtType
from ..serializers import (
    InventoryItemSerializer, PrintPricingSerializer, PrintTypeSerializer, ShirtSizeSerializer,
    ShirtTypeSerializer,
)
from .general_imports import *


#################
#### CATALOG ####
#################
class ShirtTypeListView(generics.ListAPIView):
    queryset = ShirtType.objects.order_by("type_name")
    serializer_class = ShirtTypeSerializer
    permission_classes = [AllowAny]


class ShirtSizeListView(generics.ListAPIView):
    serializer_class = ShirtSizeSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        sizes = ShirtSize.objects.select_related("type").order_by("type__type_name", "id")
        type_id = self.request.query_params.get("type")
        if type_id:
            sizes = sizes.filter(type_id=type_id)
        return sizes


class PrintTypeListView(generics.ListAPIView):
    queryset = PrintType.objects.order_by("print_type")
    serializer_class = PrintTypeSerializer
    permission_classes = [AllowAny]


class PrintPricingListView(generics.ListAPIView):
    serializer_class = PrintPricingSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        pricing = PrintPricing.objects.select_related("shirt_type", "size").order_by("print_type", "size_id")
        print_type = self.request.query_params.get("print_type")
        if print_type:
            pricing = pricing.filter(print_type=print_type)
        return pricing


class FabricListView(generics.ListAPIView):
    queryset = InventoryItem.objects.filter(category="fabric").order_by("name")
    serializer_class = InventoryItemSerializer
    permission_classes = [IsAuthenticated]
