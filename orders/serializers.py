from django.contrib.auth.models import User
from rest_framework import serializers

from .models import (
    AddOnRequest, AddOnSize, AddOnType, Comment, Design, DesignPreview, DesignRequest, Designer,
    FabricCanvas, HistoryEntry, InventoryItem, Notification, PrintPricing, PrintType, RequestSize,
    ShirtSize, ShirtType,
)
from .services.notifications import user_type_of


class UserSerializer(serializers.ModelSerializer):
    user_type = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "first_name", "last_name", "email", "user_type"]
        extra_kwargs = {"id": {"read_only": True}}

    def get_user_type(self, obj):
        return user_type_of(obj)


class DesignerSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="userId.username", read_only=True)

    class Meta:
        model = Designer
        fields = ["userId", "username", "contact_number", "address"]
        extra_kwargs = {"userId": {"read_only": True}}


#################
#### CATALOG ####
#################

class ShirtTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShirtType
        fields = ["id", "type_name", "description"]


class ShirtSizeSerializer(serializers.ModelSerializer):
    type_name = serializers.CharField(source="type.type_name", read_only=True)

    class Meta:
        model = ShirtSize
        fields = ["id", "type", "type_name", "size_label", "w", "h", "sleeves_w", "sleeves_h", "category"]


class PrintTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = PrintType
        fields = ["id", "print_type", "recommended_for", "description"]


class PrintPricingSerializer(serializers.ModelSerializer):
    shirt_type_name = serializers.SerializerMethodField()
    size_label = serializers.CharField(source="size.size_label", read_only=True)

    class Meta:
        model = PrintPricing
        fields = ["id", "print_type", "shirt_type", "shirt_type_name", "size", "size_label", "amount"]

    def get_shirt_type_name(self, obj):
        return obj.shirt_type.type_name if obj.shirt_type_id else "default"


class InventoryItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InventoryItem
        fields = ["id", "name", "category", "unit", "stock", "pending_restock"]


##########################
#### DESIGN REQUESTS ####
##########################

class SizeQuantitySerializer(serializers.Serializer):
    size = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class ReferenceInputSerializer(serializers.Serializer):
    design_image = serializers.CharField(max_length=500)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class DesignRequestCreateSerializer(serializers.Serializer):
    textile = serializers.IntegerField()
    request_title = serializers.CharField(max_length=255)
    tshirt_type = serializers.CharField(max_length=100)
    gender = serializers.CharField(max_length=50, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    print_type = serializers.CharField(max_length=100)
    preferred_designer = serializers.IntegerField(required=False, allow_null=True)
    preferred_date = serializers.DateField(required=False, allow_null=True)
    sizes = SizeQuantitySerializer(many=True)
    references = ReferenceInputSerializer(many=True, required=False)

    def validate_sizes(self, value):
        if not value:
            raise serializers.ValidationError("At least one shirt size is required.")
        return value


class RequestSizeSerializer(serializers.ModelSerializer):
    size_label = serializers.CharField(source="size.size_label", read_only=True)

    class Meta:
        model = RequestSize
        fields = ["size", "size_label", "quantity"]


class DesignRequestSerializer(serializers.ModelSerializer):
    sizes = RequestSizeSerializer(many=True, read_only=True)
    references = serializers.SerializerMethodField()
    textile_name = serializers.CharField(source="textile.name", read_only=True, default=None)
    design_id = serializers.SerializerMethodField()

    class Meta:
        model = DesignRequest
        fields = [
            "requestID", "clientID", "textile", "textile_name", "request_title", "tshirt_type", "gender",
            "description", "print_type", "preferred_designer", "preferred_date", "status", "decline_reason",
            "sizes", "references", "design_id", "created_at",
        ]
        read_only_fields = fields

    def get_references(self, obj):
        return [{"design_image": r.design_image, "description": r.description} for r in obj.references.all()]

    def get_design_id(self, obj):
        return obj.design.designID if hasattr(obj, "design") else None


#################
#### DESIGNS ####
#################

class DesignSerializer(serializers.ModelSerializer):
    request_title = serializers.CharField(source="request.request_title", read_only=True)

    class Meta:
        model = Design
        fields = ["designID", "request", "request_title", "clientID", "designerID", "revision_count",
                  "status", "deadline", "created_at", "updated_at"]
        read_only_fields = fields


class FabricCanvasSerializer(serializers.ModelSerializer):
    class Meta:
        model = FabricCanvas
        fields = ["design", "canvas_json", "thumbnail", "version", "updated_at"]
        extra_kwargs = {"design": {"read_only": True}, "updated_at": {"read_only": True}}


class CommentSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "preview", "user", "username", "comment", "images", "created_at"]
        extra_kwargs = {
            "preview": {"read_only": True},
            "user": {"read_only": True},
            "created_at": {"read_only": True},
        }


class DesignPreviewSerializer(serializers.ModelSerializer):
    comments = CommentSerializer(many=True, read_only=True)

    class Meta:
        model = DesignPreview
        fields = ["id", "design", "preview_image", "comments", "created_at"]
        read_only_fields = fields


#################
#### ADD-ONS ####
#################

class AddOnSizeSerializer(serializers.ModelSerializer):
    size_label = serializers.CharField(source="size.size_label", read_only=True)

    class Meta:
        model = AddOnSize
        fields = ["size", "size_label", "quantity"]


class AddOnCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=AddOnType.choices)
    reason = serializers.CharField(required=False, allow_blank=True, default="")
    sizes = SizeQuantitySerializer(many=True, required=False)
    images = serializers.ListField(child=serializers.CharField(max_length=500), required=False)

    def validate(self, attrs):
        if attrs["type"] != AddOnType.DESIGN and not attrs.get("sizes"):
            raise serializers.ValidationError({"sizes": "Quantity add-ons need at least one size."})
        return attrs


class AddOnRequestSerializer(serializers.ModelSerializer):
    sizes = AddOnSizeSerializer(many=True, read_only=True)
    images = serializers.SerializerMethodField()

    class Meta:
        model = AddOnRequest
        fields = ["addOnID", "design", "userID", "type", "reason", "admin_note", "fee", "price", "status",
                  "sizes", "images", "created_at", "updated_at"]
        read_only_fields = fields

    def get_images(self, obj):
        return [image.image for image in obj.images.all()]


###############################
#### NOTIFICATIONS & AUDIT ####
###############################

class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ["id", "recipient_user_type", "title", "type", "notif_content", "is_read", "created_at"]
        read_only_fields = fields


class HistoryEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = HistoryEntry
        fields = ["id", "user_type", "action", "action_type", "related_id", "related_type", "details", "timestamp"]
        read_only_fields = fields
