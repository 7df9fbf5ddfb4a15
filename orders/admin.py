from django.contrib import admin

from .models import (
    AddOnRequest, Billing, Design, DesignRequest, Designer, DesignerPricing, InventoryItem, PrintPricing,
    PrintType, ShirtSize, ShirtType,
)


@admin.register(Designer)
class DesignerAdmin(admin.ModelAdmin):
    list_display = ("userId", "contact_number", "created_at")


@admin.register(ShirtType)
class ShirtTypeAdmin(admin.ModelAdmin):
    list_display = ("type_name",)


@admin.register(ShirtSize)
class ShirtSizeAdmin(admin.ModelAdmin):
    list_display = ("size_label", "type", "category")
    list_filter = ("type", "category")


@admin.register(PrintType)
class PrintTypeAdmin(admin.ModelAdmin):
    list_display = ("print_type", "recommended_for")


@admin.register(PrintPricing)
class PrintPricingAdmin(admin.ModelAdmin):
    list_display = ("print_type", "shirt_type", "size", "amount")
    list_filter = ("print_type",)


@admin.register(DesignerPricing)
class DesignerPricingAdmin(admin.ModelAdmin):
    list_display = ("designer", "normal_amount", "revision_fee")


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "stock", "unit")


@admin.register(DesignRequest)
class DesignRequestAdmin(admin.ModelAdmin):
    list_display = ("requestID", "request_title", "clientID", "status", "created_at")
    list_filter = ("status",)


@admin.register(Design)
class DesignAdmin(admin.ModelAdmin):
    list_display = ("designID", "request", "designerID", "status", "revision_count")
    list_filter = ("status",)


@admin.register(Billing)
class BillingAdmin(admin.ModelAdmin):
    list_display = ("invoice_no", "design", "starting_amount", "final_amount", "negotiation_rounds", "status")
    readonly_fields = ("starting_amount", "negotiation_history", "invoice_no")


@admin.register(AddOnRequest)
class AddOnRequestAdmin(admin.ModelAdmin):
    list_display = ("addOnID", "design", "type", "status", "fee", "price")
    list_filter = ("status", "type")
