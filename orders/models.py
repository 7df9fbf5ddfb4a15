from decimal import Decimal

from django.contrib.auth.models import User
from django.db import models


class UserType(models.TextChoices):
    CLIENT = "client", "Client"
    DESIGNER = "designer", "Designer"
    ADMIN = "admin", "Admin"


class RequestStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    DECLINED = "declined", "Declined"
    CANCELLED = "cancelled", "Cancelled"


class DesignStatus(models.TextChoices):
    IN_PROGRESS = "in_progress", "In progress"
    PENDING_REVISION = "pending_revision", "Pending revision"
    APPROVED = "approved", "Approved"
    IN_PRODUCTION = "in_production", "In production"
    PENDING_PICKUP = "pending_pickup", "Pending pickup"
    COMPLETED = "completed", "Completed"


class BillingStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"


class AddOnStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    DECLINED = "declined", "Declined"
    CANCELLED = "cancelled", "Cancelled"


class AddOnType(models.TextChoices):
    DESIGN = "design", "Design"
    QUANTITY = "quantity", "Quantity"
    DESIGN_AND_QUANTITY = "designAndQuantity", "Design and quantity"


class Designer(models.Model):
    userId = models.OneToOneField(User, on_delete=models.CASCADE, primary_key=True, related_name="designer")
    contact_number = models.CharField(max_length=50, null=True, blank=True)
    address = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.userId.username


########################
#### CATALOG TABLES ####
########################

class ShirtType(models.Model):
    type_name = models.CharField(max_length=100, unique=True)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.type_name


class ShirtSize(models.Model):
    type = models.ForeignKey(ShirtType, on_delete=models.CASCADE, related_name="sizes")
    size_label = models.CharField(max_length=20)
    w = models.FloatField(default=0)
    h = models.FloatField(default=0)
    sleeves_w = models.FloatField(null=True, blank=True)
    sleeves_h = models.FloatField(null=True, blank=True)
    category = models.CharField(max_length=10, default="adult", choices=[("kids", "Kids"), ("adult", "Adult")])
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.size_label} ({self.type.type_name})"


class PrintType(models.Model):
    print_type = models.CharField(max_length=100, unique=True)
    recommended_for = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.print_type


class PrintPricing(models.Model):
    # A null shirt_type is the default entry, valid for any shirt type
    print_ref = models.ForeignKey(PrintType, on_delete=models.CASCADE, null=True, blank=True, related_name="pricing")
    print_type = models.CharField(max_length=100)
    shirt_type = models.ForeignKey(ShirtType, on_delete=models.CASCADE, null=True, blank=True)
    size = models.ForeignKey(ShirtSize, on_delete=models.CASCADE, related_name="print_pricing")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.print_type} / {self.size.size_label}: {self.amount}"


class DesignerPricing(models.Model):
    # designer=None is the required "default" pricing record
    designer = models.OneToOneField(Designer, on_delete=models.CASCADE, null=True, blank=True, related_name="pricing")
    normal_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    revision_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Pricing for {self.designer or 'default'}"


class InventoryItem(models.Model):
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100, default="fabric")
    unit = models.CharField(max_length=20, default="yards")
    stock = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    pending_restock = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.stock} {self.unit})"


#########################
#### DESIGN REQUESTS ####
#########################

class DesignRequest(models.Model):
    requestID = models.AutoField(primary_key=True)
    clientID = models.ForeignKey(User, on_delete=models.CASCADE, related_name="design_requests")
    textile = models.ForeignKey(InventoryItem, on_delete=models.SET_NULL, null=True)
    request_title = models.CharField(max_length=255)
    tshirt_type = models.CharField(max_length=100, blank=True, default="")
    gender = models.CharField(max_length=50, blank=True, default="")
    description = models.TextField(blank=True, default="")
    print_type = models.CharField(max_length=100, null=True, blank=True)
    preferred_designer = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name="preferred_requests")
    preferred_date = models.DateField(null=True, blank=True)
    decline_reason = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=RequestStatus.choices, default=RequestStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Request {self.requestID}: {self.request_title} ({self.status})"


class RequestSize(models.Model):
    request = models.ForeignKey(DesignRequest, on_delete=models.CASCADE, related_name="sizes")
    size = models.ForeignKey(ShirtSize, on_delete=models.PROTECT)
    quantity = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.size.size_label} x{self.quantity} for request {self.request_id}"


class RequestReference(models.Model):
    request = models.ForeignKey(DesignRequest, on_delete=models.CASCADE, related_name="references")
    design_image = models.CharField(max_length=500)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)


#################
#### DESIGNS ####
#################

class Design(models.Model):
    designID = models.AutoField(primary_key=True)
    request = models.OneToOneField(DesignRequest, on_delete=models.CASCADE, related_name="design")
    clientID = models.ForeignKey(User, on_delete=models.CASCADE, related_name="client_designs")
    designerID = models.ForeignKey(User, on_delete=models.CASCADE, related_name="designer_designs")
    revision_count = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=DesignStatus.choices, default=DesignStatus.IN_PROGRESS)
    deadline = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Design {self.designID} for request {self.request_id} ({self.status})"


class FabricCanvas(models.Model):
    design = models.OneToOneField(Design, on_delete=models.CASCADE, related_name="canvas")
    canvas_json = models.TextField(blank=True, default="")
    thumbnail = models.CharField(max_length=500, null=True, blank=True)
    version = models.CharField(max_length=20, default="1.0.0")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)


class DesignPreview(models.Model):
    design = models.ForeignKey(Design, on_delete=models.CASCADE, related_name="previews")
    preview_image = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]


class Comment(models.Model):
    preview = models.ForeignKey(DesignPreview, on_delete=models.CASCADE, related_name="comments")
    user = models.ForeignKey(User, on_delete=models.CASCADE)
    comment = models.TextField()
    images = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]


#################
#### BILLING ####
#################

class Billing(models.Model):
    billingID = models.AutoField(primary_key=True)
    design = models.OneToOneField(Design, on_delete=models.CASCADE, related_name="billing")
    clientID = models.ForeignKey(User, on_delete=models.CASCADE, related_name="client_billings")
    designerID = models.ForeignKey(User, on_delete=models.CASCADE, related_name="designer_billings")
    invoice_no = models.CharField(max_length=20, unique=True, null=True, blank=True)
    shirts = models.JSONField(default=list, blank=True)
    total_shirts = models.PositiveIntegerField(default=0)
    printing_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    designer_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    revision_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    starting_amount = models.DecimalField(max_digits=12, decimal_places=2)
    final_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    addons_shirt_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    addons_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    negotiation_history = models.JSONField(default=list, blank=True)
    negotiation_rounds = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=BillingStatus.choices, default=BillingStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def addons_total(self):
        return self.addons_shirt_price + self.addons_fee

    @property
    def total_amount(self):
        """Settled base plus add-on surcharges, which are never negotiated."""
        if self.final_amount:
            return self.final_amount
        return self.starting_amount + self.addons_total

    def __str__(self):
        return f"Billing {self.invoice_no or self.billingID} for design {self.design_id}"


################
#### ADD-ONS ####
################

class AddOnRequest(models.Model):
    addOnID = models.AutoField(primary_key=True)
    design = models.ForeignKey(Design, on_delete=models.CASCADE, related_name="addons")
    userID = models.ForeignKey(User, on_delete=models.CASCADE, related_name="addon_requests")
    type = models.CharField(max_length=20, choices=AddOnType.choices)
    reason = models.TextField(blank=True, default="")
    admin_note = models.TextField(null=True, blank=True)
    fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    status = models.CharField(max_length=20, choices=AddOnStatus.choices, default=AddOnStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-addOnID"]

    @property
    def has_quantity(self):
        return self.type in (AddOnType.QUANTITY, AddOnType.DESIGN_AND_QUANTITY)

    @property
    def has_design_work(self):
        return self.type in (AddOnType.DESIGN, AddOnType.DESIGN_AND_QUANTITY)

    def __str__(self):
        return f"Add-on {self.addOnID} ({self.type}) for design {self.design_id} - {self.status}"


class AddOnSize(models.Model):
    addon = models.ForeignKey(AddOnRequest, on_delete=models.CASCADE, related_name="sizes")
    size = models.ForeignKey(ShirtSize, on_delete=models.PROTECT)
    quantity = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)


class AddOnImage(models.Model):
    addon = models.ForeignKey(AddOnRequest, on_delete=models.CASCADE, related_name="images")
    image = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)


###############################
#### NOTIFICATIONS & AUDIT ####
###############################

class Notification(models.Model):
    recipient = models.ForeignKey(User, on_delete=models.CASCADE, related_name="notifications")
    recipient_user_type = models.CharField(max_length=20, choices=UserType.choices)
    title = models.CharField(max_length=255, null=True, blank=True)
    type = models.CharField(max_length=100, null=True, blank=True)
    notif_content = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Notification for {self.recipient.username}: {self.notif_content[:40]}"


class HistoryEntry(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="history")
    user_type = models.CharField(max_length=20, choices=UserType.choices)
    action = models.CharField(max_length=500)
    action_type = models.CharField(max_length=50, choices=[
        ("submit", "submit"), ("approve", "approve"), ("decline", "decline"),
        ("assign", "assign"), ("update", "update"), ("post", "post"),
        ("comment", "comment"), ("design_approval", "design_approval"),
        ("design_request", "design_request"), ("addon_request", "addon_request"),
        ("addon_approval", "addon_approval"), ("negotiation", "negotiation"),
    ])
    related_id = models.CharField(max_length=50, null=True, blank=True)
    related_type = models.CharField(max_length=50, null=True, blank=True)
    details = models.JSONField(default=dict, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-timestamp", "-id"]
