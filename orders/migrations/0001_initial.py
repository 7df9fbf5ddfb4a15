from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Designer",
            fields=[
                ("userId", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name="designer", serialize=False, to=settings.AUTH_USER_MODEL)),
                ("contact_number", models.CharField(blank=True, max_length=50, null=True)),
                ("address", models.CharField(blank=True, max_length=255, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name="ShirtType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type_name", models.CharField(max_length=100, unique=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name="ShirtSize",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("size_label", models.CharField(max_length=20)),
                ("w", models.FloatField(default=0)),
                ("h", models.FloatField(default=0)),
                ("sleeves_w", models.FloatField(blank=True, null=True)),
                ("sleeves_h", models.FloatField(blank=True, null=True)),
                ("category", models.CharField(choices=[("kids", "Kids"), ("adult", "Adult")], default="adult", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("type", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="sizes", to="orders.shirttype")),
            ],
        ),
        migrations.CreateModel(
            name="PrintType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("print_type", models.CharField(max_length=100, unique=True)),
                ("recommended_for", models.CharField(blank=True, max_length=255, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name="PrintPricing",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("print_type", models.CharField(max_length=100)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("description", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("print_ref", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="pricing", to="orders.printtype")),
                ("shirt_type", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, to="orders.shirttype")),
                ("size", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="print_pricing", to="orders.shirtsize")),
            ],
        ),
        migrations.CreateModel(
            name="DesignerPricing",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("normal_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("revision_fee", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("description", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("designer", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="pricing", to="orders.designer")),
            ],
        ),
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(default="fabric", max_length=100)),
                ("unit", models.CharField(default="yards", max_length=20)),
                ("stock", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("pending_restock", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("description", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="DesignRequest",
            fields=[
                ("requestID", models.AutoField(primary_key=True, serialize=False)),
                ("request_title", models.CharField(max_length=255)),
                ("tshirt_type", models.CharField(blank=True, default="", max_length=100)),
                ("gender", models.CharField(blank=True, default="", max_length=50)),
                ("description", models.TextField(blank=True, default="")),
                ("print_type", models.CharField(blank=True, max_length=100, null=True)),
                ("preferred_date", models.DateField(blank=True, null=True)),
                ("decline_reason", models.TextField(blank=True, null=True)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("declined", "Declined"), ("cancelled", "Cancelled")], default="pending", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("clientID", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="design_requests", to=settings.AUTH_USER_MODEL)),
                ("textile", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, to="orders.inventoryitem")),
                ("preferred_designer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="preferred_requests", to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name="RequestSize",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("request", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="sizes", to="orders.designrequest")),
                ("size", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to="orders.shirtsize")),
            ],
        ),
        migrations.CreateModel(
            name="RequestReference",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("design_image", models.CharField(max_length=500)),
                ("description", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("request", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="references", to="orders.designrequest")),
            ],
        ),
        migrations.CreateModel(
            name="Design",
            fields=[
                ("designID", models.AutoField(primary_key=True, serialize=False)),
                ("revision_count", models.PositiveIntegerField(default=0)),
                ("status", models.CharField(choices=[("in_progress", "In progress"), ("pending_revision", "Pending revision"), ("approved", "Approved"), ("in_production", "In production"), ("pending_pickup", "Pending pickup"), ("completed", "Completed")], default="in_progress", max_length=20)),
                ("deadline", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("request", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="design", to="orders.designrequest")),
                ("clientID", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="client_designs", to=settings.AUTH_USER_MODEL)),
                ("designerID", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="designer_designs", to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name="FabricCanvas",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("canvas_json", models.TextField(blank=True, default="")),
                ("thumbnail", models.CharField(blank=True, max_length=500, null=True)),
                ("version", models.CharField(default="1.0.0", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("design", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="canvas", to="orders.design")),
            ],
        ),
        migrations.CreateModel(
            name="DesignPreview",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("preview_image", models.CharField(max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("design", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="previews", to="orders.design")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("comment", models.TextField()),
                ("images", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("preview", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="orders.designpreview")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Billing",
            fields=[
                ("billingID", models.AutoField(primary_key=True, serialize=False)),
                ("invoice_no", models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ("shirts", models.JSONField(blank=True, default=list)),
                ("total_shirts", models.PositiveIntegerField(default=0)),
                ("printing_fee", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("designer_fee", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("revision_fee", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("starting_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("final_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("addons_shirt_price", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("addons_fee", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("negotiation_history", models.JSONField(blank=True, default=list)),
                ("negotiation_rounds", models.PositiveIntegerField(default=0)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved")], default="pending", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("design", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="billing", to="orders.design")),
                ("clientID", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="client_billings", to=settings.AUTH_USER_MODEL)),
                ("designerID", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="designer_billings", to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name="AddOnRequest",
            fields=[
                ("addOnID", models.AutoField(primary_key=True, serialize=False)),
                ("type", models.CharField(choices=[("design", "Design"), ("quantity", "Quantity"), ("designAndQuantity", "Design and quantity")], max_length=20)),
                ("reason", models.TextField(blank=True, default="")),
                ("admin_note", models.TextField(blank=True, null=True)),
                ("fee", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("price", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("declined", "Declined"), ("cancelled", "Cancelled")], default="pending", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("design", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="addons", to="orders.design")),
                ("userID", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="addon_requests", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-addOnID"],
            },
        ),
        migrations.CreateModel(
            name="AddOnSize",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("addon", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="sizes", to="orders.addonrequest")),
                ("size", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to="orders.shirtsize")),
            ],
        ),
        migrations.CreateModel(
            name="AddOnImage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("image", models.CharField(max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("addon", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="images", to="orders.addonrequest")),
            ],
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("recipient_user_type", models.CharField(choices=[("client", "Client"), ("designer", "Designer"), ("admin", "Admin")], max_length=20)),
                ("title", models.CharField(blank=True, max_length=255, null=True)),
                ("type", models.CharField(blank=True, max_length=100, null=True)),
                ("notif_content", models.TextField()),
                ("is_read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("recipient", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="HistoryEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_type", models.CharField(choices=[("client", "Client"), ("designer", "Designer"), ("admin", "Admin")], max_length=20)),
                ("action", models.CharField(max_length=500)),
                ("action_type", models.CharField(choices=[("submit", "submit"), ("approve", "approve"), ("decline", "decline"), ("assign", "assign"), ("update", "update"), ("post", "post"), ("comment", "comment"), ("design_approval", "design_approval"), ("design_request", "design_request"), ("addon_request", "addon_request"), ("addon_approval", "addon_approval"), ("negotiation", "negotiation")], max_length=50)),
                ("related_id", models.CharField(blank=True, max_length=50, null=True)),
                ("related_type", models.CharField(blank=True, max_length=50, null=True)),
                ("details", models.JSONField(blank=True, default=dict)),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="history", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-timestamp", "-id"],
            },
        ),
    ]
