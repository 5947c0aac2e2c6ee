import django.core.validators
import django.db.models.deletion
import series.validators
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="DocumentSeries",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=10, validators=[series.validators.validate_series_code])),
                ("name", models.CharField(max_length=100)),
                ("description", models.CharField(blank=True, default="", max_length=500)),
                ("document_type", models.CharField(choices=[("quote", "Presupuesto"), ("order", "Pedido"), ("delivery_note", "Albarán"), ("invoice", "Factura"), ("rectifying_invoice", "Factura rectificativa"), ("supplier_order", "Pedido a proveedor"), ("supplier_delivery_note", "Albarán de proveedor"), ("supplier_invoice", "Factura de proveedor")], max_length=32)),
                ("prefix", models.CharField(blank=True, default="", max_length=20)),
                ("suffix", models.CharField(blank=True, default="", max_length=20)),
                ("number_padding", models.PositiveSmallIntegerField(default=5, validators=[series.validators.validate_number_padding])),
                ("include_year", models.BooleanField(default=True)),
                ("year_separator", models.CharField(blank=True, default="/", max_length=5)),
                ("next_number", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("reset_yearly", models.BooleanField(default=True)),
                ("last_reset_year", models.PositiveIntegerField(blank=True, null=True)),
                ("active", models.BooleanField(default=True)),
                ("is_default", models.BooleanField(default=False)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="%(class)s_created", to=settings.AUTH_USER_MODEL)),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="%(class)s_updated", to=settings.AUTH_USER_MODEL)),
                ("org", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="document_series", to="core.organization")),
            ],
            options={
                "ordering": ["document_type", "code"],
                "indexes": [
                    models.Index(fields=["org", "document_type", "is_default"], name="series_org_type_default_idx"),
                    models.Index(fields=["org", "active"], name="series_org_active_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("org", "document_type", "code"), name="uniq_series_org_doctype_code"),
                    models.UniqueConstraint(condition=models.Q(("is_default", True)), fields=("org", "document_type"), name="uniq_series_default_per_doctype"),
                    models.CheckConstraint(condition=models.Q(("next_number__gte", 1)), name="series_next_number_gte_1"),
                    models.CheckConstraint(condition=models.Q(("number_padding__gte", 1), ("number_padding__lte", 10)), name="series_number_padding_range"),
                ],
            },
        ),
    ]
