# series/models.py
import uuid
from django.db import models, transaction
from django.db.models import Q
from django.core.validators import MinValueValidator
from django.utils import timezone

from core.models import AuditMixin, Organization

from .choices import DocumentType
from .validators import validate_series_code, validate_number_padding, MIN_PADDING, MAX_PADDING
from .services_defaults import enforce_default

COUNTER_FIELDS = ("next_number", "last_reset_year")


class DocumentSeries(AuditMixin):
    """
    Serie de numeración de un tipo de documento dentro de una organización.

    next_number y last_reset_year solo los avanza services_allocation.allocate;
    el resto de campos son configuración editable desde la administración.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    org = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name="document_series")

    code = models.CharField(max_length=10, validators=[validate_series_code])
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True, default="")
    document_type = models.CharField(max_length=32, choices=DocumentType.CHOICES)

    # Formato del código generado
    prefix = models.CharField(max_length=20, blank=True, default="")
    suffix = models.CharField(max_length=20, blank=True, default="")
    number_padding = models.PositiveSmallIntegerField(default=5, validators=[validate_number_padding])
    include_year = models.BooleanField(default=True)
    year_separator = models.CharField(max_length=5, blank=True, default="/")

    # Contador
    next_number = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    reset_yearly = models.BooleanField(default=True)
    last_reset_year = models.PositiveIntegerField(null=True, blank=True)

    active = models.BooleanField(default=True)
    is_default = models.BooleanField(default=False)

    class Meta:
        ordering = ["document_type", "code"]
        constraints = [
            models.UniqueConstraint(
                fields=["org", "document_type", "code"],
                name="uniq_series_org_doctype_code",
            ),
            models.UniqueConstraint(
                fields=["org", "document_type"],
                condition=Q(is_default=True),
                name="uniq_series_default_per_doctype",
            ),
            models.CheckConstraint(
                condition=Q(next_number__gte=1),
                name="series_next_number_gte_1",
            ),
            models.CheckConstraint(
                condition=Q(number_padding__gte=MIN_PADDING) & Q(number_padding__lte=MAX_PADDING),
                name="series_number_padding_range",
            ),
        ]
        indexes = [
            models.Index(fields=["org", "document_type", "is_default"], name="series_org_type_default_idx"),
            models.Index(fields=["org", "active"], name="series_org_active_idx"),
        ]

    def __str__(self):
        return f"{self.code} · {self.get_document_type_display()} ({self.org_id})"

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        if self._state.adding and self.last_reset_year is None:
            self.last_reset_year = timezone.localdate().year
        elif not self._state.adding and kwargs.get("update_fields") is None and not kwargs.get("force_insert"):
            # Sobre una fila existente el contador solo lo escribe la asignación
            kwargs["update_fields"] = [
                f.name for f in self._meta.concrete_fields
                if not f.primary_key and f.name not in COUNTER_FIELDS
            ]
        # La degradación de la predeterminada anterior y el guardado van juntos
        with transaction.atomic():
            if self.is_default:
                enforce_default(self)
            super().save(*args, **kwargs)
