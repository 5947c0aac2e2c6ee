# series/filters.py
import django_filters
from django.db.models import Q

from .choices import DocumentType
from .models import DocumentSeries


class DocumentSeriesFilter(django_filters.FilterSet):
    q = django_filters.CharFilter(method="search", label="search")
    document_type = django_filters.ChoiceFilter(field_name="document_type", choices=DocumentType.CHOICES)
    active = django_filters.BooleanFilter(field_name="active")
    is_default = django_filters.BooleanFilter(field_name="is_default")

    class Meta:
        model = DocumentSeries
        fields = ("document_type", "active", "is_default")

    def search(self, qs, name, value):
        v = (value or "").strip()
        if not v:
            return qs
        return qs.filter(
            Q(code__icontains=v) |
            Q(name__icontains=v) |
            Q(description__icontains=v)
        )
