# series/views.py
from rest_framework import status, filters as drf_filters
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from core.mixins import OrgScopedModelViewSet
from .choices import DocumentType
from .filters import DocumentSeriesFilter
from .models import DocumentSeries
from .permissions import CanManageSeries
from .serializers import AllocationSerializer, DocumentSeriesSerializer, DocumentTypeQuerySerializer
from .services_allocation import allocate as allocate_number, allocate_for_type
from .services_series import (
    create_default_series,
    delete_series,
    duplicate_series,
    get_default_series,
    list_series_for_type,
    set_default as set_default_series,
    suggest_code as suggest_series_code,
)


class DocumentSeriesViewSet(OrgScopedModelViewSet):
    """
    Series de numeración de documentos de la organización.
    URL base: /api/v1/t/<org_slug>/numbering/series/
    """
    serializer_class = DocumentSeriesSerializer
    queryset = DocumentSeries.objects.select_related("created_by", "updated_by")
    permission_classes = (IsAuthenticated, CanManageSeries)
    filter_backends = (DjangoFilterBackend, drf_filters.OrderingFilter, drf_filters.SearchFilter)
    filterset_class = DocumentSeriesFilter
    ordering_fields = ("code", "name", "document_type", "is_default", "updated_at")
    ordering = ("document_type", "code")
    search_fields = ("code", "name", "description")

    def perform_create(self, serializer):
        serializer.save(org=self.org, user=self.request.user)

    def perform_update(self, serializer):
        serializer.save(user=self.request.user)

    def perform_destroy(self, instance):
        delete_series(instance)

    def _document_type_params(self, data):
        ser = DocumentTypeQuerySerializer(data=data)
        ser.is_valid(raise_exception=True)
        return ser.validated_data["document_type"], ser.validated_data.get("series")

    @action(detail=True, methods=["post"])
    def allocate(self, request, pk=None, *args, **kwargs):
        result = allocate_number(pk, org=self.org)
        return Response(AllocationSerializer(result).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="set-default")
    def set_default(self, request, pk=None, *args, **kwargs):
        series = set_default_series(self.get_object(), user=request.user)
        return Response(self.get_serializer(series).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"])
    def duplicate(self, request, pk=None, *args, **kwargs):
        copy = duplicate_series(self.get_object(), user=request.user)
        return Response(self.get_serializer(copy).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"], url_path=r"by-type/(?P<document_type>[a-z_]+)")
    def by_type(self, request, document_type=None, *args, **kwargs):
        if document_type not in DocumentType.VALUES:
            raise ValidationError({"document_type": [f"Tipo de documento desconocido: {document_type}"]})
        only_active = request.query_params.get("only_active", "true").lower() != "false"
        qs = list_series_for_type(self.org, document_type, only_active=only_active)
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=False, methods=["get"], url_path="default")
    def default_for_type(self, request, *args, **kwargs):
        document_type, _series = self._document_type_params(request.query_params)
        series = get_default_series(self.org, document_type)
        if series is None:
            raise NotFound(f"No hay serie predeterminada para {document_type}")
        return Response(self.get_serializer(series).data)

    @action(detail=False, methods=["get"], url_path="suggest-code")
    def suggest_code(self, request, *args, **kwargs):
        document_type, series_id = self._document_type_params(request.query_params)
        return Response(suggest_series_code(self.org, document_type, series_id=series_id))

    @action(detail=False, methods=["post"], url_path="generate-code")
    def generate_code(self, request, *args, **kwargs):
        document_type, series_id = self._document_type_params(request.data)
        result = allocate_for_type(document_type, org=self.org, series_id=series_id)
        return Response(AllocationSerializer(result).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="create-defaults")
    def create_defaults(self, request, *args, **kwargs):
        created = create_default_series(self.org, user=request.user)
        return Response(
            {"created": len(created), "results": self.get_serializer(created, many=True).data},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )
