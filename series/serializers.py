# series/serializers.py
from rest_framework import serializers

from .choices import DocumentType
from .models import DocumentSeries
from .numbering import preview_code
from .services_series import create_series, update_series


class DocumentSeriesSerializer(serializers.ModelSerializer):
    preview = serializers.SerializerMethodField()
    created_by_email = serializers.EmailField(source="created_by.email", read_only=True, default=None)
    updated_by_email = serializers.EmailField(source="updated_by.email", read_only=True, default=None)

    class Meta:
        model = DocumentSeries
        fields = [
            "id",
            "code",
            "name",
            "description",
            "document_type",
            "prefix",
            "suffix",
            "number_padding",
            "next_number",
            "include_year",
            "year_separator",
            "reset_yearly",
            "last_reset_year",
            "active",
            "is_default",
            "preview",
            "created_by",
            "created_by_email",
            "updated_by",
            "updated_by_email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id", "last_reset_year", "created_by", "updated_by", "created_at", "updated_at",
        ]
        extra_kwargs = {
            "next_number": {"required": False},
        }

    def get_preview(self, obj) -> str:
        return preview_code(obj)

    def validate_code(self, value):
        return (value or "").strip().upper()

    def validate_next_number(self, value):
        # El contador solo lo avanza la asignación; aquí solo se fija al crear
        if self.instance is not None and value != self.instance.next_number:
            raise serializers.ValidationError("El siguiente número no se puede modificar una vez creada la serie")
        return value

    def validate_document_type(self, value):
        if self.instance is not None and value != self.instance.document_type:
            raise serializers.ValidationError("El tipo de documento no se puede cambiar")
        return value

    def create(self, validated_data):
        org = validated_data.pop("org")
        user = validated_data.pop("user", None)
        return create_series(org, user=user, **validated_data)

    def update(self, instance, validated_data):
        validated_data.pop("org", None)
        validated_data.pop("next_number", None)
        user = validated_data.pop("user", None)
        return update_series(instance, user=user, **validated_data)


class DocumentTypeQuerySerializer(serializers.Serializer):
    document_type = serializers.ChoiceField(choices=DocumentType.CHOICES)
    series = serializers.UUIDField(required=False, allow_null=True)


class AllocationSerializer(serializers.Serializer):
    code = serializers.CharField()
    number = serializers.IntegerField()
    series = serializers.UUIDField(source="series_id")
    year = serializers.IntegerField()
