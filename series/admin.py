from django.contrib import admin

from .models import DocumentSeries
from .numbering import preview_code
from .services_series import EDITABLE_FIELDS, create_series, update_series


@admin.register(DocumentSeries)
class DocumentSeriesAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "document_type", "org", "next_number", "preview", "active", "is_default")
    list_filter = ("document_type", "active", "is_default", "reset_yearly")
    search_fields = ("code", "name", "org__name", "org__slug")
    # El contador lo avanza la asignación de números, no se edita a mano
    readonly_fields = ("next_number", "last_reset_year", "created_by", "updated_by", "created_at", "updated_at")

    @admin.display(description="Próximo código")
    def preview(self, obj):
        return preview_code(obj)

    def save_model(self, request, obj, form, change):
        # Mismo camino que la API: fila bloqueada y sin tocar el contador
        if change:
            fields = form.changed_data if form is not None else EDITABLE_FIELDS
            changes = {f: getattr(obj, f) for f in fields if f in EDITABLE_FIELDS}
            update_series(obj, user=request.user, **changes)
        else:
            data = {f: getattr(obj, f) for f in EDITABLE_FIELDS}
            create_series(
                obj.org, user=request.user, id=obj.pk,
                document_type=obj.document_type, next_number=obj.next_number, **data,
            )
            obj._state.adding = False
        obj.refresh_from_db()
