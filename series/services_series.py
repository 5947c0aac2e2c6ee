# series/services_series.py
import logging
from typing import Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from .choices import DEFAULT_SERIES
from .exceptions import ConflictError, SeriesNotFound
from .models import DocumentSeries
from .numbering import current_year, effective_number, preview_code
from .services_defaults import lock_series_of_type

logger = logging.getLogger(__name__)

# Campos que la administración puede tocar tras la creación
EDITABLE_FIELDS = (
    "code", "name", "description", "prefix", "suffix", "number_padding",
    "include_year", "year_separator", "reset_yearly", "active", "is_default",
)


def _full_clean(series: DocumentSeries):
    try:
        series.full_clean(validate_unique=False, validate_constraints=False)
    except DjangoValidationError as exc:
        raise ValidationError(exc.message_dict)


def _ensure_unique_code(series: DocumentSeries):
    clash = DocumentSeries.objects.filter(
        org_id=series.org_id,
        document_type=series.document_type,
        code=series.code,
    ).exclude(pk=series.pk)
    if clash.exists():
        raise ConflictError(
            f'Ya existe una serie con código "{series.code}" para este tipo de documento'
        )


def _save(series: DocumentSeries, **kwargs):
    # La comprobación previa no cubre dos altas simultáneas con el mismo código
    try:
        with transaction.atomic():
            series.save(**kwargs)
    except IntegrityError:
        raise ConflictError(
            f'Ya existe una serie con código "{series.code}" para este tipo de documento'
        )


def get_series(org, series_id) -> DocumentSeries:
    try:
        return DocumentSeries.objects.get(org=org, pk=series_id)
    except (DocumentSeries.DoesNotExist, DjangoValidationError):
        raise SeriesNotFound()


@transaction.atomic
def create_series(org, *, user=None, **data) -> DocumentSeries:
    data.pop("org", None)
    series = DocumentSeries(org=org, created_by=user, updated_by=user, **data)
    series.code = (series.code or "").strip().upper()
    _full_clean(series)
    _ensure_unique_code(series)
    _save(series)
    logger.info(
        f"[Series] Creada serie {series.code} ({series.document_type}) org={org.pk} "
        f"default={series.is_default}"
    )
    return series


@transaction.atomic
def update_series(series: DocumentSeries, *, user=None, **changes) -> DocumentSeries:
    """
    Actualización parcial. Se hace sobre la fila bloqueada para no pisar
    el contador que haya avanzado una asignación concurrente.
    """
    if "document_type" in changes and changes["document_type"] != series.document_type:
        raise ValidationError({"document_type": ["El tipo de documento no se puede cambiar"]})
    unknown = set(changes) - set(EDITABLE_FIELDS) - {"document_type"}
    if unknown:
        raise ValidationError({f: ["Campo no editable"] for f in sorted(unknown)})

    if changes.get("is_default"):
        # Mismo orden de bloqueo que enforce_default: primero todo el tipo
        lock_series_of_type(DocumentSeries, series.org_id, series.document_type)
    locked = DocumentSeries.objects.select_for_update().get(pk=series.pk)
    was_default = locked.is_default
    for field, value in changes.items():
        setattr(locked, field, value)
    locked.code = (locked.code or "").strip().upper()
    locked.updated_by = user

    _full_clean(locked)
    _ensure_unique_code(locked)

    fields = [f for f in EDITABLE_FIELDS if f in changes]
    _save(locked, update_fields=sorted(set(fields) | {"code", "updated_by", "updated_at"}))

    if locked.is_default and not was_default:
        logger.info(f"[Series] {locked.code} ({locked.document_type}) pasa a ser predeterminada")
    return locked


@transaction.atomic
def delete_series(series: DocumentSeries):
    if series.is_default:
        raise ValidationError(
            "No se puede eliminar la serie predeterminada. Establezca otra como predeterminada primero."
        )
    logger.info(f"[Series] Eliminada serie {series.code} ({series.document_type}) org={series.org_id}")
    series.delete()


def set_default(series: DocumentSeries, *, user=None) -> DocumentSeries:
    return update_series(series, user=user, is_default=True)


@transaction.atomic
def duplicate_series(series: DocumentSeries, *, user=None) -> DocumentSeries:
    """Copia inactiva y no predeterminada, con la numeración desde 1."""
    max_len = DocumentSeries._meta.get_field("code").max_length
    siblings = DocumentSeries.objects.filter(org_id=series.org_id, document_type=series.document_type)

    suffix = "_COPIA"
    counter = 0
    while True:
        tail = suffix if counter == 0 else f"{suffix}{counter}"
        new_code = f"{series.code[: max_len - len(tail)]}{tail}"
        if not siblings.filter(code=new_code).exists():
            break
        counter += 1

    name_max = DocumentSeries._meta.get_field("name").max_length
    return create_series(
        series.org,
        user=user,
        code=new_code,
        name=f"{series.name} (Copia)"[:name_max],
        description=series.description,
        document_type=series.document_type,
        prefix=series.prefix,
        suffix=series.suffix,
        number_padding=series.number_padding,
        next_number=1,
        include_year=series.include_year,
        year_separator=series.year_separator,
        reset_yearly=series.reset_yearly,
        active=False,
        is_default=False,
    )


def get_default_series(org, document_type: str) -> Optional[DocumentSeries]:
    return (
        DocumentSeries.objects
        .filter(org=org, document_type=document_type, is_default=True, active=True)
        .first()
    )


def list_series_for_type(org, document_type: str, *, only_active: bool = True):
    qs = DocumentSeries.objects.filter(org=org, document_type=document_type)
    if only_active:
        qs = qs.filter(active=True)
    return qs.order_by("-is_default", "code")


def resolve_series(org, document_type: str, *, series_id=None) -> DocumentSeries:
    """
    Serie a usar para un documento: la indicada, la predeterminada activa
    o, en su defecto, la primera activa por código.
    """
    if series_id:
        series = get_series(org, series_id)
        if series.document_type != document_type:
            raise ValidationError({"series": ["La serie no corresponde a este tipo de documento"]})
        return series

    series = get_default_series(org, document_type)
    if series is None:
        series = list_series_for_type(org, document_type).order_by("code").first()
    if series is None:
        raise SeriesNotFound(f"No hay series configuradas para {document_type}")
    return series


def suggest_code(org, document_type: str, *, series_id=None) -> dict:
    """Próximo código sin incrementar el contador (orientativo)."""
    series = resolve_series(org, document_type, series_id=series_id)
    return {
        "code": preview_code(series),
        "series": series.pk,
        "next_number": effective_number(series, current_year()),
    }


@transaction.atomic
def create_default_series(org, *, user=None) -> list:
    """
    Alta de las series por defecto de una organización nueva.
    Las que ya existen (mismo tipo y código) se respetan.
    """
    created = []
    for entry in DEFAULT_SERIES:
        exists = DocumentSeries.objects.filter(
            org=org, document_type=entry["document_type"], code=entry["code"]
        ).exists()
        if exists:
            logger.info(f"[Series] Serie {entry['code']} para {entry['document_type']} ya existe en org={org.pk}")
            continue
        has_default = DocumentSeries.objects.filter(
            org=org, document_type=entry["document_type"], is_default=True
        ).exists()
        created.append(create_series(org, user=user, is_default=not has_default, **entry))
    return created
