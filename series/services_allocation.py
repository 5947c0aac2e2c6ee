# series/services_allocation.py
import logging
import time
from typing import NamedTuple, Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import OperationalError, transaction
from django.utils import timezone

from .exceptions import AllocationConflict, InactiveSeriesError, SeriesNotFound
from .models import DocumentSeries
from .numbering import current_year, effective_number, format_code, should_reset
from .services_series import resolve_series

logger = logging.getLogger(__name__)


class Allocation(NamedTuple):
    code: str
    number: int
    series_id: object
    year: int
    reset: bool


def _max_retries() -> int:
    return max(1, int(getattr(settings, "SERIES_ALLOCATION_MAX_RETRIES", 5)))


def _retry_delay() -> float:
    return float(getattr(settings, "SERIES_ALLOCATION_RETRY_DELAY", 0.05))


def _claim_number(series_id, org, year: int, check_active: bool):
    """
    Un intento de asignación. Devuelve (serie, número, reinicio) o None si
    otro proceso avanzó el contador entre la lectura y la escritura.
    """
    with transaction.atomic():
        try:
            series = DocumentSeries.objects.select_for_update().get(pk=series_id, org=org)
        except (DocumentSeries.DoesNotExist, DjangoValidationError):
            raise SeriesNotFound()

        if check_active and not series.active:
            raise InactiveSeriesError()

        reset = should_reset(series, year)
        number = effective_number(series, year)

        changes = {"next_number": number + 1, "updated_at": timezone.now()}
        if reset:
            changes["last_reset_year"] = year

        # Solo escribe si el contador sigue tal y como se leyó
        updated = DocumentSeries.objects.filter(
            pk=series.pk,
            next_number=series.next_number,
            last_reset_year=series.last_reset_year,
        ).update(**changes)
        if updated != 1:
            return None

    return series, number, reset


def allocate(series_id, *, org, check_active: bool = True) -> Allocation:
    """
    Asigna el siguiente código de la serie y avanza su contador.

    La lectura, el reinicio anual y el incremento van en un único paso
    atómico; el formateo se hace después con el número ya consumido.
    Un número confirmado se considera usado aunque el llamante falle luego.
    """
    year = current_year()
    attempts = _max_retries()
    delay = _retry_delay()

    for attempt in range(1, attempts + 1):
        try:
            claimed = _claim_number(series_id, org, year, check_active)
        except OperationalError as exc:
            # bloqueo no concedido (timeout, deadlock, "database is locked")
            logger.warning(f"[Series] Intento {attempt}/{attempts} fallido al bloquear serie {series_id}: {exc}")
            claimed = None
        else:
            if claimed is None:
                logger.warning(f"[Series] Intento {attempt}/{attempts}: contador de {series_id} modificado en paralelo")

        if claimed is not None:
            series, number, reset = claimed
            code = format_code(series, number, year)
            if reset:
                logger.info(f"[Series] Serie {series.code} ({series.document_type}) reiniciada para {year}")
            logger.debug(f"[Series] Asignado {code} (serie={series.pk}, número={number})")
            return Allocation(code=code, number=number, series_id=series.pk, year=year, reset=reset)

        if attempt < attempts and delay > 0:
            time.sleep(delay * attempt)

    logger.error(f"[Series] Sin número para la serie {series_id} tras {attempts} intentos")
    raise AllocationConflict()


def allocate_for_type(document_type: str, *, org, series_id: Optional[object] = None) -> Allocation:
    """
    Asigna código para un tipo de documento: usa la serie indicada o, si no
    se indica, la predeterminada activa (o la primera activa por código).
    """
    series = resolve_series(org, document_type, series_id=series_id)
    return allocate(series.pk, org=org)
