# series/services_defaults.py
import logging
from django.utils import timezone

logger = logging.getLogger(__name__)


def lock_series_of_type(model, org_id, document_type):
    """
    Bloquea todas las series del (org, tipo de documento), siempre en orden de pk.
    Cualquier escritura que pueda cambiar la predeterminada pasa por aquí
    antes de tomar ningún otro bloqueo sobre esas filas.
    """
    siblings = model.objects.filter(org_id=org_id, document_type=document_type)
    list(siblings.select_for_update().order_by("pk").values_list("pk", flat=True))
    return siblings


def enforce_default(series):
    """
    Deja a `series` como única predeterminada de su (org, tipo de documento).

    Debe llamarse dentro de la transacción que guarda series.is_default=True
    y antes del guardado: la restricción única parcial de la BD no admite
    dos predeterminadas ni siquiera de forma transitoria.
    """
    if not series.is_default:
        return 0

    siblings = lock_series_of_type(type(series), series.org_id, series.document_type)

    demoted = (
        siblings.filter(is_default=True)
        .exclude(pk=series.pk)
        .update(is_default=False, updated_at=timezone.now())
    )
    if demoted:
        logger.info(
            f"[Series] {demoted} serie(s) {series.document_type} de org={series.org_id} "
            f"dejan de ser predeterminadas (nueva: {series.code})"
        )
    return demoted
