# series/numbering.py
"""
Funciones puras de numeración: formato del código y política de reinicio anual.
No tocan la base de datos; services_allocation aplica sus consecuencias.
"""
from django.utils import timezone


def current_year() -> int:
    return timezone.localdate().year


def should_reset(series, year: int) -> bool:
    """True si la serie reinicia cada año y aún no se ha reiniciado en `year`."""
    return bool(series.reset_yearly) and series.last_reset_year != year


def effective_number(series, year: int) -> int:
    return 1 if should_reset(series, year) else series.next_number


def format_code(series, number: int, year: int) -> str:
    """
    prefijo · año + separador (si include_year) · número con ceros · sufijo.
    El relleno nunca trunca: number_padding=1 y 12 -> "12".
    """
    parts = []
    if series.prefix:
        parts.append(series.prefix)
    if series.include_year:
        parts.append(f"{year}{series.year_separator or ''}")
    parts.append(str(number).zfill(series.number_padding))
    if series.suffix:
        parts.append(series.suffix)
    return "".join(parts)


def preview_code(series, year: int = None) -> str:
    """Código que daría la próxima asignación, sin modificar la serie."""
    if year is None:
        year = current_year()
    return format_code(series, effective_number(series, year), year)
