import re
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


_SERIES_CODE_RE = re.compile(r"^[A-Z0-9_-]{1,10}$")

MIN_PADDING = 1
MAX_PADDING = 10


def validate_series_code(value: str):
    # Se valida ya en mayúsculas: el código se normaliza al guardar
    if not value or not _SERIES_CODE_RE.match(value.upper()):
        raise ValidationError(_("Código de serie no válido (1-10 caracteres: letras, números, '_' o '-')"))


def validate_number_padding(value: int):
    if value is None or not (MIN_PADDING <= value <= MAX_PADDING):
        raise ValidationError(
            _("La longitud del número debe estar entre %(min)s y %(max)s"),
            params={"min": MIN_PADDING, "max": MAX_PADDING},
        )
