from typing import Optional
from django.utils.deprecation import MiddlewareMixin
from django.db import connection
from django.http import HttpRequest
from core.models import Organization

PG_SETTING = "app.current_org"  # debe cuadrar con las políticas RLS si se activan

def resolve_org_from_path(path: str) -> Optional[str]:
    # Esperamos rutas tipo /api/v1/t/{org_slug}/...
    parts = [p for p in path.split("/") if p]
    try:
        idx = parts.index("t")
        return parts[idx + 1]
    except (ValueError, IndexError):
        return None

class TenantMiddleware(MiddlewareMixin):
    """
    Resuelve la organización (partición de tenant) a partir de la URL
    y la deja en request.org. Si no existe, request.org queda a None
    y las vistas con scope de org responden 404/403.
    """
    def process_request(self, request: HttpRequest):
        org_slug = resolve_org_from_path(request.path)
        request.org = None
        if org_slug:
            try:
                org = Organization.objects.only("id","slug").get(slug=org_slug)
            except Organization.DoesNotExist:
                return
            request.org = org
            # Solo Postgres entiende SET LOCAL (variables de sesión para RLS)
            if connection.vendor == "postgresql":
                with connection.cursor() as c:
                    c.execute("SET LOCAL {} = %s".format(PG_SETTING), [str(org.id)])
