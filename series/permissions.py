# series/permissions.py
from rest_framework.permissions import BasePermission, SAFE_METHODS
from core.models import Membership

ALLOWED_WRITE_ROLES = {"owner", "admin", "manager"}

# Acciones de escritura abiertas a cualquier miembro: pedir número para un documento
MEMBER_ACTIONS = {"allocate", "generate_code"}


class CanManageSeries(BasePermission):
    """
    Lectura y asignación de números: cualquier miembro de la org.
    Alta/edición/borrado de series: owner/admin/manager.
    (La org viene en request.org desde TenantMiddleware).
    """
    def has_permission(self, request, view):
        org = getattr(request, "org", None)
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated or not org:
            return False

        memberships = Membership.objects.filter(organization=org, user=user)
        if request.method in SAFE_METHODS or getattr(view, "action", None) in MEMBER_ACTIONS:
            return memberships.exists()

        return memberships.filter(role__in=ALLOWED_WRITE_ROLES).exists()
