from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
import os

urlpatterns = [
    # Rutas globales (sin tenant). La emisión de tokens es la estándar de simplejwt.
    path("api/v1/auth/token", TokenObtainPairView.as_view(), name="auth-token"),
    path("api/v1/auth/refresh", TokenRefreshView.as_view(), name="auth-refresh"),

    # Multi-tenant
    path("api/v1/t/<slug:org_slug>/core/", include("core.urls")),
    path("api/v1/t/<slug:org_slug>/numbering/", include("series.urls")),
]

# Admin solo si DEBUG o si se fuerza por env
if settings.DEBUG or os.getenv("ENABLE_ADMIN", "False") == "True":
    urlpatterns.insert(0, path("admin/", admin.site.urls))

# Docs solo en desarrollo
if settings.DEBUG:
    urlpatterns += [
        path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),
        path("api/v1/docs/", SpectacularSwaggerView.as_view(url_name="schema")),
    ]
