from django.urls import path, include
from django.http import JsonResponse
from rest_framework.routers import DefaultRouter

from .views import DocumentSeriesViewSet

router = DefaultRouter()
router.register(r"series", DocumentSeriesViewSet, basename="document-series")


def health(_request, **_kwargs):
    return JsonResponse({"app": "series", "status": "ok"})

urlpatterns = [
    path("health/", health, name="series-health"),
    path("", include(router.urls)),
]
