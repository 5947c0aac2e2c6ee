from django.apps import AppConfig


class SeriesConfig(AppConfig):
    name = "series"
    verbose_name = "Series de documentos"

    def ready(self):
        from . import signals  # noqa: F401
