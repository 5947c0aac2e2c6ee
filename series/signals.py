# series/signals.py
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from core.models import Organization
from .services_series import create_default_series


@receiver(post_save, sender=Organization)
def provision_default_series(sender, instance, created, **kwargs):
    if created and getattr(settings, "SERIES_AUTO_PROVISION", False):
        create_default_series(instance)
