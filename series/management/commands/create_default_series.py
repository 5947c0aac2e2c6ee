from django.core.management.base import BaseCommand, CommandError

from core.models import Organization
from series.services_series import create_default_series


class Command(BaseCommand):
    help = "Crea las series de numeración por defecto de una o todas las organizaciones."

    def add_arguments(self, parser):
        parser.add_argument("org_slug", nargs="?", help="Slug de la organización (omitir con --all)")
        parser.add_argument("--all", action="store_true", help="Aplicar a todas las organizaciones")

    def handle(self, *args, **options):
        slug = options.get("org_slug")
        if options["all"]:
            orgs = Organization.objects.order_by("slug")
        elif slug:
            orgs = Organization.objects.filter(slug=slug)
            if not orgs.exists():
                raise CommandError(f"Organización '{slug}' no encontrada")
        else:
            raise CommandError("Indica un slug de organización o --all")

        total = 0
        for org in orgs:
            created = create_default_series(org)
            total += len(created)
            self.stdout.write(f"{org.slug}: {len(created)} serie(s) creadas")
        self.stdout.write(self.style.SUCCESS(f"Total: {total} serie(s) creadas"))
