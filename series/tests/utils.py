from core.models import Membership, Organization
from accounts.models import User
from series.choices import DocumentType
from series.models import DocumentSeries


def make_org(slug="acme", name=None):
    return Organization.objects.create(slug=slug, name=name or slug.title())


def make_user(email="admin@acme.test", org=None, role="admin"):
    user = User.objects.create_user(email=email, password="x" * 12)
    if org is not None:
        Membership.objects.create(organization=org, user=user, role=role)
    return user


def make_series(org, code="A", document_type=DocumentType.INVOICE, **kwargs):
    defaults = {
        "name": f"Serie {code}",
        "prefix": "",
        "include_year": False,
        "reset_yearly": False,
        "number_padding": 5,
    }
    defaults.update(kwargs)
    return DocumentSeries.objects.create(org=org, code=code, document_type=document_type, **defaults)
