from django.test import RequestFactory, SimpleTestCase, TestCase
from rest_framework.test import APIClient

from accounts.models import User
from core.middleware import TenantMiddleware, resolve_org_from_path
from core.models import Membership, Organization


class ResolveOrgFromPathTests(SimpleTestCase):
    def test_slug_after_t(self):
        self.assertEqual(resolve_org_from_path("/api/v1/t/acme/numbering/series/"), "acme")

    def test_no_tenant_segment(self):
        self.assertIsNone(resolve_org_from_path("/api/v1/auth/token"))

    def test_t_without_slug(self):
        self.assertIsNone(resolve_org_from_path("/api/v1/t/"))


class TenantMiddlewareTests(TestCase):
    def setUp(self):
        self.org = Organization.objects.create(name="Acme", slug="acme")
        self.middleware = TenantMiddleware(lambda request: None)
        self.factory = RequestFactory()

    def test_sets_request_org(self):
        request = self.factory.get("/api/v1/t/acme/core/ping")
        self.middleware.process_request(request)
        self.assertEqual(request.org, self.org)

    def test_unknown_org(self):
        request = self.factory.get("/api/v1/t/otra/core/ping")
        self.middleware.process_request(request)
        self.assertIsNone(request.org)


class PingTenantViewTests(TestCase):
    def setUp(self):
        self.org = Organization.objects.create(name="Acme", slug="acme")
        self.user = User.objects.create_user(email="admin@acme.test", password="x" * 12)
        Membership.objects.create(organization=self.org, user=self.user, role="owner")
        self.client = APIClient()
        self.client.force_authenticate(self.user)

    def test_ping(self):
        resp = self.client.get("/api/v1/t/acme/core/ping")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["org"]["slug"], "acme")

    def test_ping_unknown_org(self):
        resp = self.client.get("/api/v1/t/otra/core/ping")
        self.assertEqual(resp.status_code, 400)

    def test_health(self):
        resp = self.client.get("/api/v1/t/acme/numbering/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["app"], "series")
