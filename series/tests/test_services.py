from concurrent.futures import ThreadPoolExecutor

from django.db import connection
from django.test import TestCase, TransactionTestCase
from rest_framework.exceptions import ValidationError

from series.choices import DocumentType
from series.exceptions import ConflictError, SeriesNotFound
from series.models import DocumentSeries
from series.numbering import current_year
from series.services_series import (
    create_default_series,
    create_series,
    delete_series,
    duplicate_series,
    get_default_series,
    get_series,
    list_series_for_type,
    resolve_series,
    set_default,
    suggest_code,
    update_series,
)

from .utils import make_org, make_series, make_user


def _defaults(org, document_type=DocumentType.INVOICE):
    return DocumentSeries.objects.filter(org=org, document_type=document_type, is_default=True)


class CreateSeriesTests(TestCase):
    def setUp(self):
        self.org = make_org()
        self.user = make_user(org=self.org)

    def test_create_normalizes_code_and_audits(self):
        series = create_series(
            self.org, user=self.user, code=" fac ", name="Facturas", document_type=DocumentType.INVOICE,
        )
        self.assertEqual(series.code, "FAC")
        self.assertEqual(series.next_number, 1)
        self.assertEqual(series.last_reset_year, current_year())
        self.assertEqual(series.created_by, self.user)
        self.assertEqual(series.updated_by, self.user)

    def test_padding_out_of_range(self):
        for padding in (0, 11):
            with self.subTest(padding=padding):
                with self.assertRaises(ValidationError) as ctx:
                    create_series(
                        self.org, code="A", name="A", document_type=DocumentType.INVOICE,
                        number_padding=padding,
                    )
                self.assertIn("number_padding", ctx.exception.detail)
        self.assertFalse(DocumentSeries.objects.exists())

    def test_invalid_code(self):
        for code in ("", "CON ESPACIO", "DEMASIADO_LARGO", "Ñ"):
            with self.subTest(code=code):
                with self.assertRaises(ValidationError):
                    create_series(self.org, code=code, name="X", document_type=DocumentType.INVOICE)

    def test_next_number_must_be_positive(self):
        with self.assertRaises(ValidationError):
            create_series(self.org, code="A", name="A", document_type=DocumentType.INVOICE, next_number=0)

    def test_initial_next_number(self):
        series = create_series(self.org, code="A", name="A", document_type=DocumentType.INVOICE, next_number=120)
        self.assertEqual(series.next_number, 120)

    def test_duplicate_code_conflicts(self):
        make_series(self.org, code="A")
        with self.assertRaises(ConflictError):
            create_series(self.org, code="a", name="Otra", document_type=DocumentType.INVOICE)

    def test_same_code_allowed_for_other_type_or_org(self):
        make_series(self.org, code="A")
        create_series(self.org, code="A", name="Pres", document_type=DocumentType.QUOTE)
        create_series(make_org("globex"), code="A", name="Fact", document_type=DocumentType.INVOICE)
        self.assertEqual(DocumentSeries.objects.filter(code="A").count(), 3)


class DefaultSeriesTests(TestCase):
    def setUp(self):
        self.org = make_org()

    def test_create_default_demotes_previous(self):
        a = make_series(self.org, code="A", is_default=True)
        b = create_series(self.org, code="B", name="B", document_type=DocumentType.INVOICE, is_default=True)
        a.refresh_from_db()
        self.assertFalse(a.is_default)
        self.assertEqual(list(_defaults(self.org)), [b])

    def test_update_default_demotes_previous(self):
        a = make_series(self.org, code="A", is_default=True)
        b = make_series(self.org, code="B")
        update_series(b, is_default=True)
        a.refresh_from_db()
        self.assertFalse(a.is_default)
        self.assertEqual(list(_defaults(self.org)), [b])

    def test_set_default(self):
        a = make_series(self.org, code="A", is_default=True)
        b = make_series(self.org, code="B")
        c = make_series(self.org, code="C")
        set_default(c)
        set_default(b)
        self.assertEqual(list(_defaults(self.org).values_list("code", flat=True)), ["B"])
        a.refresh_from_db()
        self.assertFalse(a.is_default)

    def test_default_is_per_document_type(self):
        make_series(self.org, code="A", document_type=DocumentType.QUOTE, is_default=True)
        make_series(self.org, code="A", document_type=DocumentType.INVOICE, is_default=True)
        self.assertEqual(DocumentSeries.objects.filter(org=self.org, is_default=True).count(), 2)

    def test_default_is_per_org(self):
        other = make_org("globex")
        make_series(self.org, code="A", is_default=True)
        make_series(other, code="A", is_default=True)
        self.assertEqual(_defaults(self.org).count(), 1)
        self.assertEqual(_defaults(other).count(), 1)

    def test_get_default_series(self):
        self.assertIsNone(get_default_series(self.org, DocumentType.INVOICE))
        b = make_series(self.org, code="B", is_default=True)
        self.assertEqual(get_default_series(self.org, DocumentType.INVOICE), b)
        self.assertIsNone(get_default_series(self.org, DocumentType.QUOTE))

    def test_inactive_default_is_not_returned(self):
        make_series(self.org, code="B", is_default=True, active=False)
        self.assertIsNone(get_default_series(self.org, DocumentType.INVOICE))


class UpdateSeriesTests(TestCase):
    def setUp(self):
        self.org = make_org()
        self.user = make_user(org=self.org)

    def test_partial_update(self):
        series = make_series(self.org, code="A")
        updated = update_series(series, user=self.user, prefix="F-", suffix="-X", number_padding=3)
        self.assertEqual((updated.prefix, updated.suffix, updated.number_padding), ("F-", "-X", 3))
        self.assertEqual(updated.updated_by, self.user)

    def test_document_type_is_immutable(self):
        series = make_series(self.org)
        with self.assertRaises(ValidationError):
            update_series(series, document_type=DocumentType.QUOTE)

    def test_counter_is_not_editable(self):
        series = make_series(self.org)
        with self.assertRaises(ValidationError):
            update_series(series, next_number=50)

    def test_update_keeps_concurrently_advanced_counter(self):
        series = make_series(self.org)
        DocumentSeries.objects.filter(pk=series.pk).update(next_number=9)
        update_series(series, name="Renombrada")
        series.refresh_from_db()
        self.assertEqual(series.next_number, 9)
        self.assertEqual(series.name, "Renombrada")

    def test_rename_to_existing_code_conflicts(self):
        make_series(self.org, code="A")
        b = make_series(self.org, code="B")
        with self.assertRaises(ConflictError):
            update_series(b, code="a")

    def test_invalid_padding_rejected(self):
        series = make_series(self.org)
        with self.assertRaises(ValidationError):
            update_series(series, number_padding=11)
        series.refresh_from_db()
        self.assertEqual(series.number_padding, 5)


class DeleteAndDuplicateTests(TestCase):
    def setUp(self):
        self.org = make_org()

    def test_delete(self):
        series = make_series(self.org)
        delete_series(series)
        self.assertFalse(DocumentSeries.objects.exists())

    def test_default_cannot_be_deleted(self):
        series = make_series(self.org, is_default=True)
        with self.assertRaises(ValidationError):
            delete_series(series)
        self.assertTrue(DocumentSeries.objects.filter(pk=series.pk).exists())

    def test_duplicate(self):
        series = make_series(self.org, code="A", prefix="F-", next_number=40, is_default=True)
        copy = duplicate_series(series)
        self.assertEqual(copy.code, "A_COPIA")
        self.assertEqual(copy.name, "Serie A (Copia)")
        self.assertEqual(copy.prefix, "F-")
        self.assertEqual(copy.next_number, 1)
        self.assertFalse(copy.active)
        self.assertFalse(copy.is_default)
        series.refresh_from_db()
        self.assertTrue(series.is_default)

        again = duplicate_series(series)
        self.assertEqual(again.code, "A_COPIA1")

    def test_duplicate_truncates_long_code(self):
        series = make_series(self.org, code="ABCDEFGHIJ")
        self.assertEqual(duplicate_series(series).code, "ABCD_COPIA")


class LookupTests(TestCase):
    def setUp(self):
        self.org = make_org()

    def test_get_series_is_org_scoped(self):
        series = make_series(self.org)
        self.assertEqual(get_series(self.org, series.pk), series)
        with self.assertRaises(SeriesNotFound):
            get_series(make_org("globex"), series.pk)

    def test_list_series_for_type(self):
        make_series(self.org, code="C")
        make_series(self.org, code="B", is_default=True)
        make_series(self.org, code="A", active=False)
        make_series(self.org, code="Q", document_type=DocumentType.QUOTE)
        codes = [s.code for s in list_series_for_type(self.org, DocumentType.INVOICE)]
        self.assertEqual(codes, ["B", "C"])
        codes = [s.code for s in list_series_for_type(self.org, DocumentType.INVOICE, only_active=False)]
        self.assertEqual(codes, ["B", "A", "C"])

    def test_resolve_series_explicit_must_match_type(self):
        quote = make_series(self.org, code="Q", document_type=DocumentType.QUOTE)
        with self.assertRaises(ValidationError):
            resolve_series(self.org, DocumentType.INVOICE, series_id=quote.pk)

    def test_resolve_series_without_candidates(self):
        make_series(self.org, code="A", active=False)
        with self.assertRaises(SeriesNotFound):
            resolve_series(self.org, DocumentType.INVOICE)

    def test_suggest_code_does_not_advance(self):
        series = make_series(self.org, prefix="F-", is_default=True, next_number=8)
        suggestion = suggest_code(self.org, DocumentType.INVOICE)
        self.assertEqual(suggestion, {"code": "F-00008", "series": series.pk, "next_number": 8})
        series.refresh_from_db()
        self.assertEqual(series.next_number, 8)

    def test_suggest_code_after_year_change(self):
        make_series(
            self.org, prefix="F-", is_default=True, reset_yearly=True,
            last_reset_year=current_year() - 1, next_number=8,
        )
        self.assertEqual(suggest_code(self.org, DocumentType.INVOICE)["next_number"], 1)


class CreateDefaultSeriesTests(TestCase):
    def setUp(self):
        self.org = make_org()

    def test_creates_one_default_per_sales_type(self):
        created = create_default_series(self.org)
        self.assertEqual(len(created), 5)
        pairs = set(DocumentSeries.objects.filter(org=self.org).values_list("document_type", "code", "prefix"))
        self.assertIn((DocumentType.INVOICE, "A", "FAC"), pairs)
        self.assertIn((DocumentType.RECTIFYING_INVOICE, "R", "RECT"), pairs)
        self.assertTrue(all(s.is_default for s in created))

    def test_is_idempotent(self):
        create_default_series(self.org)
        self.assertEqual(create_default_series(self.org), [])
        self.assertEqual(DocumentSeries.objects.filter(org=self.org).count(), 5)

    def test_keeps_existing_default(self):
        make_series(self.org, code="B", is_default=True)
        create_default_series(self.org)
        invoice_a = DocumentSeries.objects.get(org=self.org, document_type=DocumentType.INVOICE, code="A")
        self.assertFalse(invoice_a.is_default)
        self.assertEqual(list(_defaults(self.org).values_list("code", flat=True)), ["B"])


class ConcurrentSetDefaultTests(TransactionTestCase):
    def test_concurrent_set_default_leaves_one_default(self):
        org = make_org()
        candidates = [make_series(org, code=code) for code in ("A", "B", "C", "D")]
        make_series(org, code="P", document_type=DocumentType.QUOTE, is_default=True)

        def worker(index):
            try:
                set_default(candidates[index % len(candidates)])
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(worker, range(40)))

        self.assertEqual(_defaults(org).count(), 1)
        self.assertEqual(_defaults(org, DocumentType.QUOTE).count(), 1)
        self.assertEqual(DocumentSeries.objects.filter(org=org).count(), 5)
