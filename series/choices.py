from django.utils.translation import gettext_lazy as _


class DocumentType:
    QUOTE = "quote"
    ORDER = "order"
    DELIVERY_NOTE = "delivery_note"
    INVOICE = "invoice"
    RECTIFYING_INVOICE = "rectifying_invoice"
    SUPPLIER_ORDER = "supplier_order"
    SUPPLIER_DELIVERY_NOTE = "supplier_delivery_note"
    SUPPLIER_INVOICE = "supplier_invoice"
    CHOICES = (
    (QUOTE, _("Presupuesto")),
    (ORDER, _("Pedido")),
    (DELIVERY_NOTE, _("Albarán")),
    (INVOICE, _("Factura")),
    (RECTIFYING_INVOICE, _("Factura rectificativa")),
    (SUPPLIER_ORDER, _("Pedido a proveedor")),
    (SUPPLIER_DELIVERY_NOTE, _("Albarán de proveedor")),
    (SUPPLIER_INVOICE, _("Factura de proveedor")),
)
    VALUES = frozenset(value for value, _label in CHOICES)


# Series que se crean al dar de alta una organización (una por tipo de venta)
DEFAULT_SERIES = (
    {"code": "A", "name": "Serie Principal Presupuestos", "document_type": DocumentType.QUOTE, "prefix": "PRES"},
    {"code": "A", "name": "Serie Principal Pedidos", "document_type": DocumentType.ORDER, "prefix": "PED"},
    {"code": "A", "name": "Serie Principal Albaranes", "document_type": DocumentType.DELIVERY_NOTE, "prefix": "ALB"},
    {"code": "A", "name": "Serie Principal Facturas", "document_type": DocumentType.INVOICE, "prefix": "FAC"},
    {"code": "R", "name": "Serie Facturas Rectificativas", "document_type": DocumentType.RECTIFYING_INVOICE, "prefix": "RECT"},
)
