from django.db import models
from django.utils import timezone

VENDOR_PENDING = "Pending"
VENDOR_REGULAR = "Regular"
VENDOR_NEW = "New Vendor"
VENDOR_REJECT = "Reject"
VENDOR_THREE_PARTY = "Three Party"

VENDOR_TYPE_CHOICES = [
    (VENDOR_PENDING, "Pending"),
    (VENDOR_REGULAR, "Regular"),
    (VENDOR_NEW, "New Vendor"),
    (VENDOR_REJECT, "Reject"),
    (VENDOR_THREE_PARTY, "Three Party"),
]

INDENT_STATUS_CHOICES = [
    ("Critical", "Critical"),
    ("None Critical", "None Critical"),
]

STATUS_PENDING = "Pending"
STATUS_COMPLETE = "Complete"

RATE_TYPE_BASIC = "Basic Rate"
RATE_TYPE_WITH_TAX = "With Tax"
RATE_TYPE_CHOICES = [
    (RATE_TYPE_BASIC, "Basic Rate"),
    (RATE_TYPE_WITH_TAX, "With Tax"),
]
YES_NO_CHOICES = [("Yes", "Yes"), ("No", "No")]


class Indent(models.Model):
    """One requested product line moving through the purchase workflow.

    Stage progress lives in the ``plannedN``/``actualN`` timestamp pairs:
    1 approval, 2 vendor update, 3 three-party rate approval, 4 purchase
    order, 5 lifting.
    """

    indent_id = models.AutoField(primary_key=True)
    timestamp = models.DateTimeField(default=timezone.now)
    indent_number = models.CharField(max_length=20, unique=True)
    firm_name = models.CharField(max_length=100)
    indenter_name = models.CharField(max_length=255)
    department = models.CharField(max_length=100, blank=True, default="")
    area_of_use = models.CharField(max_length=255, blank=True, default="")
    group_head = models.CharField(max_length=100, blank=True, default="")
    product_name = models.CharField(max_length=255)
    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    uom = models.CharField(max_length=30, blank=True, default="")
    specifications = models.TextField(blank=True, default="")
    attachment = models.CharField(max_length=500, blank=True, default="")
    indent_status = models.CharField(
        max_length=20, choices=INDENT_STATUS_CHOICES, blank=True, default=""
    )
    no_day = models.PositiveIntegerField(default=1)

    planned1 = models.DateTimeField(blank=True, null=True)
    actual1 = models.DateTimeField(blank=True, null=True)
    vendor_type = models.CharField(
        max_length=20, choices=VENDOR_TYPE_CHOICES, blank=True, default=""
    )
    approved_quantity = models.DecimalField(
        max_digits=12, decimal_places=2, blank=True, null=True
    )

    planned2 = models.DateTimeField(blank=True, null=True)
    actual2 = models.DateTimeField(blank=True, null=True)
    product_code = models.CharField(max_length=100, blank=True, default="")
    comparison_sheet = models.CharField(max_length=500, blank=True, default="")

    planned3 = models.DateTimeField(blank=True, null=True)
    actual3 = models.DateTimeField(blank=True, null=True)
    approved_vendor_name = models.CharField(max_length=255, blank=True, default="")
    approved_rate = models.DecimalField(
        max_digits=12, decimal_places=2, blank=True, null=True
    )
    approved_payment_term = models.CharField(max_length=255, blank=True, default="")
    approved_with_tax = models.CharField(max_length=3, blank=True, default="")
    approved_tax_value = models.DecimalField(
        max_digits=6, decimal_places=2, blank=True, null=True
    )

    planned4 = models.DateTimeField(blank=True, null=True)
    actual4 = models.DateTimeField(blank=True, null=True)
    po_required = models.CharField(
        max_length=3, choices=YES_NO_CHOICES, blank=True, default=""
    )
    po_number = models.CharField(max_length=50, blank=True, default="")
    po_copy = models.CharField(max_length=500, blank=True, default="")
    payment_term = models.CharField(max_length=255, blank=True, default="")
    delivery_date = models.DateField(blank=True, null=True)

    planned5 = models.DateTimeField(blank=True, null=True)
    actual5 = models.DateTimeField(blank=True, null=True)
    status = models.CharField(max_length=20, blank=True, default="")
    pending_lift_qty = models.DecimalField(
        max_digits=12, decimal_places=2, blank=True, null=True
    )
    payment_type = models.CharField(max_length=50, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.indent_number or f"Indent {self.pk}"

    @property
    def effective_quantity(self):
        return self.approved_quantity or self.quantity

    class Meta:
        db_table = "indent"
        ordering = ["-indent_id"]


class VendorQuote(models.Model):
    """A vendor's offer recorded against an indent during rate negotiation.

    Regular vendors have a single quote in slot 1; three-party indents carry
    quotes in slots 1 to 3.
    """

    quote_id = models.AutoField(primary_key=True)
    indent = models.ForeignKey(
        Indent, models.CASCADE, related_name="quotes", db_column="indent_id"
    )
    slot = models.PositiveSmallIntegerField()
    vendor_name = models.CharField(max_length=255)
    rate_type = models.CharField(max_length=20, choices=RATE_TYPE_CHOICES)
    rate = models.DecimalField(max_digits=12, decimal_places=2)
    with_tax = models.CharField(max_length=3, choices=YES_NO_CHOICES)
    tax_value = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    payment_term = models.CharField(max_length=255, blank=True, default="")
    whatsapp_number = models.CharField(max_length=20, blank=True, default="")
    email_id = models.CharField(max_length=254, blank=True, default="")

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.indent} #{self.slot} {self.vendor_name}"

    class Meta:
        db_table = "vendor_quote"
        ordering = ["slot"]
        constraints = [
            models.UniqueConstraint(
                fields=["indent", "slot"], name="unique_quote_slot_per_indent"
            )
        ]
