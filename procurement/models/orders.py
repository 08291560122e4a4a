from django.db import models
from django.utils import timezone


class PurchaseOrderLine(models.Model):
    """One indent line printed on a purchase order.

    A PO number groups several lines; a revision is a new set of lines under
    ``<base>/<n>``.
    """

    line_id = models.AutoField(primary_key=True)
    timestamp = models.DateTimeField(default=timezone.now)
    po_number = models.CharField(max_length=60, db_index=True)
    party_name = models.CharField(max_length=255)
    internal_code = models.CharField(max_length=20)
    product = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    unit = models.CharField(max_length=30, blank=True, default="")
    rate = models.DecimalField(max_digits=12, decimal_places=2)
    gst = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    discount = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    total_po_amount = models.DecimalField(max_digits=14, decimal_places=2)
    pdf = models.CharField(max_length=500, blank=True, default="")
    quotation_number = models.CharField(max_length=100, blank=True, default="")
    quotation_date = models.DateField(blank=True, null=True)
    enquiry_number = models.CharField(max_length=100, blank=True, default="")
    enquiry_date = models.DateField(blank=True, null=True)
    terms = models.JSONField(default=list, blank=True)
    delivery_date = models.DateField(blank=True, null=True)
    payment_terms = models.CharField(max_length=255, blank=True, default="")
    delivery_days = models.PositiveIntegerField(default=0)
    delivery_type = models.CharField(max_length=50, blank=True, default="")
    company_email = models.CharField(max_length=254, blank=True, default="")
    prepared_by = models.CharField(max_length=150, blank=True, default="")
    firm_name_match = models.CharField(max_length=100, blank=True, default="")

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.po_number} - {self.internal_code}"

    class Meta:
        db_table = "po_master"
        ordering = ["-line_id"]
