from django.db import models


class MasterRecord(models.Model):
    """Reference data row: vendors, items, departments and firm details.

    The table is denormalised; each row may carry any subset of the columns.
    """

    id = models.AutoField(primary_key=True)
    vendor_name = models.CharField(max_length=255, blank=True, default="")
    vendor_gstin = models.CharField(max_length=20, blank=True, default="")
    vendor_address = models.TextField(blank=True, default="")
    vendor_email = models.CharField(max_length=254, blank=True, default="")
    payment_term = models.CharField(max_length=255, blank=True, default="")
    department = models.CharField(max_length=100, blank=True, default="")
    group_head = models.CharField(max_length=100, blank=True, default="")
    item_name = models.CharField(max_length=255, blank=True, default="")
    uom = models.CharField(max_length=30, blank=True, default="")
    firm_name = models.CharField(max_length=100, blank=True, default="")
    company_name = models.CharField(max_length=255, blank=True, default="")
    company_address = models.TextField(blank=True, default="")
    company_gstin = models.CharField(max_length=20, blank=True, default="")
    company_phone = models.CharField(max_length=20, blank=True, default="")
    company_pan = models.CharField(max_length=20, blank=True, default="")
    company_email = models.CharField(max_length=254, blank=True, default="")
    billing_address = models.TextField(blank=True, default="")
    destination_address = models.TextField(blank=True, default="")
    default_terms = models.TextField(blank=True, default="")

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.item_name or self.vendor_name or f"Master {self.pk}"

    class Meta:
        db_table = "master"
