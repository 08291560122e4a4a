from django.db import models
from django.utils import timezone

from .lifts import Lift

DONE = "Done"
NOT_DONE = "Not Done"
DONE_CHOICES = [(DONE, "Done"), (NOT_DONE, "Not Done")]
OKEY_CHOICES = [("okey", "Okey"), ("not okey", "Not okey")]


class TallyEntry(models.Model):
    """Accounting verification of a lift before and after it enters Tally.

    Stages: 1 audit, 2 rectify the mistake, 3 re-audit, 4 take entry by
    Tally, 5 again auditing.
    """

    entry_id = models.AutoField(primary_key=True)
    timestamp = models.DateTimeField(default=timezone.now)
    lift = models.OneToOneField(
        Lift, models.CASCADE, related_name="tally_entry", db_column="lift_id"
    )
    indent_number = models.CharField(max_length=20)
    lift_number = models.CharField(max_length=20)
    po_number = models.CharField(max_length=60, blank=True, default="")
    indent_date = models.DateTimeField(blank=True, null=True)
    purchase_date = models.DateTimeField(blank=True, null=True)
    material_in_date = models.DateTimeField(blank=True, null=True)
    product_name = models.CharField(max_length=255, blank=True, default="")
    bill_no = models.CharField(max_length=100, blank=True, default="")
    qty = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    party_name = models.CharField(max_length=255, blank=True, default="")
    bill_amt = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    bill_image = models.CharField(max_length=500, blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    area = models.CharField(max_length=255, blank=True, default="")
    indented_for = models.CharField(max_length=255, blank=True, default="")
    rate = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    indent_qty = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_rate = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    firm_name_match = models.CharField(max_length=100, blank=True, default="")

    planned1 = models.DateTimeField(blank=True, null=True)
    actual1 = models.DateTimeField(blank=True, null=True)
    status1 = models.CharField(max_length=10, choices=DONE_CHOICES, blank=True, default="")
    remarks1 = models.TextField(blank=True, default="")

    planned2 = models.DateTimeField(blank=True, null=True)
    actual2 = models.DateTimeField(blank=True, null=True)
    status2 = models.CharField(max_length=10, choices=DONE_CHOICES, blank=True, default="")
    remarks2 = models.TextField(blank=True, default="")

    planned3 = models.DateTimeField(blank=True, null=True)
    actual3 = models.DateTimeField(blank=True, null=True)
    status3 = models.CharField(max_length=10, choices=DONE_CHOICES, blank=True, default="")
    remarks3 = models.TextField(blank=True, default="")

    planned4 = models.DateTimeField(blank=True, null=True)
    actual4 = models.DateTimeField(blank=True, null=True)
    status4 = models.CharField(max_length=10, choices=DONE_CHOICES, blank=True, default="")
    remarks4 = models.TextField(blank=True, default="")

    planned5 = models.DateTimeField(blank=True, null=True)
    actual5 = models.DateTimeField(blank=True, null=True)
    status5 = models.CharField(max_length=10, choices=OKEY_CHOICES, blank=True, default="")

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"Tally {self.lift_number}"

    class Meta:
        db_table = "tally_entry"
        ordering = ["-entry_id"]
