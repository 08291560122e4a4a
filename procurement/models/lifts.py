from django.db import models
from django.utils import timezone

from .indents import Indent

BILL_RECEIVED = "Bill Received"
BILL_NOT_RECEIVED = "Bill Not Received"
BILL_STATUS_CHOICES = [
    (BILL_RECEIVED, "Bill Received"),
    (BILL_NOT_RECEIVED, "Bill Not Received"),
]
BILL_TYPE_CHOICES = [("independent", "Independent"), ("common", "Common")]
PAYMENT_TYPE_CHOICES = [("Advance", "Advance"), ("Credit", "Credit")]
CHECK_STATUS_CHOICES = [("Accept", "Accept"), ("Reject", "Reject")]


class Lift(models.Model):
    """A goods-receipt event against an indent and its purchase order.

    Reconciliation stages: 6 store in, 7 quality check, 9 debit note,
    11 missing bill follow-up.
    """

    lift_id = models.AutoField(primary_key=True)
    timestamp = models.DateTimeField(default=timezone.now)
    lift_number = models.CharField(max_length=20, unique=True)
    indent = models.ForeignKey(
        Indent,
        models.CASCADE,
        to_field="indent_number",
        db_column="indent_no",
        related_name="lifts",
    )
    po_number = models.CharField(max_length=60, blank=True, default="")
    vendor_name = models.CharField(max_length=255, blank=True, default="")
    product_name = models.CharField(max_length=255, blank=True, default="")
    bill_status = models.CharField(max_length=20, choices=BILL_STATUS_CHOICES)
    bill_no = models.CharField(max_length=100, blank=True, default="")
    qty = models.DecimalField(max_digits=12, decimal_places=2)
    lead_time_to_lift_material = models.PositiveIntegerField(default=0)
    type_of_bill = models.CharField(
        max_length=20, choices=BILL_TYPE_CHOICES, blank=True, default=""
    )
    bill_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    payment_type = models.CharField(
        max_length=20, choices=PAYMENT_TYPE_CHOICES, blank=True, default=""
    )
    advance_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    photo_of_bill = models.CharField(max_length=500, blank=True, default="")
    bill_remark = models.TextField(blank=True, default="")
    transportation_include = models.CharField(max_length=3, blank=True, default="")
    transporter_name = models.CharField(max_length=255, blank=True, default="")
    transport_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    vehicle_no = models.CharField(max_length=50, blank=True, default="")
    driver_name = models.CharField(max_length=255, blank=True, default="")
    driver_mobile_no = models.CharField(max_length=20, blank=True, default="")
    firm_name_match = models.CharField(max_length=100, blank=True, default="")

    planned6 = models.DateTimeField(blank=True, null=True)
    actual6 = models.DateTimeField(blank=True, null=True)
    receiving_status = models.CharField(max_length=20, blank=True, default="")
    received_quantity = models.DecimalField(
        max_digits=12, decimal_places=2, blank=True, null=True
    )
    photo_of_product = models.CharField(max_length=500, blank=True, default="")
    damage_order = models.CharField(max_length=3, blank=True, default="")
    quantity_as_per_bill = models.CharField(max_length=3, blank=True, default="")
    remark = models.TextField(blank=True, default="")

    planned7 = models.DateTimeField(blank=True, null=True)
    actual7 = models.DateTimeField(blank=True, null=True)
    check_status = models.CharField(
        max_length=10, choices=CHECK_STATUS_CHOICES, blank=True, default=""
    )
    bill_copy_attached = models.CharField(max_length=500, blank=True, default="")
    send_debit_note = models.CharField(max_length=3, blank=True, default="")
    reason = models.TextField(blank=True, default="")

    planned9 = models.DateTimeField(blank=True, null=True)
    actual9 = models.DateTimeField(blank=True, null=True)
    debit_note_number = models.CharField(max_length=100, blank=True, default="")
    debit_note_copy = models.CharField(max_length=500, blank=True, default="")

    planned11 = models.DateTimeField(blank=True, null=True)
    actual11 = models.DateTimeField(blank=True, null=True)
    bill_status_new = models.CharField(max_length=20, blank=True, default="")
    bill_image_status = models.CharField(max_length=500, blank=True, default="")

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.lift_number

    class Meta:
        db_table = "store_in"
        ordering = ["-lift_id"]
