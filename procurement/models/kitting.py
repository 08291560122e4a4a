from django.db import models
from django.utils import timezone

from .lifts import Lift

FMS_NAME_CHOICES = [("Store Fms", "Store Fms")]
KITTING_RATE_TYPE_CHOICES = [("Fixed", "Fixed"), ("Per MT", "Per MT")]


class FullKitting(models.Model):
    """Transport details of a lift: vehicle, route, bilty and freight.

    One row per lift, opened when the material is lifted and completed
    (stage 1) once the bilty is recorded.
    """

    kitting_id = models.AutoField(primary_key=True)
    timestamp = models.DateTimeField(default=timezone.now)
    lift = models.OneToOneField(
        Lift, models.CASCADE, related_name="full_kitting", db_column="lift_id"
    )
    indent_number = models.CharField(max_length=20)
    lift_number = models.CharField(max_length=20)
    vendor_name = models.CharField(max_length=255, blank=True, default="")
    product_name = models.CharField(max_length=255, blank=True, default="")
    qty = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    bill_no = models.CharField(max_length=100, blank=True, default="")
    transporting_include = models.CharField(max_length=3, blank=True, default="")
    transporter_name = models.CharField(max_length=255, blank=True, default="")
    amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    vehicle_no = models.CharField(max_length=50, blank=True, default="")
    driver_name = models.CharField(max_length=255, blank=True, default="")
    driver_mobile_no = models.CharField(max_length=20, blank=True, default="")
    firm_name_match = models.CharField(max_length=100, blank=True, default="")

    planned1 = models.DateTimeField(blank=True, null=True)
    actual1 = models.DateTimeField(blank=True, null=True)
    fms_name = models.CharField(
        max_length=50, choices=FMS_NAME_CHOICES, blank=True, default=""
    )
    status = models.CharField(max_length=3, blank=True, default="")
    vehicle_number = models.CharField(max_length=50, blank=True, default="")
    from_location = models.CharField(
        max_length=255, blank=True, default="", db_column="from"
    )
    to_location = models.CharField(max_length=255, blank=True, default="", db_column="to")
    material_load_details = models.TextField(blank=True, default="")
    bilty_number = models.CharField(max_length=100, blank=True, default="")
    rate_type = models.CharField(
        max_length=10, choices=KITTING_RATE_TYPE_CHOICES, blank=True, default=""
    )
    amount1 = models.DecimalField(max_digits=14, decimal_places=2, blank=True, null=True)
    bilty_image = models.CharField(max_length=500, blank=True, default="")

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"Full kitting {self.lift_number}"

    class Meta:
        db_table = "fullkitting"
        ordering = ["-kitting_id"]
