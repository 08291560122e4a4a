from django.db import models
from django.utils import timezone


class StoreIssue(models.Model):
    """Material issued out of the store, awaiting store approval."""

    issue_id = models.AutoField(primary_key=True)
    timestamp = models.DateTimeField(default=timezone.now)
    issue_no = models.CharField(max_length=20, unique=True)
    issue_to = models.CharField(max_length=255)
    uom = models.CharField(max_length=30, blank=True, default="")
    group_head = models.CharField(max_length=100, blank=True, default="")
    product_name = models.CharField(max_length=255)
    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    department = models.CharField(max_length=100, blank=True, default="")
    firm_name_match = models.CharField(max_length=100, blank=True, default="")
    planned1 = models.DateTimeField(blank=True, null=True)
    actual1 = models.DateTimeField(blank=True, null=True)
    status = models.CharField(max_length=3, blank=True, default="")
    given_qty = models.DecimalField(
        max_digits=12, decimal_places=2, blank=True, null=True
    )

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.issue_no

    class Meta:
        db_table = "issue"
        ordering = ["-issue_id"]
