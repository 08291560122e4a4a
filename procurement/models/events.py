from django.conf import settings
from django.db import models


class StageEvent(models.Model):
    """Audit record of a completed workflow step."""

    event_id = models.AutoField(primary_key=True)
    timestamp = models.DateTimeField(auto_now_add=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, models.SET_NULL, blank=True, null=True
    )
    stage = models.CharField(max_length=50)
    entity_type = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=60)
    changes = models.JSONField(default=dict, blank=True)
    firm_name_match = models.CharField(max_length=100, blank=True, default="")

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.timestamp}: {self.stage} {self.entity_type}:{self.entity_id}"

    class Meta:
        db_table = "stage_event"
        ordering = ["-timestamp"]
