from django.conf import settings
from django.db import models

ALL_FIRMS = "all"

PERMISSION_KEYS = [
    "administrate",
    "create_indent",
    "indent_approval_view",
    "indent_approval_action",
    "update_vendor_view",
    "update_vendor_action",
    "three_party_approval_view",
    "three_party_approval_action",
    "pending_indents_view",
    "create_po",
    "po_history",
    "receive_item_view",
    "receive_item_action",
    "store_in",
    "instead_of_quality_check_in_received_item",
    "send_debit_note",
    "bill_not_received",
    "full_kitting",
    "audit_data",
    "rectify_the_mistake",
    "reaudit_data",
    "take_entry_by_telly",
    "again_auditing",
    "store_issue",
    "issue_data",
]


class UserAccess(models.Model):
    """Firm scope and screen permissions for a login."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, models.CASCADE, related_name="access"
    )
    firm_name_match = models.CharField(max_length=100, blank=True, default="")
    permissions = models.JSONField(default=list, blank=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.user} ({self.firm_name_match or '-'})"

    def has_permission(self, key: str) -> bool:
        return key in (self.permissions or [])

    class Meta:
        db_table = "user_access"
