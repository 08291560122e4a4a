"""Template context shared by every page: the user's firm and navigation."""

from procurement.access import has_permission, user_permissions
from procurement.services.firm_scope import user_firm

# (section, label, url name, url args, permission key)
NAVIGATION = [
    ("Indent", "Create indent", "indent_create", (), "create_indent"),
    ("Indent", "Approve indent", "stage_list", ("approval",), "indent_approval_view"),
    ("Indent", "Vendor rate update", "stage_list", ("vendor_update",), "update_vendor_view"),
    ("Indent", "Three party approval", "stage_list", ("rate_approval",), "three_party_approval_view"),
    ("Purchase", "Pending POs", "stage_list", ("po_decision",), "pending_indents_view"),
    ("Purchase", "Create PO", "stage_list", ("purchase_order",), "create_po"),
    ("Purchase", "PO history", "po_history", (), "po_history"),
    ("Store", "Receive items", "stage_list", ("lift",), "receive_item_view"),
    ("Store", "Store in", "stage_list", ("store_in",), "store_in"),
    ("Store", "Quality check", "stage_list", ("quality_check",), "instead_of_quality_check_in_received_item"),
    ("Store", "Send debit note", "stage_list", ("debit_note",), "send_debit_note"),
    ("Store", "Bill not received", "stage_list", ("bill_pending",), "bill_not_received"),
    ("Store", "Full kitting", "stage_list", ("full_kitting",), "full_kitting"),
    ("Tally", "Audit data", "stage_list", ("audit",), "audit_data"),
    ("Tally", "Rectify the mistake", "stage_list", ("rectify",), "rectify_the_mistake"),
    ("Tally", "Reaudit data", "stage_list", ("reaudit",), "reaudit_data"),
    ("Tally", "Take entry by tally", "stage_list", ("tally_entry",), "take_entry_by_telly"),
    ("Tally", "Again auditing", "stage_list", ("again_audit",), "again_auditing"),
    ("Issue", "Store issue", "issue_create", (), "store_issue"),
    ("Issue", "Issue data", "stage_list", ("issue_approval",), "issue_data"),
    ("Admin", "Users", "user_list", (), "administrate"),
]


def navigation_for(user):
    from django.urls import reverse

    sections = {}
    for section, label, name, args, key in NAVIGATION:
        if has_permission(user, key):
            sections.setdefault(section, []).append((label, reverse(name, args=args)))
    return list(sections.items())


def user_access(request):
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return {}
    return {
        "user_firm": user_firm(user),
        "user_permissions": user_permissions(user),
        "navigation": navigation_for(user),
    }
