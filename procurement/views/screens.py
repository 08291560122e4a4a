"""Columns and actions of every stage screen."""

from __future__ import annotations

from typing import Dict

from ..forms.indent_forms import ApprovalForm
from ..forms.issue_forms import IssueApprovalForm
from ..forms.lift_forms import (
    BillPendingForm,
    DebitNoteForm,
    FullKittingForm,
    LiftForm,
    QualityCheckForm,
    StoreInForm,
)
from ..forms.purchase_forms import PODecisionForm
from ..forms.tally_forms import AgainAuditForm, TallyStageForm
from ..forms.vendor_forms import (
    RateApprovalForm,
    RegularVendorForm,
    ReviseRateForm,
    ThreePartyVendorForm,
)
from ..models.indents import VENDOR_THREE_PARTY
from ..services import (
    indent_service,
    issue_service,
    kitting_service,
    lift_service,
    purchase_order_service,
    stages,
    tally_service,
    vendor_service,
)
from .base import Action, Column, Screen

INDENT_SEARCH = ["indent_number", "product_name", "indenter_name", "department", "firm_name"]
LIFT_SEARCH = ["lift_number", "indent__indent_number", "po_number", "vendor_name", "product_name", "bill_no"]
TALLY_SEARCH = ["lift_number", "indent_number", "po_number", "party_name", "product_name", "bill_no"]

INDENT_BASE = [
    Column("Indent No.", "indent_number"),
    Column("Firm", "firm_name"),
    Column("Indenter", "indenter_name"),
    Column("Department", "department"),
    Column("Product", "product_name"),
    Column("Quantity", "quantity"),
    Column("UOM", "uom"),
]

LIFT_BASE = [
    Column("Lift No.", "lift_number"),
    Column("Indent No.", "indent_id"),
    Column("PO No.", "po_number"),
    Column("Vendor", "vendor_name"),
    Column("Product", "product_name"),
    Column("Bill Status", "bill_status"),
    Column("Bill No.", "bill_no"),
    Column("Qty", "qty"),
]

TALLY_BASE = [
    Column("Indent No.", "indent_number"),
    Column("Lift No.", "lift_number"),
    Column("PO No.", "po_number"),
    Column("Product", "product_name"),
    Column("Party", "party_name"),
    Column("Bill No.", "bill_no"),
    Column("Bill Amount", "bill_amt"),
    Column("Qty", "qty"),
]


def _user(request):
    return request.user


def _approve(request, obj, form):
    data = form.cleaned_data
    return indent_service.approve_indent(
        obj, data["vendor_type"], data.get("approved_quantity"), user=_user(request)
    )


def _edit_approval(request, obj, form):
    data = form.cleaned_data
    return indent_service.edit_approval(
        obj, data["vendor_type"], data.get("approved_quantity"), user=_user(request)
    )


def _vendor_form(obj):
    return ThreePartyVendorForm if obj.vendor_type == VENDOR_THREE_PARTY else RegularVendorForm


def _update_vendor(request, obj, form):
    if obj.vendor_type == VENDOR_THREE_PARTY:
        return vendor_service.update_three_party_vendors(
            obj,
            form.quotes(),
            form.cleaned_data.get("comparison_sheet"),
            form.cleaned_data.get("product_code") or "",
            user=_user(request),
        )
    return vendor_service.update_regular_vendor(obj, form.quote(), user=_user(request))


def _approve_rate(request, obj, form):
    return vendor_service.approve_rate(obj, form.cleaned_data["slot"], user=_user(request))


def _revise_rate(request, obj, form):
    return vendor_service.revise_rate(obj, form.cleaned_data["rate"], user=_user(request))


def _decide_po(request, obj, form):
    return purchase_order_service.decide_po_required(
        obj, form.cleaned_data["po_required"], user=_user(request)
    )


def _create_lift(request, obj, form):
    data = dict(form.cleaned_data)
    photo = data.pop("photo_of_bill", None)
    return lift_service.create_lift(obj, data, bill_photo=photo, user=_user(request))


def _store_in(request, obj, form):
    data = dict(form.cleaned_data)
    photo = data.pop("photo_of_product", None)
    return lift_service.store_in(obj, data, product_photo=photo, user=_user(request))


def _quality_check(request, obj, form):
    data = dict(form.cleaned_data)
    copy = data.pop("bill_copy_attached", None)
    return lift_service.quality_check(obj, data, bill_copy=copy, user=_user(request))


def _debit_note(request, obj, form):
    return lift_service.send_debit_note(
        obj,
        form.cleaned_data["debit_note_number"],
        form.cleaned_data.get("debit_note_copy"),
        user=_user(request),
    )


def _missing_bill(request, obj, form):
    return lift_service.resolve_missing_bill(
        obj, form.cleaned_data["status"], form.cleaned_data.get("bill_image"), user=_user(request)
    )


def _full_kitting(request, obj, form):
    data = dict(form.cleaned_data)
    image = data.pop("bilty_image", None)
    return kitting_service.update_full_kitting(obj, data, bilty_image=image, user=_user(request))


def _tally(stage_key):
    def handler(request, obj, form):
        action = tally_service.ACTIONS[stage_key]
        return action(obj, form.cleaned_data["status"], form.cleaned_data["remarks"], user=_user(request))

    return handler


def _again_audit(request, obj, form):
    return tally_service.again_audit(obj, form.cleaned_data["status"], user=_user(request))


def _approve_issue(request, obj, form):
    return issue_service.approve_issue(
        obj, form.cleaned_data["status"], form.cleaned_data.get("given_qty"), user=_user(request)
    )


def _tally_screen(stage, n: int, action: Action) -> Screen:
    return Screen(
        stage=stage,
        title=stage.label,
        columns=TALLY_BASE + [Column("Planned", f"planned{n}")],
        history_columns=TALLY_BASE
        + [
            Column("Planned", f"planned{n}"),
            Column("Actual", f"actual{n}"),
            Column("Status", f"status{n}"),
        ]
        + ([Column("Remarks", f"remarks{n}")] if n < 5 else []),
        search_fields=TALLY_SEARCH,
        action=action,
    )


def _tally_action(stage) -> Action:
    return Action("Update", TallyStageForm, _tally(stage.key))


SCREENS: Dict[str, Screen] = {
    s.stage.key: s
    for s in [
        Screen(
            stage=stages.APPROVAL,
            title="Approve Indent",
            columns=INDENT_BASE
            + [
                Column("Status", "indent_status"),
                Column("Specifications", "specifications"),
                Column("Attachment", "attachment", link=True),
                Column("Planned", "planned1"),
            ],
            history_columns=INDENT_BASE
            + [
                Column("Vendor Type", "vendor_type"),
                Column("Approved Qty", "approved_quantity"),
                Column("Approved On", "actual1"),
            ],
            search_fields=INDENT_SEARCH,
            action=Action("Approve", ApprovalForm, _approve),
            history_action=Action("Edit", ApprovalForm, _edit_approval),
        ),
        Screen(
            stage=stages.VENDOR_UPDATE,
            title="Vendor Rate Update",
            columns=INDENT_BASE
            + [
                Column("Vendor Type", "vendor_type"),
                Column("Approved Qty", "approved_quantity"),
                Column("Planned", "planned2"),
            ],
            history_columns=INDENT_BASE
            + [
                Column("Vendor Type", "vendor_type"),
                Column("Approved Vendor", "approved_vendor_name"),
                Column("Approved Rate", "approved_rate"),
                Column("Updated On", "actual2"),
            ],
            search_fields=INDENT_SEARCH,
            action=Action("Update", _vendor_form, _update_vendor),
        ),
        Screen(
            stage=stages.RATE_APPROVAL,
            title="Three Party Rate Approval",
            columns=INDENT_BASE
            + [
                Column(
                    "Quotes",
                    lambda obj: "; ".join(
                        f"{q.vendor_name}: {q.rate}" for q in obj.quotes.all()
                    ),
                ),
                Column("Comparison Sheet", "comparison_sheet", link=True),
                Column("Planned", "planned3"),
            ],
            history_columns=INDENT_BASE
            + [
                Column("Approved Vendor", "approved_vendor_name"),
                Column("Approved Rate", "approved_rate"),
                Column("Payment Term", "approved_payment_term"),
                Column("Approved On", "actual3"),
            ],
            search_fields=INDENT_SEARCH,
            prefetch_related=("quotes",),
            action=Action("Approve", RateApprovalForm, _approve_rate),
            history_action=Action("Revise rate", ReviseRateForm, _revise_rate),
        ),
        Screen(
            stage=stages.PO_DECISION,
            title="Pending POs",
            columns=INDENT_BASE
            + [
                Column("Approved Vendor", "approved_vendor_name"),
                Column("Approved Rate", "approved_rate"),
                Column("Planned", "planned4"),
            ],
            history_columns=INDENT_BASE
            + [
                Column("Approved Vendor", "approved_vendor_name"),
                Column("PO Required", "po_required"),
                Column("PO No.", "po_number"),
            ],
            search_fields=INDENT_SEARCH,
            action=Action("Decide", PODecisionForm, _decide_po),
        ),
        Screen(
            stage=stages.PURCHASE_ORDER,
            title="Create PO",
            columns=INDENT_BASE
            + [
                Column("Approved Vendor", "approved_vendor_name"),
                Column("Approved Rate", "approved_rate"),
                Column("Planned", "planned4"),
            ],
            history_columns=INDENT_BASE
            + [
                Column("Vendor", "approved_vendor_name"),
                Column("PO No.", "po_number"),
                Column("PO Copy", "po_copy", link=True),
                Column("Delivery Date", "delivery_date"),
                Column("Created On", "actual4"),
            ],
            search_fields=INDENT_SEARCH + ["approved_vendor_name", "po_number"],
            links=(
                ("Create PO", "po_create", "create_po"),
                ("PO history", "po_history", "po_history"),
            ),
        ),
        Screen(
            stage=stages.LIFT,
            title="Receive Items",
            columns=INDENT_BASE
            + [
                Column("Vendor", "approved_vendor_name"),
                Column("PO No.", "po_number"),
                Column("PO Copy", "po_copy", link=True),
                Column("Pending Qty", "pending_lift_qty"),
                Column("Delivery Date", "delivery_date"),
                Column("Planned", "planned5"),
            ],
            history_columns=INDENT_BASE
            + [
                Column("Vendor", "approved_vendor_name"),
                Column("PO No.", "po_number"),
                Column("Last Lift", "actual5"),
            ],
            search_fields=INDENT_SEARCH + ["po_number", "approved_vendor_name"],
            action=Action("Lift", LiftForm, _create_lift),
        ),
        Screen(
            stage=stages.STORE_IN,
            title="Store In",
            columns=LIFT_BASE + [Column("Bill Photo", "photo_of_bill", link=True), Column("Planned", "planned6")],
            history_columns=LIFT_BASE
            + [
                Column("Received Qty", "received_quantity"),
                Column("Damage", "damage_order"),
                Column("Qty as per Bill", "quantity_as_per_bill"),
                Column("Received On", "actual6"),
            ],
            search_fields=LIFT_SEARCH,
            select_related=("indent",),
            action=Action("Store in", StoreInForm, _store_in),
        ),
        Screen(
            stage=stages.QUALITY_CHECK,
            title="Quality Check",
            columns=LIFT_BASE
            + [
                Column("Received Qty", "received_quantity"),
                Column("Product Photo", "photo_of_product", link=True),
                Column("Planned", "planned7"),
            ],
            history_columns=LIFT_BASE
            + [
                Column("Status", "check_status"),
                Column("Debit Note", "send_debit_note"),
                Column("Reason", "reason"),
                Column("Checked On", "actual7"),
            ],
            search_fields=LIFT_SEARCH,
            select_related=("indent",),
            action=Action("Check", QualityCheckForm, _quality_check),
        ),
        Screen(
            stage=stages.DEBIT_NOTE,
            title="Send Debit Note",
            columns=LIFT_BASE + [Column("Reason", "reason"), Column("Planned", "planned9")],
            history_columns=LIFT_BASE
            + [
                Column("Debit Note No.", "debit_note_number"),
                Column("Debit Note", "debit_note_copy", link=True),
                Column("Sent On", "actual9"),
            ],
            search_fields=LIFT_SEARCH,
            select_related=("indent",),
            action=Action("Send", DebitNoteForm, _debit_note),
        ),
        Screen(
            stage=stages.BILL_PENDING,
            title="Bill Not Received",
            columns=LIFT_BASE + [Column("Planned", "planned11")],
            history_columns=LIFT_BASE
            + [
                Column("Status", "bill_status_new"),
                Column("Bill Image", "bill_image_status", link=True),
                Column("Received On", "actual11"),
            ],
            search_fields=LIFT_SEARCH,
            select_related=("indent",),
            action=Action("Update", BillPendingForm, _missing_bill),
        ),
        Screen(
            stage=stages.FULL_KITTING,
            title="Full Kitting",
            columns=[
                Column("Indent No.", "indent_number"),
                Column("Lift No.", "lift_number"),
                Column("Firm", "firm_name_match"),
                Column("Vendor", "vendor_name"),
                Column("Product", "product_name"),
                Column("Qty", "qty"),
                Column("Bill No.", "bill_no"),
                Column("Transporting Include", "transporting_include"),
                Column("Transporter", "transporter_name"),
                Column("Amount", "amount"),
                Column("Planned", "planned1"),
            ],
            history_columns=[
                Column("Indent No.", "indent_number"),
                Column("Lift No.", "lift_number"),
                Column("Vendor", "vendor_name"),
                Column("Vehicle No.", "vehicle_number"),
                Column("From", "from_location"),
                Column("To", "to_location"),
                Column("Bilty No.", "bilty_number"),
                Column("Rate Type", "rate_type"),
                Column("Amount", "amount1"),
                Column("Bilty", "bilty_image", link=True),
                Column("Updated On", "actual1"),
            ],
            search_fields=["indent_number", "lift_number", "product_name", "vendor_name", "firm_name_match"],
            action=Action("Update", FullKittingForm, _full_kitting),
        ),
        _tally_screen(stages.AUDIT, 1, _tally_action(stages.AUDIT)),
        _tally_screen(stages.RECTIFY, 2, _tally_action(stages.RECTIFY)),
        _tally_screen(stages.REAUDIT, 3, _tally_action(stages.REAUDIT)),
        _tally_screen(stages.TALLY_ENTRY, 4, _tally_action(stages.TALLY_ENTRY)),
        _tally_screen(stages.AGAIN_AUDIT, 5, Action("Update", AgainAuditForm, _again_audit)),
        Screen(
            stage=stages.ISSUE_APPROVAL,
            title="Issue Data",
            columns=[
                Column("Issue No.", "issue_no"),
                Column("Issue To", "issue_to"),
                Column("Product", "product_name"),
                Column("Group Head", "group_head"),
                Column("Department", "department"),
                Column("Quantity", "quantity"),
                Column("UOM", "uom"),
                Column("Planned", "planned1"),
            ],
            history_columns=[
                Column("Issue No.", "issue_no"),
                Column("Issue To", "issue_to"),
                Column("Product", "product_name"),
                Column("Quantity", "quantity"),
                Column("Status", "status"),
                Column("Given Qty", "given_qty"),
                Column("Approved On", "actual1"),
            ],
            search_fields=["issue_no", "issue_to", "product_name", "department"],
            action=Action("Approve", IssueApprovalForm, _approve_issue),
            links=(("New issue", "issue_create", "store_issue"),),
        ),
    ]
}
