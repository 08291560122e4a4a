from decimal import Decimal

import pytest

from procurement.models import PurchaseOrderLine, StageEvent
from procurement.services import numbering, storage
from procurement.services import purchase_order_service as po_service
from procurement.services.stages import LIFT, PO_DECISION, PURCHASE_ORDER


def test_line_amount_applies_discount_then_gst():
    assert po_service.line_amount(10, 100, 0, 18) == Decimal("1180.00")
    assert po_service.line_amount(3, "33.33", 10, 5) == Decimal("94.49")
    assert po_service.line_amount(1, 100) == Decimal("100.00")


def test_po_totals():
    totals = po_service.po_totals(
        [
            {"quantity": 10, "rate": 100, "discount": 0, "gst": 18},
            {"quantity": 2, "rate": 50, "discount": 10, "gst": 12},
        ]
    )
    assert totals == {
        "subtotal": Decimal("1090.00"),
        "gst_total": Decimal("190.80"),
        "grand_total": Decimal("1280.80"),
    }


@pytest.mark.django_db
def test_split_tax(approved_indent):
    indent = approved_indent()
    assert po_service.split_tax(indent) == (Decimal("100.00"), Decimal("18"))
    indent.approved_with_tax = "Yes"
    indent.approved_tax_value = Decimal("0")
    assert po_service.split_tax(indent) == (Decimal("118.00"), Decimal("0"))


@pytest.mark.django_db
def test_decide_po_required_no_sends_to_lift(approved_indent):
    indent = approved_indent()
    success, msg, _ = po_service.decide_po_required(indent, "No")
    assert success, msg
    indent.refresh_from_db()
    assert indent.po_required == "No"
    assert indent.actual4 is not None
    assert indent.planned5 == indent.actual4
    assert indent.pending_lift_qty == Decimal("10")
    assert PO_DECISION.is_history(indent)
    assert LIFT.is_pending(indent)


@pytest.mark.django_db
def test_decide_po_required_yes_waits_for_po(approved_indent):
    indent = approved_indent()
    success, _, _ = po_service.decide_po_required(indent, "Yes")
    assert success
    indent.refresh_from_db()
    assert PURCHASE_ORDER.is_pending(indent)
    assert indent.planned5 is None

    success, msg, _ = po_service.decide_po_required(indent, "No")
    assert not success
    assert "not awaiting a PO decision" in msg


@pytest.mark.django_db
def test_create_purchase_order(approved_indent, po_header, admin_user):
    first = approved_indent(po_required="Yes")
    second = approved_indent(po_required="Yes", product_name="Sand", approved_quantity=Decimal("4"))
    lines = po_service.draft_lines([first, second])
    assert lines[0]["rate"] == Decimal("100.00")
    assert lines[0]["gst"] == Decimal("18")

    success, msg, po_number = po_service.create_purchase_order(po_header, lines, user=admin_user)
    assert success, msg
    assert po_number == numbering.po_prefix() + "1"

    rows = list(PurchaseOrderLine.objects.filter(po_number=po_number).order_by("line_id"))
    assert [r.internal_code for r in rows] == [first.indent_number, second.indent_number]
    assert rows[0].amount == Decimal("1180.00")
    assert rows[1].amount == Decimal("472.00")
    assert all(r.total_po_amount == Decimal("1652.00") for r in rows)
    assert rows[0].terms == po_header["terms"]
    assert rows[0].prepared_by == "admin"
    assert "po_image/PO-" in rows[0].pdf

    first.refresh_from_db()
    assert first.po_number == po_number
    assert first.po_copy == rows[0].pdf
    assert first.pending_lift_qty == Decimal("10")
    assert first.planned5 == first.actual4
    assert LIFT.is_pending(first)
    assert StageEvent.objects.filter(stage="purchase_order", entity_id=po_number).exists()


@pytest.mark.django_db
def test_po_numbers_increment(approved_indent, po_header):
    first = approved_indent(po_required="Yes")
    second = approved_indent(po_required="Yes")
    _, _, one = po_service.create_purchase_order(po_header, po_service.draft_lines([first]))
    _, _, two = po_service.create_purchase_order(po_header, po_service.draft_lines([second]))
    assert two == numbering.po_prefix() + "2"
    assert one != two


@pytest.mark.django_db
def test_create_po_rejects_other_vendor_and_bad_lines(approved_indent, po_header):
    indent = approved_indent(po_required="Yes", approved_vendor_name="Other Co")
    lines = po_service.draft_lines([indent])
    success, msg, _ = po_service.create_purchase_order(po_header, lines)
    assert not success
    assert "different vendor" in msg

    lines[0]["rate"] = 0
    success, msg, _ = po_service.create_purchase_order(dict(po_header, party_name="Other Co"), lines)
    assert not success
    assert msg == "Line 1: Rate must be greater than 0"

    success, msg, _ = po_service.create_purchase_order(dict(po_header, terms=["t"] * 11), lines)
    assert not success
    assert "At most 10 terms" in msg
    assert not PurchaseOrderLine.objects.exists()


@pytest.mark.django_db
def test_create_po_requires_pending_indent(approved_indent, po_header):
    indent = approved_indent()
    success, msg, _ = po_service.create_purchase_order(po_header, po_service.draft_lines([indent]))
    assert not success
    assert "not waiting for a purchase order" in msg


@pytest.mark.django_db
def test_upload_failure_rolls_back(approved_indent, po_header, monkeypatch):
    def broken(*args, **kwargs):
        raise storage.StorageError("Could not upload")

    monkeypatch.setattr(storage, "upload_file", broken)
    indent = approved_indent(po_required="Yes")
    success, msg, _ = po_service.create_purchase_order(po_header, po_service.draft_lines([indent]))
    assert not success
    assert msg == "Could not upload"
    indent.refresh_from_db()
    assert indent.po_number == ""
    assert not PurchaseOrderLine.objects.exists()


@pytest.mark.django_db
def test_revise_purchase_order(approved_indent, po_header, lift_factory):
    indent = approved_indent(po_required="Yes")
    _, _, po_number = po_service.create_purchase_order(po_header, po_service.draft_lines([indent]))
    indent.refresh_from_db()
    lifted_at = indent.actual4

    lines = [dict(line, rate=Decimal("95")) for line in po_service.draft_lines([indent])]
    success, msg, revised = po_service.create_purchase_order(
        po_header, lines, revise_from=po_number
    )
    assert success, msg
    assert revised == f"{po_number}/1"
    indent.refresh_from_db()
    assert indent.po_number == revised
    assert indent.actual4 == lifted_at

    history = {row["po_number"]: row for row in po_service.po_history()}
    assert history[po_number]["status"] == po_service.PO_REVISED
    assert history[revised]["status"] == po_service.PO_NOT_RECEIVED
    assert history[revised]["indents"] == [indent.indent_number]
    assert po_service.revisable_po_numbers() == [revised]

    lift_factory(indent=indent)
    assert po_service.po_status(revised) == po_service.PO_RECEIVED


@pytest.mark.django_db
def test_revise_rejects_foreign_indent(approved_indent, po_header):
    indent = approved_indent(po_required="Yes")
    _, _, po_number = po_service.create_purchase_order(po_header, po_service.draft_lines([indent]))
    other = approved_indent(po_required="Yes")
    success, msg, _ = po_service.create_purchase_order(
        po_header, po_service.draft_lines([other]), revise_from=po_number
    )
    assert not success
    assert f"is not part of PO {po_number}" in msg


@pytest.mark.django_db
def test_create_po_only_sees_the_users_firm(approved_indent, po_header, user_factory):
    own = approved_indent(po_required="Yes")
    foreign = approved_indent(po_required="Yes", firm_name="Globex")
    clerk = user_factory(firm="Acme", permissions=["create_po"])

    success, msg, _ = po_service.create_purchase_order(
        po_header, po_service.draft_lines([own, foreign]), user=clerk
    )
    assert not success
    assert msg == f"Indent {foreign.indent_number} not found"
    assert not PurchaseOrderLine.objects.exists()

    success, msg, po_number = po_service.create_purchase_order(
        po_header, po_service.draft_lines([own]), user=clerk
    )
    assert success, msg
    event = StageEvent.objects.get(stage="purchase_order", entity_id=po_number)
    assert event.firm_name_match == "Acme"


@pytest.mark.django_db
def test_pending_vendors(approved_indent):
    approved_indent(po_required="Yes", approved_vendor_name="Zeta")
    approved_indent(po_required="Yes", approved_vendor_name="alpha")
    approved_indent(po_required="Yes", approved_vendor_name="Alpha")
    approved_indent()
    assert po_service.pending_vendors() == ["alpha", "Zeta"]
