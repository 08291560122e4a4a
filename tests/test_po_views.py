from datetime import date, timedelta

import pytest
from django.urls import reverse

from procurement.models import MasterRecord, PurchaseOrderLine
from procurement.services import numbering


def _post_data(indent, **overrides):
    data = {
        "party_name": "Shree Traders",
        "quotation_number": "Q-9",
        "quotation_date": date.today().isoformat(),
        "delivery_date": (date.today() + timedelta(days=7)).isoformat(),
        "payment_terms": "30 days",
        "terms": "Delivery at site\nGoods once sold not returnable",
        "lines-TOTAL_FORMS": "1",
        "lines-INITIAL_FORMS": "1",
        "lines-MIN_NUM_FORMS": "0",
        "lines-MAX_NUM_FORMS": "1000",
        "lines-0-include": "on",
        "lines-0-indent_number": indent.indent_number,
        "lines-0-product": indent.product_name,
        "lines-0-quantity": "10",
        "lines-0-unit": "Bag",
        "lines-0-rate": "100",
        "lines-0-gst": "18",
        "lines-0-discount": "0",
    }
    data.update(overrides)
    return data


@pytest.fixture
def po_ready(approved_indent):
    MasterRecord.objects.create(
        vendor_name="Shree Traders", vendor_gstin="27AAA", vendor_address="Pune"
    )
    MasterRecord.objects.create(default_terms="Prices are firm")
    return approved_indent(po_required="Yes")


@pytest.mark.django_db
def test_po_create_lists_pending_vendors(client, po_ready, approved_indent):
    approved_indent(po_required="Yes", approved_vendor_name="Om Steel")
    approved_indent(po_required="No", approved_vendor_name="Not Needed")
    resp = client.get(reverse("po_create"))
    assert resp.status_code == 200
    assert resp.context["vendors"] == ["Om Steel", "Shree Traders"]


@pytest.mark.django_db
def test_po_create_form_prefills_vendor_and_lines(client, po_ready):
    resp = client.get(reverse("po_create"), {"vendor": "shree traders"})
    assert resp.status_code == 200
    form = resp.context["form"]
    assert form.initial["party_name"] == "Shree Traders"
    assert form.initial["gstin"] == "27AAA"
    assert form.initial["terms"] == "Prices are firm"
    initial = resp.context["formset"].initial
    assert [line["indent_number"] for line in initial] == [po_ready.indent_number]
    assert str(initial[0]["rate"]) == "100.00"


@pytest.mark.django_db
def test_po_create_unknown_vendor_redirects(client, po_ready):
    resp = client.get(reverse("po_create"), {"vendor": "Nobody"})
    assert resp.status_code == 302
    assert resp.url == reverse("po_create")


@pytest.mark.django_db
def test_po_create_post_and_history(client, po_ready):
    resp = client.post(reverse("po_create"), _post_data(po_ready))
    assert resp.status_code == 302
    assert resp.url == reverse("po_history")

    po_number = numbering.po_prefix() + "1"
    line = PurchaseOrderLine.objects.get(po_number=po_number)
    assert str(line.amount) == "1180.00"
    assert line.terms == ["Delivery at site", "Goods once sold not returnable"]
    po_ready.refresh_from_db()
    assert po_ready.po_number == po_number
    assert po_ready.planned5 is not None

    resp = client.get(reverse("po_history"))
    rows = list(resp.context["page_obj"])
    assert [(r["po_number"], r["status"]) for r in rows] == [(po_number, "Not Received")]

    resp = client.get(reverse("po_history"), {"format": "csv"})
    assert resp.content.decode().splitlines()[0] == "PO No.,Date,Vendor,Indents,Total,Status,PDF"


@pytest.mark.django_db
def test_po_create_invalid_formset_rerenders(client, po_ready):
    resp = client.post(reverse("po_create"), _post_data(po_ready, **{"lines-0-rate": "0"}))
    assert resp.status_code == 200
    assert not PurchaseOrderLine.objects.exists()


@pytest.mark.django_db
def test_po_create_service_error_is_shown(client, po_ready):
    resp = client.post(reverse("po_create"), _post_data(po_ready, party_name="Om Steel"))
    assert resp.status_code == 200
    messages = [str(m) for m in resp.context["messages"]]
    assert messages == [f"Indent {po_ready.indent_number} is approved for a different vendor"]


@pytest.mark.django_db
def test_po_document_and_revision(client, po_ready):
    client.post(reverse("po_create"), _post_data(po_ready))
    po_number = numbering.po_prefix() + "1"

    resp = client.get(reverse("po_document"), {"po": po_number})
    assert resp["Content-Type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")

    resp = client.get(reverse("po_revise"), {"po": po_number})
    assert resp.status_code == 200
    assert resp.context["revise_from"] == po_number
    assert resp.context["formset"].initial[0]["indent_number"] == po_ready.indent_number

    data = _post_data(po_ready, revise_from=po_number, **{"lines-0-rate": "90"})
    resp = client.post(reverse("po_revise"), data)
    assert resp.status_code == 302
    po_ready.refresh_from_db()
    assert po_ready.po_number == f"{po_number}/1"

    resp = client.get(reverse("po_history"))
    statuses = {r["po_number"]: r["status"] for r in resp.context["page_obj"]}
    assert statuses == {f"{po_number}/1": "Not Received", po_number: "Revised"}


@pytest.mark.django_db
def test_po_document_unknown_number_is_404(client):
    assert client.get(reverse("po_document"), {"po": "NOPE"}).status_code == 404
    assert client.get(reverse("po_revise")).status_code == 404


@pytest.mark.django_db
def test_po_history_requires_permission(client, user_factory):
    client.force_login(user_factory(permissions=["create_po"]))
    assert client.get(reverse("po_history")).status_code == 403


@pytest.mark.django_db
def test_po_create_refuses_other_firms_indent(client, user_factory, approved_indent):
    foreign = approved_indent(firm_name="Globex", po_required="Yes")
    client.force_login(user_factory(firm="Acme", permissions=["create_po"]))
    resp = client.post(reverse("po_create"), _post_data(foreign))
    assert resp.status_code == 200
    messages = [str(m) for m in resp.context["messages"]]
    assert messages == [f"Indent {foreign.indent_number} not found"]
    foreign.refresh_from_db()
    assert foreign.po_number == ""
    assert foreign.actual4 is None
    assert not PurchaseOrderLine.objects.exists()


@pytest.mark.django_db
def test_po_revise_refuses_other_firms_order(client, user_factory, approved_indent):
    foreign = approved_indent(firm_name="Globex", po_required="Yes")
    client.post(reverse("po_create"), _post_data(foreign))
    po_number = numbering.po_prefix() + "1"

    client.force_login(user_factory(firm="Acme", permissions=["create_po"]))
    assert client.get(reverse("po_revise"), {"po": po_number}).status_code == 404
    data = _post_data(foreign, revise_from=po_number, **{"lines-0-rate": "1"})
    assert client.post(reverse("po_revise"), data).status_code == 404
    foreign.refresh_from_db()
    assert foreign.po_number == po_number
    assert PurchaseOrderLine.objects.filter(po_number=f"{po_number}/1").count() == 0
