from decimal import Decimal

import pytest

from procurement.services.dashboard_service import dashboard_summary


@pytest.fixture
def indents(indent_factory, approved_indent):
    indent_factory(product_name="Cement")
    approved_indent(product_name="Sand", approved_quantity=Decimal("25"))
    approved_indent(product_name="Cement", approved_quantity=Decimal("5"), firm_name="Globex")
    approved_indent(
        product_name="Bricks",
        approved_quantity=Decimal("2"),
        approved_vendor_name="Om Steel",
        po_required="Yes",
    )


@pytest.mark.django_db
def test_dashboard_summary_counts_all_firms(indents):
    summary = dashboard_summary("all")
    assert summary["total_indents"] == 4
    assert summary["pending_approvals"] == 1
    assert summary["pending_vendor_updates"] == 0
    assert summary["pending_pos"] == 1
    assert summary["pending_lifts"] == 0
    assert summary["completed_lifts"] == 0
    assert [(r["name"], r["quantity"]) for r in summary["top_products"]] == [
        ("Sand", 25.0),
        ("Cement", 15.0),
        ("Bricks", 2.0),
    ]
    assert summary["top_vendors"][0] == {"name": "Shree Traders", "quantity": 30.0, "indents": 2}
    assert summary["top_vendors"][1]["name"] == "Om Steel"


@pytest.mark.django_db
def test_dashboard_summary_is_scoped_to_firm(indents):
    summary = dashboard_summary("Acme")
    assert summary["total_indents"] == 3
    assert [r["name"] for r in summary["top_products"]] == ["Sand", "Cement", "Bricks"]
    assert summary["top_products"][1]["quantity"] == 10.0


@pytest.mark.django_db
def test_dashboard_summary_empty_firm_sees_nothing(indents):
    summary = dashboard_summary("")
    assert summary["total_indents"] == 0
    assert summary["top_products"] == []
    assert summary["top_vendors"] == []
