from decimal import Decimal

import pytest

from procurement.models import StoreIssue
from procurement.services import issue_service
from procurement.services.stages import ISSUE_APPROVAL


def _line(**kwargs):
    line = {
        "product_name": "Gloves",
        "group_head": "Safety",
        "department": "Maintenance",
        "uom": "Pair",
        "quantity": Decimal("5"),
    }
    line.update(kwargs)
    return line


@pytest.mark.django_db
def test_create_issues_numbers_each_line(admin_user):
    StoreIssue.objects.create(issue_no="IS-0007", issue_to="x", product_name="y", quantity=1)
    success, msg, created = issue_service.create_issues(
        "Plant crew", [_line(), _line(product_name="Helmet")], firm="Acme", user=admin_user
    )
    assert success, msg
    assert [i.issue_no for i in created] == ["IS-0008", "IS-0009"]
    assert all(ISSUE_APPROVAL.is_pending(i) for i in created)
    assert created[0].firm_name_match == "Acme"


@pytest.mark.django_db
@pytest.mark.parametrize(
    "issue_to, lines, message",
    [
        ("", [_line()], "Issue to is required"),
        ("Crew", [], "Add at least one product"),
        ("Crew", [_line(uom="")], "Line 1: UOM is required"),
        ("Crew", [_line(), _line(quantity=0)], "Line 2: Quantity must be greater than 0"),
    ],
)
def test_create_issues_validation(issue_to, lines, message):
    success, msg, _ = issue_service.create_issues(issue_to, lines)
    assert not success
    assert msg == message
    assert not StoreIssue.objects.exists()


@pytest.mark.django_db
@pytest.mark.parametrize("firm", ["", "all", "  "])
def test_create_issues_needs_a_concrete_firm(firm):
    success, msg, _ = issue_service.create_issues("Crew", [_line()], firm=firm)
    assert not success
    assert msg == "Firm name is required"
    assert not StoreIssue.objects.exists()


@pytest.mark.django_db
def test_approve_issue():
    _, _, (issue,) = issue_service.create_issues("Crew", [_line()], firm="Acme")
    success, msg, _ = issue_service.approve_issue(issue, "Yes", None)
    assert msg == "Given quantity must be greater than 0"
    success, msg, _ = issue_service.approve_issue(issue, "Yes", "4")
    assert success, msg
    issue.refresh_from_db()
    assert issue.given_qty == Decimal("4")
    assert ISSUE_APPROVAL.is_history(issue)
    success, msg, _ = issue_service.approve_issue(issue, "No", None)
    assert not success


@pytest.mark.django_db
def test_declined_issue_needs_no_quantity():
    _, _, (issue,) = issue_service.create_issues("Crew", [_line()], firm="Acme")
    success, msg, _ = issue_service.approve_issue(issue, "No", None)
    assert success, msg
    issue.refresh_from_db()
    assert issue.status == "No"
    assert issue.given_qty is None
