import pytest

from procurement.services import numbering


def test_next_sequence_number_follows_highest_existing():
    existing = ["SI-0001", "SI-0009", "SI-0003", None, "", "garbage"]
    assert numbering.next_indent_number(existing) == "SI-0010"


def test_next_sequence_number_starts_at_one():
    assert numbering.next_indent_number([]) == "SI-0001"
    assert numbering.next_issue_number(["SI-0005"]) == "IS-0001"


def test_offset_allocates_consecutive_numbers():
    existing = ["LF-0004"]
    assert [numbering.next_lift_number(existing, offset=i) for i in range(3)] == [
        "LF-0005",
        "LF-0006",
        "LF-0007",
    ]


def test_sequence_grows_past_four_digits():
    assert numbering.next_issue_number(["IS-9999"]) == "IS-10000"


def test_next_po_number_ignores_revisions_and_other_years():
    prefix = "STORE-PO-25-26-"
    existing = [
        "STORE-PO-25-26-1",
        "STORE-PO-25-26-7/2",
        "STORE-PO-24-25-40",
        "STORE-PO-25-26-abc",
        "STORE-PO-25-26-0",
    ]
    assert numbering.next_po_number(existing, prefix) == "STORE-PO-25-26-8"


def test_next_po_number_first_of_year():
    assert numbering.next_po_number([], "STORE-PO-25-26-") == "STORE-PO-25-26-1"


@pytest.mark.parametrize(
    "po, existing, expected",
    [
        ("STORE-PO-25-26-3", ["STORE-PO-25-26-3"], "STORE-PO-25-26-3/1"),
        ("STORE-PO-25-26-3/1", ["STORE-PO-25-26-3", "STORE-PO-25-26-3/1"], "STORE-PO-25-26-3/2"),
        ("STORE-PO-25-26-3", ["STORE-PO-25-26-3/4", "STORE-PO-25-26-30/9"], "STORE-PO-25-26-3/5"),
    ],
)
def test_next_po_revision(po, existing, expected):
    assert numbering.next_po_revision(po, existing) == expected


def test_po_prefix_uses_fiscal_year(settings):
    from datetime import date

    settings.PO_NUMBER_TEMPLATE = "PO/{fy}/"
    assert numbering.po_prefix(date(2025, 3, 31)) == "PO/24-25/"
    assert numbering.po_prefix(date(2025, 4, 1)) == "PO/25-26/"
