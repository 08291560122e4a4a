from decimal import Decimal

from procurement.po_pdf import generate_po_pdf


def _document(**overrides):
    document = {
        "po_number": "STORE-PO-25-26-4",
        "po_date": "02/06/2025",
        "company": {
            "company_name": "Acme Pvt Ltd",
            "company_address": "Nagpur",
            "company_gstin": "27ACME",
            "billing_address": "Nagpur",
            "destination_address": "Site 4",
        },
        "supplier": {"name": "Shree Traders", "address": "Pune", "gstin": "27AAA"},
        "lines": [
            {
                "indent_number": "SI-0001",
                "product": "Cement",
                "quantity": Decimal("10"),
                "unit": "Bag",
                "rate": Decimal("100"),
                "gst": Decimal("18"),
                "discount": Decimal("0"),
                "amount": Decimal("1180"),
            }
        ],
        "totals": {
            "subtotal": Decimal("1000"),
            "gst_total": Decimal("180"),
            "grand_total": Decimal("1180"),
        },
        "terms": ["Delivery at site"],
        "prepared_by": "admin",
        "approved_by": "Purchase Head",
    }
    document.update(overrides)
    return document


def test_generate_po_pdf_returns_pdf_bytes():
    data = generate_po_pdf(_document())
    assert isinstance(data, bytes)
    assert data.startswith(b"%PDF")


def test_generate_po_pdf_handles_long_and_non_latin_text():
    line = dict(_document()["lines"][0], product="Cement – OPC 53 grade, 50 kg bags with extra notes")
    data = generate_po_pdf(_document(lines=[line] * 40, terms=[]))
    assert data.startswith(b"%PDF")


def test_generate_po_pdf_with_empty_document():
    assert generate_po_pdf({}).startswith(b"%PDF")
