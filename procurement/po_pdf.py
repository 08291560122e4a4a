"""Purchase order document rendering."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List

from fpdf import FPDF
from fpdf.enums import XPos, YPos

LINE_COLUMNS = [
    ("S/N", 10),
    ("Indent", 22),
    ("Product", 50),
    ("Qty", 16),
    ("Unit", 14),
    ("Rate", 20),
    ("GST %", 14),
    ("Disc %", 14),
    ("Amount", 30),
]


def _text(value: Any) -> str:
    # Core fonts only cover latin-1.
    return str(value if value is not None else "").encode("latin-1", "replace").decode("latin-1")


def _money(value: Any) -> str:
    return f"{Decimal(str(value or 0)):,.2f}"


def _block(pdf: FPDF, title: str, lines: Iterable[str], width: float) -> None:
    pdf.set_font("Helvetica", "B", 9)
    pdf.cell(width, 5, _text(title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", size=9)
    for line in lines:
        if line:
            pdf.multi_cell(width, 4.5, _text(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def generate_po_pdf(document: Dict[str, Any]) -> bytes:
    """Render a purchase order.

    ``document`` carries ``company`` (name, address, gstin, pan, phone,
    email, billing and destination address), ``supplier`` (name, address,
    gstin), ``po_number``, ``po_date``, quotation and enquiry references,
    ``lines`` (indent_number, product, quantity, unit, rate, gst, discount,
    amount), ``totals`` (subtotal, gst_total, grand_total), ``terms``,
    ``delivery_date``, ``payment_terms``, ``prepared_by`` and
    ``approved_by``.
    """

    company = document.get("company", {})
    supplier = document.get("supplier", {})
    totals = document.get("totals", {})

    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()
    width = pdf.w - pdf.l_margin - pdf.r_margin

    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 8, _text(company.get("company_name") or "Purchase Order"), align="C",
             new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", size=9)
    for line in (
        company.get("company_address"),
        f"Phone: {company['company_phone']}" if company.get("company_phone") else "",
        f"GSTIN: {company.get('company_gstin', '')}  PAN: {company.get('company_pan', '')}"
        if company.get("company_gstin") or company.get("company_pan")
        else "",
        company.get("company_email"),
    ):
        if line:
            pdf.cell(0, 5, _text(line), align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(2)
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(0, 8, "PURCHASE ORDER", align="C", border="TB",
             new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(2)

    pdf.set_font("Helvetica", size=9)
    refs = [
        ("PO No.", document.get("po_number")),
        ("PO Date", document.get("po_date")),
        ("Quotation No.", document.get("quotation_number")),
        ("Quotation Date", document.get("quotation_date")),
        ("Enquiry No.", document.get("enquiry_number")),
        ("Enquiry Date", document.get("enquiry_date")),
        ("Delivery Date", document.get("delivery_date")),
        ("Payment Terms", document.get("payment_terms")),
    ]
    for label, value in refs:
        if value:
            pdf.cell(35, 5, _text(label))
            pdf.cell(0, 5, _text(value), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(2)

    _block(
        pdf,
        "Supplier",
        [
            f"M/S {supplier.get('name', '')}",
            supplier.get("address", ""),
            f"GSTIN: {supplier['gstin']}" if supplier.get("gstin") else "",
        ],
        width,
    )
    pdf.ln(1)
    _block(pdf, "Bill To", [company.get("company_name", ""), company.get("billing_address", "")], width)
    pdf.ln(1)
    _block(pdf, "Ship To", [company.get("company_name", ""), company.get("destination_address", "")], width)
    pdf.ln(3)

    pdf.set_font("Helvetica", "B", 8)
    for label, col in LINE_COLUMNS:
        pdf.cell(col, 7, label, border=1, align="C")
    pdf.ln()
    pdf.set_font("Helvetica", size=8)
    lines: List[Dict[str, Any]] = document.get("lines", [])
    for pos, line in enumerate(lines, start=1):
        values = [
            pos,
            line.get("indent_number", ""),
            line.get("product", ""),
            line.get("quantity", ""),
            line.get("unit", ""),
            _money(line.get("rate")),
            line.get("gst", 0),
            line.get("discount", 0),
            _money(line.get("amount")),
        ]
        for (label, col), value in zip(LINE_COLUMNS, values):
            text = _text(value)
            if label == "Product" and len(text) > 32:
                text = text[:31] + "."
            align = "R" if label in {"Rate", "Amount", "Qty"} else "L"
            pdf.cell(col, 7, text, border=1, align=align)
        pdf.ln()

    label_width = sum(col for _, col in LINE_COLUMNS[:-1])
    amount_width = LINE_COLUMNS[-1][1]
    for label, key in (
        ("Subtotal", "subtotal"),
        ("GST", "gst_total"),
        ("Grand Total", "grand_total"),
    ):
        pdf.set_font("Helvetica", "B" if key == "grand_total" else "", 8)
        pdf.cell(label_width, 7, label, border=1, align="R")
        pdf.cell(amount_width, 7, _money(totals.get(key)), border=1, align="R",
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(3)

    terms = [t for t in document.get("terms", []) if t]
    if terms:
        _block(pdf, "Terms & Conditions", [f"{i}. {t}" for i, t in enumerate(terms, 1)], width)
        pdf.ln(3)

    pdf.set_font("Helvetica", size=9)
    half = width / 2
    pdf.cell(half, 6, _text(f"Prepared by: {document.get('prepared_by', '')}"))
    pdf.cell(half, 6, _text(f"Approved by: {document.get('approved_by', '')}"), align="R",
             new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    return bytes(pdf.output())
