import logging
from django.contrib import messages
from django.http import Http404, HttpResponse
from django.shortcuts import redirect, render
from django.views import View

from ..access import PermissionRequiredMixin, require_permission
from ..forms.purchase_forms import POLineFormSet, PurchaseOrderForm
from ..models import Indent, PurchaseOrderLine
from ..po_pdf import generate_po_pdf
from ..services import purchase_order_service as po_service
from ..services.clock import IST
from ..services.firm_scope import scope_for_user
from ..services.list_utils import export_as_csv, paginate, wants_csv
from ..services.master_service import company_for_firm, find_vendor, master_options
from ..services.stages import PURCHASE_ORDER
from .base import datalists, display

logger = logging.getLogger(__name__)

HISTORY_HEADERS = ["PO No.", "Date", "Vendor", "Indents", "Total", "Status", "PDF"]


def _history_row(row):
    return [
        row["po_number"],
        display(row["timestamp"]),
        row["party_name"],
        ", ".join(row["indents"]),
        row["total_po_amount"],
        row["status"],
        row["pdf"],
    ]


class PurchaseOrderFormMixin:
    template_name = "procurement/po_form.html"
    revise_from = None

    def render_form(self, form, formset, **extra):
        ctx = {
            "form": form,
            "formset": formset,
            "revise_from": self.revise_from,
            "datalists": datalists(),
        }
        ctx.update(extra)
        return render(self.request, self.template_name, ctx)

    def submit(self, request):
        form = PurchaseOrderForm(request.POST)
        formset = POLineFormSet(request.POST, prefix="lines")
        if not (form.is_valid() and formset.is_valid()):
            messages.error(request, "Please fill all required fields")
            return self.render_form(form, formset)
        lines = [f.cleaned_data for f in formset if f.cleaned_data.get("include")]
        header = dict(form.cleaned_data)
        success, msg, po_number = po_service.create_purchase_order(
            header, lines, user=request.user, revise_from=self.revise_from
        )
        if not success:
            messages.error(request, msg)
            return self.render_form(form, formset)
        messages.success(request, msg)
        return redirect("po_history")


class PurchaseOrderCreateView(PermissionRequiredMixin, PurchaseOrderFormMixin, View):
    """Raise a purchase order for a vendor's approved indents.

    GET without ``vendor`` lists vendors that have indents waiting for a PO;
    with ``vendor`` it renders the header form and one line per indent.
    """

    permission_key = "create_po"

    def pending_indents(self, vendor: str):
        qs = scope_for_user(Indent.objects.all(), self.request.user)
        return PURCHASE_ORDER.pending(qs).filter(approved_vendor_name__iexact=vendor)

    def get(self, request):
        vendor = (request.GET.get("vendor") or "").strip()
        if not vendor:
            qs = scope_for_user(Indent.objects.all(), request.user)
            return render(
                request,
                "procurement/po_vendor_select.html",
                {"vendors": po_service.pending_vendors(qs)},
            )
        indents = list(self.pending_indents(vendor))
        if not indents:
            messages.error(request, f"No indents are waiting for a PO from {vendor}")
            return redirect("po_create")
        details = find_vendor(vendor) or {}
        company = company_for_firm(indents[0].firm_name)
        form = PurchaseOrderForm(
            initial={
                "party_name": indents[0].approved_vendor_name,
                "gstin": details.get("gstin", ""),
                "vendor_address": details.get("address", ""),
                "payment_terms": indents[0].approved_payment_term,
                "company_email": company.get("company_email", ""),
                "terms": "\n".join(master_options()["default_terms"]),
            }
        )
        formset = POLineFormSet(prefix="lines", initial=po_service.draft_lines(indents))
        return self.render_form(form, formset)

    def post(self, request):
        return self.submit(request)


class PurchaseOrderReviseView(PermissionRequiredMixin, PurchaseOrderFormMixin, View):
    """Issue a new revision of an existing purchase order (``?po=<number>``)."""

    permission_key = "create_po"

    def dispatch(self, request, *args, **kwargs):
        self.revise_from = (request.GET.get("po") or request.POST.get("revise_from") or "").strip()
        if not self.revise_from:
            raise Http404("PO number required")
        return super().dispatch(request, *args, **kwargs)

    def get_lines(self):
        qs = scope_for_user(PurchaseOrderLine.objects.all(), self.request.user)
        lines = list(qs.filter(po_number=self.revise_from).order_by("line_id"))
        if not lines:
            raise Http404("Purchase order not found")
        return lines

    def get(self, request):
        lines = self.get_lines()
        first = lines[0]
        form = PurchaseOrderForm(
            initial={
                "party_name": first.party_name,
                "gstin": (find_vendor(first.party_name) or {}).get("gstin", ""),
                "vendor_address": (find_vendor(first.party_name) or {}).get("address", ""),
                "quotation_number": first.quotation_number,
                "quotation_date": first.quotation_date,
                "enquiry_number": first.enquiry_number,
                "enquiry_date": first.enquiry_date,
                "description": first.description,
                "delivery_date": first.delivery_date,
                "delivery_days": first.delivery_days,
                "delivery_type": first.delivery_type,
                "payment_terms": first.payment_terms,
                "company_email": first.company_email,
                "terms": "\n".join(first.terms or []),
            }
        )
        formset = POLineFormSet(
            prefix="lines",
            initial=[
                {
                    "include": True,
                    "indent_number": line.internal_code,
                    "product": line.product,
                    "quantity": line.quantity,
                    "unit": line.unit,
                    "rate": line.rate,
                    "gst": line.gst,
                    "discount": line.discount,
                }
                for line in lines
            ],
        )
        return self.render_form(form, formset)

    def post(self, request):
        self.get_lines()
        return self.submit(request)


@require_permission("po_history")
def po_history(request):
    """Distinct purchase orders with vendor, total, PDF link and status."""

    qs = scope_for_user(PurchaseOrderLine.objects.all(), request.user)
    q = (request.GET.get("q") or "").strip()
    if q:
        qs = qs.filter(po_number__icontains=q) | qs.filter(party_name__icontains=q)
    rows = po_service.po_history(qs)
    if wants_csv(request):
        return export_as_csv(rows, HISTORY_HEADERS, _history_row, "po_history.csv")
    page_obj, per_page = paginate(request, rows)
    return render(
        request,
        "procurement/po_history.html",
        {"page_obj": page_obj, "per_page": per_page, "q": q, "headers": HISTORY_HEADERS},
    )


@require_permission("po_history")
def po_document(request):
    """Re-render the PDF of a stored purchase order (``?po=<number>``)."""

    po_number = (request.GET.get("po") or "").strip()
    qs = scope_for_user(PurchaseOrderLine.objects.all(), request.user)
    lines = list(qs.filter(po_number=po_number).order_by("line_id"))
    if not lines:
        raise Http404("Purchase order not found")
    first = lines[0]
    priced = [
        {
            "indent_number": line.internal_code,
            "product": line.product,
            "quantity": line.quantity,
            "unit": line.unit,
            "rate": line.rate,
            "gst": line.gst,
            "discount": line.discount,
            "amount": line.amount,
        }
        for line in lines
    ]
    header = {
        "party_name": first.party_name,
        "po_date": first.timestamp.astimezone(IST).date(),
        "quotation_number": first.quotation_number,
        "quotation_date": first.quotation_date,
        "enquiry_number": first.enquiry_number,
        "enquiry_date": first.enquiry_date,
        "delivery_date": first.delivery_date,
        "payment_terms": first.payment_terms,
        "terms": first.terms,
    }
    document = po_service.build_document(
        po_number,
        header,
        priced,
        po_service.po_totals(priced),
        first.firm_name_match,
        first.prepared_by,
    )
    response = HttpResponse(generate_po_pdf(document), content_type="application/pdf")
    filename = po_number.replace("/", "-")
    response["Content-Disposition"] = f"attachment; filename=PO-{filename}.pdf"
    return response
