from __future__ import annotations

from decimal import Decimal

from django import forms

from ..services.purchase_order_service import DELIVERY_TYPES, MAX_TERMS
from .base import YES_NO, ActionForm, StyledFormMixin, date_input, suggest


class PODecisionForm(ActionForm):
    po_required = forms.ChoiceField(choices=YES_NO, label="PO required?")


class PurchaseOrderForm(StyledFormMixin, forms.Form):
    party_name = forms.CharField(max_length=255, label="Supplier name")
    gstin = forms.CharField(max_length=20, required=False, label="Supplier GSTIN")
    vendor_address = forms.CharField(
        widget=forms.Textarea(attrs={"rows": 2}), required=False, label="Supplier address"
    )
    quotation_number = forms.CharField(max_length=100)
    quotation_date = forms.DateField(widget=date_input())
    enquiry_number = forms.CharField(max_length=100, required=False)
    enquiry_date = forms.DateField(widget=date_input(), required=False)
    description = forms.CharField(widget=forms.Textarea(attrs={"rows": 2}), required=False)
    delivery_date = forms.DateField(widget=date_input())
    delivery_days = forms.IntegerField(min_value=0, required=False)
    delivery_type = forms.ChoiceField(
        choices=[("", "---------"), ("for", "FOR"), ("exfactory", "Ex-factory")],
        required=False,
    )
    payment_terms = suggest(forms.CharField(max_length=255), "payment-term-options")
    company_email = forms.EmailField(required=False)
    terms = forms.CharField(
        widget=forms.Textarea(attrs={"rows": 5}),
        required=False,
        help_text=f"One term per line, at most {MAX_TERMS}.",
    )

    def clean_terms(self):
        terms = [
            line.strip()
            for line in (self.cleaned_data.get("terms") or "").splitlines()
            if line.strip()
        ]
        if len(terms) > MAX_TERMS:
            raise forms.ValidationError(f"At most {MAX_TERMS} terms are allowed")
        return terms

    def clean_delivery_type(self):
        value = self.cleaned_data.get("delivery_type") or ""
        if value and value not in DELIVERY_TYPES:
            raise forms.ValidationError("Invalid delivery type")
        return value


class POLineForm(StyledFormMixin, forms.Form):
    include = forms.BooleanField(required=False, initial=True)
    indent_number = forms.CharField(widget=forms.HiddenInput())
    product = forms.CharField(max_length=255)
    quantity = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    unit = forms.CharField(max_length=30, required=False)
    rate = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    gst = forms.DecimalField(
        max_digits=6, decimal_places=2, min_value=Decimal("0"), initial=Decimal("0"), label="GST %"
    )
    discount = forms.DecimalField(
        max_digits=6,
        decimal_places=2,
        min_value=Decimal("0"),
        max_value=Decimal("100"),
        initial=Decimal("0"),
        label="Discount %",
    )


POLineFormSet = forms.formset_factory(POLineForm, extra=0)
