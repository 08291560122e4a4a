from __future__ import annotations

from decimal import Decimal

from django import forms

from ..models.indents import RATE_TYPE_CHOICES
from .base import YES_NO, ActionForm, suggest

QUOTE_FIELDS = [
    "vendor_name",
    "rate_type",
    "rate",
    "with_tax",
    "tax_value",
    "payment_term",
    "whatsapp_number",
    "email_id",
]


def _quote_fields(required_payment_term: bool = True):
    return {
        "vendor_name": suggest(forms.CharField(max_length=255), "vendor-options"),
        "rate_type": forms.ChoiceField(choices=RATE_TYPE_CHOICES),
        "rate": forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01")),
        "with_tax": forms.ChoiceField(choices=YES_NO, required=False, label="Rate includes tax"),
        "tax_value": forms.DecimalField(
            max_digits=6, decimal_places=2, required=False, label="GST %"
        ),
        "payment_term": suggest(
            forms.CharField(max_length=255, required=required_payment_term),
            "payment-term-options",
        ),
        "whatsapp_number": forms.CharField(max_length=20, required=False),
        "email_id": forms.EmailField(required=False),
    }


class RegularVendorForm(ActionForm):
    """Single quote from the regular vendor."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields.update(_quote_fields())
        self.apply_styling()

    def quote(self) -> dict:
        return {key: self.cleaned_data.get(key) for key in QUOTE_FIELDS}


class ThreePartyVendorForm(ActionForm):
    """Three competing quotes plus the comparison sheet."""

    SLOTS = (1, 2, 3)

    product_code = forms.CharField(max_length=100, required=False)
    comparison_sheet = forms.FileField()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for slot in self.SLOTS:
            for key, field in _quote_fields(required_payment_term=False).items():
                field.label = f"Vendor {slot} {field.label or key.replace('_', ' ')}"
                self.fields[f"{key}_{slot}"] = field
        self.apply_styling()

    def quotes(self) -> list[dict]:
        return [
            {key: self.cleaned_data.get(f"{key}_{slot}") for key in QUOTE_FIELDS}
            for slot in self.SLOTS
        ]


class RateApprovalForm(ActionForm):
    slot = forms.ChoiceField(label="Approved vendor")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        obj = self.obj
        quotes = obj.quotes.all() if obj is not None else []
        self.fields["slot"].choices = [
            (q.slot, f"{q.vendor_name} - {q.rate} ({q.rate_type}, {q.payment_term or '-'})")
            for q in quotes
        ]
        self.apply_styling()


class ReviseRateForm(ActionForm):
    rate = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        obj = self.obj
        if obj is not None and not self.is_bound:
            self.initial.setdefault("rate", obj.approved_rate)
