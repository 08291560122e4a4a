from __future__ import annotations

from django import forms

from ..models.indents import (
    INDENT_STATUS_CHOICES,
    VENDOR_REGULAR,
    VENDOR_REJECT,
    VENDOR_THREE_PARTY,
)
from .base import ActionForm, StyledFormMixin, suggest


class IndentHeaderForm(StyledFormMixin, forms.Form):
    indenter_name = forms.CharField(max_length=255)
    indent_status = forms.ChoiceField(choices=INDENT_STATUS_CHOICES)


class IndentLineForm(StyledFormMixin, forms.Form):
    firm_name = suggest(forms.CharField(max_length=100), "firm-options")
    department = suggest(forms.CharField(max_length=100), "department-options")
    group_head = suggest(forms.CharField(max_length=100), "group-head-options")
    product_name = suggest(forms.CharField(max_length=255), "product-options")
    quantity = forms.DecimalField(max_digits=12, decimal_places=2)
    uom = suggest(forms.CharField(max_length=30), "uom-options")
    area_of_use = forms.CharField(max_length=255)
    no_day = forms.IntegerField(label="Number of days")
    specifications = forms.CharField(widget=forms.Textarea(attrs={"rows": 2}), required=False)
    attachment = forms.FileField(required=False)

    def clean_quantity(self):
        qty = self.cleaned_data.get("quantity")
        if qty is None or qty <= 0:
            raise forms.ValidationError("Must be greater than 0")
        return qty

    def clean_no_day(self):
        days = self.cleaned_data.get("no_day")
        if days is None or days <= 0:
            raise forms.ValidationError("Must be greater than 0")
        return days


IndentLineFormSet = forms.formset_factory(
    IndentLineForm, extra=0, min_num=1, validate_min=True
)


class ApprovalForm(ActionForm):
    vendor_type = forms.ChoiceField(
        choices=[
            (VENDOR_REGULAR, "Regular"),
            (VENDOR_THREE_PARTY, "Three Party"),
            (VENDOR_REJECT, "Reject"),
        ]
    )
    approved_quantity = forms.DecimalField(
        max_digits=12, decimal_places=2, required=False
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        obj = self.obj
        if obj is not None and not self.is_bound:
            self.initial.setdefault("approved_quantity", obj.approved_quantity or obj.quantity)
            if obj.vendor_type:
                self.initial.setdefault("vendor_type", obj.vendor_type)

    def clean(self):
        cleaned = super().clean()
        qty = cleaned.get("approved_quantity")
        if cleaned.get("vendor_type") != VENDOR_REJECT and (qty is None or qty <= 0):
            self.add_error("approved_quantity", "Approved quantity must be greater than 0")
        return cleaned
