from __future__ import annotations

from decimal import Decimal

from django import forms

from ..services.firm_scope import is_unrestricted
from .base import YES_NO, ActionForm, StyledFormMixin, suggest


class IssueHeaderForm(StyledFormMixin, forms.Form):
    """Issue header; the firm is asked only of logins that cover all firms."""

    issue_to = forms.CharField(max_length=255)
    firm_name = suggest(forms.CharField(max_length=100), "firm-options")

    def __init__(self, *args, firm: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        if not is_unrestricted(firm):
            del self.fields["firm_name"]


class IssueLineForm(StyledFormMixin, forms.Form):
    product_name = suggest(forms.CharField(max_length=255), "product-options")
    group_head = suggest(forms.CharField(max_length=100), "group-head-options")
    department = suggest(forms.CharField(max_length=100), "department-options")
    uom = suggest(forms.CharField(max_length=30), "uom-options")
    quantity = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))


IssueLineFormSet = forms.formset_factory(
    IssueLineForm, extra=0, min_num=1, validate_min=True
)


class IssueApprovalForm(ActionForm):
    status = forms.ChoiceField(choices=YES_NO)
    given_qty = forms.DecimalField(max_digits=12, decimal_places=2, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.obj is not None and not self.is_bound:
            self.initial.setdefault("given_qty", self.obj.quantity)
