from django import forms

from ..models.tally import DONE_CHOICES, OKEY_CHOICES
from .base import ActionForm


class TallyStageForm(ActionForm):
    status = forms.ChoiceField(choices=DONE_CHOICES)
    remarks = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}))


class AgainAuditForm(ActionForm):
    status = forms.ChoiceField(choices=OKEY_CHOICES)
