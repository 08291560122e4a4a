from __future__ import annotations

from django import forms
from django.contrib.auth import get_user_model

from ..models import PERMISSION_KEYS
from .base import StyledFormMixin


def _label(key: str) -> str:
    return key.replace("_", " ").capitalize()


class UserAccessForm(StyledFormMixin, forms.Form):
    """Create or edit a login together with its firm and screen permissions."""

    username = forms.CharField(max_length=150)
    first_name = forms.CharField(max_length=150, required=False, label="Name")
    password = forms.CharField(
        widget=forms.PasswordInput(render_value=False),
        required=False,
        help_text="Leave blank to keep the current password.",
    )
    firm_name_match = forms.CharField(
        max_length=100, help_text='Firm this user works for, or "all".'
    )
    permissions = forms.MultipleChoiceField(
        choices=[(key, _label(key)) for key in PERMISSION_KEYS],
        widget=forms.CheckboxSelectMultiple,
        required=False,
    )
    is_active = forms.BooleanField(required=False, initial=True)

    def __init__(self, *args, user=None, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)
        if user is None:
            self.fields["password"].required = True
            self.fields["password"].help_text = ""

    def clean_username(self):
        username = self.cleaned_data["username"].strip()
        qs = get_user_model().objects.filter(username__iexact=username)
        if self.user is not None:
            qs = qs.exclude(pk=self.user.pk)
        if qs.exists():
            raise forms.ValidationError("Username already exists")
        return username
