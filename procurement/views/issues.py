from django.contrib import messages
from django.shortcuts import redirect, render
from django.views import View

from ..access import PermissionRequiredMixin
from ..forms.issue_forms import IssueHeaderForm, IssueLineFormSet
from ..services import issue_service
from ..services.firm_scope import is_unrestricted, user_firm
from .base import datalists


class IssueCreateView(PermissionRequiredMixin, View):
    """Issue material out of the store; one issue number per line."""

    template_name = "procurement/issue_form.html"
    permission_key = "store_issue"

    def render_form(self, form, formset):
        ctx = {"form": form, "formset": formset, "datalists": datalists()}
        return render(self.request, self.template_name, ctx)

    def get(self, request):
        form = IssueHeaderForm(firm=user_firm(request.user))
        return self.render_form(form, IssueLineFormSet(prefix="lines"))

    def post(self, request):
        firm = user_firm(request.user)
        form = IssueHeaderForm(request.POST, firm=firm)
        formset = IssueLineFormSet(request.POST, prefix="lines")
        if not (form.is_valid() and formset.is_valid()):
            messages.error(request, "Please fill all required fields")
            return self.render_form(form, formset)
        lines = [f.cleaned_data for f in formset if f.cleaned_data]
        if is_unrestricted(firm):
            firm = form.cleaned_data["firm_name"]
        success, msg, _ = issue_service.create_issues(
            form.cleaned_data["issue_to"], lines, firm=firm, user=request.user
        )
        if not success:
            messages.error(request, msg)
            return self.render_form(form, formset)
        messages.success(request, msg)
        return redirect("issue_create")
