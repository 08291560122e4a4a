import logging

from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect, render
from django.views import View

from ..access import PermissionRequiredMixin, has_permission, require_any_permission
from ..forms.indent_forms import IndentHeaderForm, IndentLineFormSet
from ..models import Indent
from ..services import indent_service
from ..services.events import history_for
from ..services.firm_scope import scope_for_user
from ..services.stages import current_stage, stages_for
from .base import datalists

logger = logging.getLogger(__name__)

DETAIL_PERMISSIONS = ["create_indent"] + [stage.view_permission for stage in stages_for(Indent)]


class IndentCreateView(PermissionRequiredMixin, View):
    """Raise one indent per product line.

    GET renders the header form and one empty product line.
    POST expects ``IndentHeaderForm`` data and the ``lines`` formset.
    Template: procurement/indent_form.html.
    """

    template_name = "procurement/indent_form.html"
    permission_key = "create_indent"

    def render_form(self, form, formset):
        ctx = {"form": form, "formset": formset, "datalists": datalists()}
        return render(self.request, self.template_name, ctx)

    def get(self, request):
        return self.render_form(IndentHeaderForm(), IndentLineFormSet(prefix="lines"))

    def post(self, request):
        form = IndentHeaderForm(request.POST)
        formset = IndentLineFormSet(request.POST, request.FILES, prefix="lines")
        if not (form.is_valid() and formset.is_valid()):
            messages.error(request, "Please fill all required fields")
            return self.render_form(form, formset)
        lines, attachments = [], []
        for line_form in formset:
            data = dict(line_form.cleaned_data)
            if not data:
                continue
            attachments.append(data.pop("attachment", None))
            lines.append(data)
        success, msg, _ = indent_service.create_indents(
            form.cleaned_data, lines, attachments, user=request.user
        )
        if not success:
            messages.error(request, msg)
            return self.render_form(form, formset)
        messages.success(request, msg)
        if has_permission(request.user, "indent_approval_view"):
            return redirect("stage_list", stage="approval")
        return redirect("indent_create")


@require_any_permission(*DETAIL_PERMISSIONS)
def indent_detail(request, indent_number: str):
    """Everything recorded against one indent, with its audit trail."""

    qs = scope_for_user(Indent.objects.all(), request.user)
    indent = get_object_or_404(qs, indent_number=indent_number)
    progress = [
        {
            "stage": stage,
            "pending": stage.is_pending(indent),
            "done": stage.is_history(indent),
        }
        for stage in stages_for(Indent)
    ]
    ctx = {
        "indent": indent,
        "current": current_stage(indent),
        "progress": progress,
        "quotes": indent.quotes.all(),
        "lifts": indent.lifts.all(),
        "events": history_for("indent", indent.indent_number),
    }
    return render(request, "procurement/indent_detail.html", ctx)
