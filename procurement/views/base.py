"""Generic stage screens.

Every workflow screen is the same shape: the user's firm-scoped rows, split
into a pending and a history tab by the stage rules, shown as a table and
optionally acted upon one record at a time. :class:`Screen` describes one
such screen; :class:`StageListView` and :class:`StageActionView` render it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views import View
from django.views.generic import TemplateView

from ..access import has_permission
from ..services.clock import format_ist
from ..services.firm_scope import scope_for_user
from ..services.list_utils import (
    HISTORY,
    PENDING,
    apply_search,
    build_querystring,
    current_tab,
    export_as_csv,
    paginate,
    wants_csv,
)
from ..services.stages import Stage

logger = logging.getLogger(__name__)

Handler = Callable[[Any, Any, Any], Tuple[bool, str, Any]]


def display(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return format_ist(value)
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    return value


@dataclass(frozen=True)
class Column:
    header: str
    accessor: Union[str, Callable[[Any], Any]]
    link: bool = False

    def value(self, obj) -> Any:
        if callable(self.accessor):
            return display(self.accessor(obj))
        value = obj
        for part in self.accessor.split("."):
            value = getattr(value, part, None) if value is not None else None
        return display(value)


@dataclass(frozen=True)
class Action:
    label: str
    form_class: Union[type, Callable[[Any], type]]
    handler: Handler
    permission: Optional[str] = None

    def get_form_class(self, obj) -> type:
        if isinstance(self.form_class, type):
            return self.form_class
        return self.form_class(obj)


@dataclass(frozen=True)
class Screen:
    stage: Stage
    title: str
    columns: Sequence[Column]
    history_columns: Optional[Sequence[Column]] = None
    search_fields: Sequence[str] = ()
    action: Optional[Action] = None
    history_action: Optional[Action] = None
    select_related: Sequence[str] = field(default_factory=tuple)
    prefetch_related: Sequence[str] = field(default_factory=tuple)
    links: Sequence[Tuple[str, str, str]] = field(default_factory=tuple)
    description: str = ""

    def columns_for(self, tab: str) -> Sequence[Column]:
        if tab == HISTORY and self.history_columns is not None:
            return self.history_columns
        return self.columns

    def action_for(self, tab: str) -> Optional[Action]:
        return self.history_action if tab == HISTORY else self.action

    def queryset(self, user):
        qs = self.stage.model.objects.all()
        if self.select_related:
            qs = qs.select_related(*self.select_related)
        if self.prefetch_related:
            qs = qs.prefetch_related(*self.prefetch_related)
        return scope_for_user(qs, user)


def get_screen(key: str) -> Screen:
    from .screens import SCREENS

    try:
        return SCREENS[key]
    except KeyError:
        raise Http404("Unknown stage")


class StageListView(TemplateView):
    """Pending/history table for one stage.

    GET params:
        tab: ``pending`` (default) or ``history``.
        q: search term across the screen's search fields.
        format: ``csv`` downloads the current tab.
        page, page_size: pagination.
    Template: procurement/stage_list.html.
    """

    template_name = "procurement/stage_list.html"

    def dispatch(self, request, *args, **kwargs):
        self.screen = get_screen(kwargs["stage"])
        if not has_permission(request.user, self.screen.stage.view_permission):
            raise PermissionDenied
        return super().dispatch(request, *args, **kwargs)

    def get_rows(self, tab: str):
        qs = self.screen.stage.rows(self.screen.queryset(self.request.user), tab)
        return apply_search(self.request, qs, self.screen.search_fields)

    def get(self, request, *args, **kwargs):
        tab = current_tab(request)
        qs, q = self.get_rows(tab)
        columns = self.screen.columns_for(tab)
        if wants_csv(request):
            return export_as_csv(
                qs,
                [c.header for c in columns],
                lambda obj: [c.value(obj) for c in columns],
                f"{self.screen.stage.key}_{tab}.csv",
            )
        page_obj, per_page = paginate(request, qs)
        action = self.screen.action_for(tab)
        can_act = action is not None and has_permission(
            request.user, action.permission or self.screen.stage.action_permission
        )
        rows = []
        for obj in page_obj:
            url = None
            if can_act:
                url = reverse("stage_action", args=[self.screen.stage.key, obj.pk])
                if tab == HISTORY:
                    url += "?tab=history"
            cells = [(c.value(obj), c.link) for c in columns]
            rows.append({"obj": obj, "cells": cells, "action_url": url})
        return self.render_to_response(
            {
                "screen": self.screen,
                "tab": tab,
                "tabs": [(PENDING, "Pending"), (HISTORY, "History")],
                "q": q,
                "columns": columns,
                "rows": rows,
                "page_obj": page_obj,
                "per_page": per_page,
                "action": action,
                "links": [
                    (label, reverse(name))
                    for label, name, key in self.screen.links
                    if has_permission(request.user, key)
                ],
                "querystring": build_querystring(request, exclude=("page", "format")),
            }
        )


class StageActionView(View):
    """Form acting on a single record of a stage.

    POST runs the screen's handler; failures come back as error messages on
    the re-rendered form.
    """

    template_name = "procurement/stage_action.html"

    def dispatch(self, request, *args, **kwargs):
        self.screen = get_screen(kwargs["stage"])
        self.tab = current_tab(request)
        self.action = self.screen.action_for(self.tab)
        if self.action is None:
            raise Http404("No action for this stage")
        key = self.action.permission or self.screen.stage.action_permission
        if not has_permission(request.user, key):
            raise PermissionDenied
        self.object = get_object_or_404(self.screen.queryset(request.user), pk=kwargs["pk"])
        return super().dispatch(request, *args, **kwargs)

    def list_url(self) -> str:
        url = reverse("stage_list", args=[self.screen.stage.key])
        return url + "?tab=history" if self.tab == HISTORY else url

    def render_form(self, form):
        summary: List[Tuple[str, Any]] = [
            (c.header, c.value(self.object)) for c in self.screen.columns_for(self.tab)
        ]
        ctx: Dict[str, Any] = {
            "screen": self.screen,
            "action": self.action,
            "object": self.object,
            "summary": summary,
            "form": form,
            "list_url": self.list_url(),
        }
        return render(self.request, self.template_name, ctx)

    def get(self, request, *args, **kwargs):
        form_class = self.action.get_form_class(self.object)
        return self.render_form(form_class(obj=self.object))

    def post(self, request, *args, **kwargs):
        form_class = self.action.get_form_class(self.object)
        form = form_class(request.POST, request.FILES, obj=self.object)
        if not form.is_valid():
            messages.error(request, "Please fill all required fields")
            return self.render_form(form)
        success, msg, _ = self.action.handler(request, self.object, form)
        if not success:
            logger.warning("%s failed for %s: %s", self.screen.stage.key, self.object.pk, msg)
            messages.error(request, msg)
            return self.render_form(form)
        messages.success(request, msg)
        return redirect(self.list_url())


def datalists() -> Dict[str, List[str]]:
    """Master-data suggestions keyed by ``<datalist>`` id."""

    from ..services.master_service import master_options

    options = master_options()
    products: List[str] = []
    for items in options["group_heads"].values():
        products.extend(i for i in items if i not in products)
    return {
        "firm-options": options["firms"],
        "department-options": options["departments"],
        "group-head-options": list(options["group_heads"].keys()),
        "product-options": products,
        "uom-options": options["uoms"],
        "vendor-options": options["vendor_names"],
        "payment-term-options": options["payment_terms"],
    }
