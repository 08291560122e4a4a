"""Shared helpers for stage lists: search, tabs, pagination and CSV export."""

from __future__ import annotations

import csv
from typing import Any, Callable, Iterable, Sequence

from django.core.paginator import Paginator
from django.db.models import Q, QuerySet
from django.http import HttpRequest, HttpResponse

PENDING = "pending"
HISTORY = "history"


def current_tab(request: HttpRequest) -> str:
    tab = (request.GET.get("tab") or PENDING).strip().lower()
    return HISTORY if tab == HISTORY else PENDING


def wants_csv(request: HttpRequest) -> bool:
    return (request.GET.get("format") or "").lower() == "csv"


def apply_search(request: HttpRequest, qs: QuerySet, search_fields: Sequence[str]) -> tuple[QuerySet, str]:
    """Filter ``qs`` by the ``q`` parameter across ``search_fields``."""

    q = (request.GET.get("q") or "").strip()
    if q and search_fields:
        conditions = Q()
        for field in search_fields:
            conditions |= Q(**{f"{field}__icontains": q})
        qs = qs.filter(conditions)
    return qs, q


def paginate(
    request: HttpRequest,
    items,
    *,
    default_page_size: int = 25,
    page_param: str = "page",
    page_size_param: str = "page_size",
):
    try:
        per_page = int(request.GET.get(page_size_param, default_page_size))
    except (TypeError, ValueError):
        per_page = default_page_size
    paginator = Paginator(items, max(per_page, 1))
    return paginator.get_page(request.GET.get(page_param)), per_page


def export_as_csv(
    rows: Iterable[Any],
    headers: Sequence[str],
    row_builder: Callable[[Any], Sequence[Any]],
    filename: str,
) -> HttpResponse:
    """Return ``HttpResponse`` with ``rows`` exported as CSV."""

    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = f"attachment; filename={filename}"
    writer = csv.writer(response)
    writer.writerow(list(headers))
    for obj in rows:
        writer.writerow(list(row_builder(obj)))
    return response


def build_querystring(request: HttpRequest, exclude: Sequence[str] | None = None) -> str:
    params = request.GET.copy()
    for key in exclude or ("page",):
        params.pop(key, None)
    return params.urlencode()
