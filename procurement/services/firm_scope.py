from __future__ import annotations

from django.db.models import QuerySet

from ..models import ALL_FIRMS


def is_unrestricted(firm: str | None) -> bool:
    return (firm or "").strip().lower() == ALL_FIRMS


def scope_to_firm(qs: QuerySet, firm: str | None, field: str = "firm_name_match") -> QuerySet:
    """Restrict ``qs`` to rows of ``firm``.

    ``"all"`` leaves the queryset untouched; an empty firm sees nothing.
    """

    firm = (firm or "").strip()
    if not firm:
        return qs.none()
    if is_unrestricted(firm):
        return qs
    return qs.filter(**{f"{field}__iexact": firm})


def user_firm(user) -> str:
    """Return the firm a user may see; superusers without a profile see all."""

    access = getattr(user, "access", None) if user is not None else None
    if access is not None and access.firm_name_match:
        return access.firm_name_match
    if getattr(user, "is_superuser", False):
        return ALL_FIRMS
    return ""


def firm_field_for(model) -> str:
    return "firm_name" if model._meta.db_table == "indent" else "firm_name_match"


def scope_for_user(qs: QuerySet, user) -> QuerySet:
    return scope_to_firm(qs, user_firm(user), firm_field_for(qs.model))
