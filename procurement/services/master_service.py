"""Reference data drawn from the ``master`` table.

The table is denormalised: vendor, item, department and company columns
share rows. :func:`master_options` folds it into the option lists that
forms and the PO document need, cached for ``MASTER_CACHE_TTL`` seconds.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings

from ..models import MasterRecord
from .supabase_cache import get_cached

logger = logging.getLogger(__name__)

COMPANY_FIELDS = [
    "company_name",
    "company_address",
    "company_gstin",
    "company_phone",
    "company_pan",
    "company_email",
    "billing_address",
    "destination_address",
]


def _unique(rows: Iterable[Dict[str, Any]], key: str) -> List[str]:
    seen: List[str] = []
    for row in rows:
        value = str(row.get(key) or "").strip()
        if value and value not in seen:
            seen.append(value)
    return seen


def _first(rows: Iterable[Dict[str, Any]], key: str) -> str:
    for row in rows:
        value = str(row.get(key) or "").strip()
        if value:
            return value
    return ""


def build_options(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Fold raw master rows into option lists and lookup maps."""

    group_heads: Dict[str, List[str]] = {}
    firm_companies: Dict[str, Dict[str, str]] = {}
    vendors: Dict[str, Dict[str, str]] = {}
    for row in rows:
        head = str(row.get("group_head") or "").strip()
        item = str(row.get("item_name") or "").strip()
        if head and item:
            items = group_heads.setdefault(head, [])
            if item not in items:
                items.append(item)

        firm = str(row.get("firm_name") or "").strip()
        if firm and firm not in firm_companies:
            firm_companies[firm] = {
                "company_name": row.get("company_name") or "",
                "company_address": row.get("company_address") or "",
                "destination_address": row.get("destination_address") or "",
            }

        vendor = str(row.get("vendor_name") or "").strip()
        if vendor and vendor.lower() not in vendors:
            vendors[vendor.lower()] = {
                "vendor_name": vendor,
                "address": row.get("vendor_address") or "",
                "gstin": row.get("vendor_gstin") or "",
                "email": row.get("vendor_email") or "",
            }

    options: Dict[str, Any] = {
        "vendor_names": _unique(rows, "vendor_name"),
        "payment_terms": _unique(rows, "payment_term"),
        "departments": _unique(rows, "department"),
        "uoms": _unique(rows, "uom"),
        "firms": _unique(rows, "firm_name"),
        "default_terms": _unique(rows, "default_terms"),
        "group_heads": group_heads,
        "firm_companies": firm_companies,
        "vendors": vendors,
    }
    for field in COMPANY_FIELDS:
        options[field] = _first(rows, field)
    return options


def _load_options() -> Dict[str, Any]:
    rows = list(MasterRecord.objects.order_by("id").values())
    logger.debug("Loaded %d master rows", len(rows))
    return build_options(rows)


master_options = get_cached(
    _load_options, lambda: getattr(settings, "MASTER_CACHE_TTL", 300)
)


def find_vendor(name: str, options: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, str]]:
    """Look up a vendor's address, GSTIN and email by case-insensitive name."""

    options = options if options is not None else master_options()
    return options["vendors"].get((name or "").strip().lower())


def company_for_firm(firm: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
    """Return the company block printed on documents for ``firm``.

    Firm-specific name and address win over the first company details found
    anywhere in the table.
    """

    options = options if options is not None else master_options()
    firm_key = next(
        (k for k in options["firm_companies"] if k.lower() == (firm or "").strip().lower()),
        None,
    )
    specific = options["firm_companies"].get(firm_key, {}) if firm_key else {}
    block = {field: options.get(field, "") for field in COMPANY_FIELDS}
    if specific.get("company_name"):
        block["company_name"] = specific["company_name"]
    if specific.get("company_address"):
        block["company_address"] = specific["company_address"]
        block["billing_address"] = specific["company_address"]
    if specific.get("destination_address"):
        block["destination_address"] = specific["destination_address"]
    return block


def choices(values: Iterable[str], blank: str | None = "---------") -> List[tuple]:
    result = [(v, v) for v in values]
    if blank is not None:
        result.insert(0, ("", blank))
    return result


__all__ = [
    "build_options",
    "master_options",
    "find_vendor",
    "company_for_firm",
    "choices",
]
