from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from ..models import Indent
from .firm_scope import scope_to_firm
from .stages import APPROVAL, LIFT, PURCHASE_ORDER, VENDOR_UPDATE

TOP_N = 5


def _top(frame: pd.DataFrame, column: str, limit: int = TOP_N) -> List[Dict[str, Any]]:
    """Rank ``column`` values by total approved quantity."""

    if frame.empty:
        return []
    data = frame[frame[column].fillna("").str.strip() != ""]
    if data.empty:
        return []
    grouped = (
        data.groupby(column)
        .agg(quantity=("quantity", "sum"), indents=("indent_number", "count"))
        .sort_values(["quantity", "indents"], ascending=False)
        .head(limit)
        .reset_index()
    )
    return [
        {"name": row[column], "quantity": float(row["quantity"]), "indents": int(row["indents"])}
        for _, row in grouped.iterrows()
    ]


def _as_float(value):
    return float(value) if value is not None else None


def indent_frame(qs) -> pd.DataFrame:
    rows = list(
        qs.values(
            "indent_number",
            "product_name",
            "approved_vendor_name",
            "approved_quantity",
            "quantity",
        )
    )
    frame = pd.DataFrame(
        rows,
        columns=[
            "indent_number",
            "product_name",
            "approved_vendor_name",
            "approved_quantity",
            "quantity",
        ],
    )
    if frame.empty:
        return frame
    approved = frame["approved_quantity"].map(_as_float)
    requested = frame["quantity"].map(_as_float)
    frame["quantity"] = approved.fillna(requested).fillna(0.0).astype(float)
    return frame


def dashboard_summary(firm: str) -> Dict[str, Any]:
    """Headline counts and top products/vendors for ``firm``."""

    indents = scope_to_firm(Indent.objects.all(), firm, "firm_name")
    frame = indent_frame(indents)
    return {
        "total_indents": indents.count(),
        "pending_approvals": APPROVAL.pending(indents).count(),
        "pending_vendor_updates": VENDOR_UPDATE.pending(indents).count(),
        "pending_pos": PURCHASE_ORDER.pending(indents).count(),
        "pending_lifts": LIFT.pending(indents).count(),
        "completed_lifts": LIFT.history(indents).count(),
        "top_products": _top(frame, "product_name"),
        "top_vendors": _top(frame, "approved_vendor_name"),
    }
