from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import permissions, viewsets

from ..access import has_permission
from ..models import (
    FullKitting,
    Indent,
    Lift,
    PurchaseOrderLine,
    StageEvent,
    StoreIssue,
    TallyEntry,
)
from ..serializers import (
    FullKittingSerializer,
    IndentSerializer,
    LiftSerializer,
    PurchaseOrderLineSerializer,
    StageEventSerializer,
    StoreIssueSerializer,
    TallyEntrySerializer,
)
from ..services.firm_scope import scope_for_user
from ..services.list_utils import HISTORY, PENDING
from ..services.stages import stages_for


class StageFilteredViewSet(viewsets.ReadOnlyModelViewSet):
    """Read-only, firm-scoped records with optional stage filtering.

    Query params:
        stage: key of a stage defined on this model (e.g. ``approval``).
        view: ``pending`` (default) or ``history``.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = scope_for_user(super().get_queryset(), self.request.user)
        key = self.request.query_params.get("stage")
        if not key:
            return qs
        stages = {s.key: s for s in stages_for(qs.model)}
        stage = stages.get(key)
        if stage is None:
            raise ValidationError(f"Unknown stage '{key}' for {qs.model.__name__}")
        if not has_permission(self.request.user, stage.view_permission):
            raise PermissionDenied
        view = (self.request.query_params.get("view") or PENDING).lower()
        if view not in (PENDING, HISTORY):
            raise ValidationError("view must be pending or history")
        return stage.rows(qs, view)


class IndentViewSet(StageFilteredViewSet):
    queryset = Indent.objects.all().prefetch_related("quotes")
    serializer_class = IndentSerializer
    lookup_field = "indent_number"


class PurchaseOrderLineViewSet(StageFilteredViewSet):
    queryset = PurchaseOrderLine.objects.all()
    serializer_class = PurchaseOrderLineSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        po_number = self.request.query_params.get("po_number")
        if po_number:
            qs = qs.filter(po_number=po_number)
        return qs


class LiftViewSet(StageFilteredViewSet):
    queryset = Lift.objects.all()
    serializer_class = LiftSerializer
    lookup_field = "lift_number"


class TallyEntryViewSet(StageFilteredViewSet):
    queryset = TallyEntry.objects.all()
    serializer_class = TallyEntrySerializer


class StoreIssueViewSet(StageFilteredViewSet):
    queryset = StoreIssue.objects.all()
    serializer_class = StoreIssueSerializer
    lookup_field = "issue_no"


class FullKittingViewSet(StageFilteredViewSet):
    queryset = FullKitting.objects.all()
    serializer_class = FullKittingSerializer
    lookup_field = "lift_number"


class StageEventViewSet(viewsets.ReadOnlyModelViewSet):
    """Audit trail of completed workflow steps, scoped to the user's firm.

    Query params:
        entity_type, entity_id: restrict to one record.
        stage: restrict to one workflow step.
    """

    queryset = StageEvent.objects.all().select_related("user")
    serializer_class = StageEventSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = scope_for_user(super().get_queryset(), self.request.user)
        for param in ("entity_type", "entity_id", "stage"):
            value = self.request.query_params.get(param)
            if value:
                qs = qs.filter(**{param: value})
        return qs
