"""API routes for the procurement app."""

from rest_framework.routers import DefaultRouter

from .views.api import (
    FullKittingViewSet,
    IndentViewSet,
    LiftViewSet,
    PurchaseOrderLineViewSet,
    StageEventViewSet,
    StoreIssueViewSet,
    TallyEntryViewSet,
)

router = DefaultRouter()
router.register(r"indents", IndentViewSet)
router.register(r"purchase-order-lines", PurchaseOrderLineViewSet)
router.register(r"lifts", LiftViewSet)
router.register(r"tally-entries", TallyEntryViewSet)
router.register(r"issues", StoreIssueViewSet)
router.register(r"full-kitting", FullKittingViewSet)
router.register(r"events", StageEventViewSet)

urlpatterns = router.urls
