from django.urls import path

from .views.administration import user_create, user_delete, user_edit, user_list
from .views.base import StageActionView, StageListView
from .views.indents import IndentCreateView, indent_detail
from .views.issues import IssueCreateView
from .views.purchase_orders import (
    PurchaseOrderCreateView,
    PurchaseOrderReviseView,
    po_document,
    po_history,
)

urlpatterns = [
    path("indents/new/", IndentCreateView.as_view(), name="indent_create"),
    path("indents/<str:indent_number>/", indent_detail, name="indent_detail"),
    path("stages/<slug:stage>/", StageListView.as_view(), name="stage_list"),
    path(
        "stages/<slug:stage>/<int:pk>/",
        StageActionView.as_view(),
        name="stage_action",
    ),
    path("purchase-orders/", po_history, name="po_history"),
    path("purchase-orders/new/", PurchaseOrderCreateView.as_view(), name="po_create"),
    path(
        "purchase-orders/revise/", PurchaseOrderReviseView.as_view(), name="po_revise"
    ),
    path("purchase-orders/document/", po_document, name="po_document"),
    path("issues/new/", IssueCreateView.as_view(), name="issue_create"),
    path("users/", user_list, name="user_list"),
    path("users/new/", user_create, name="user_create"),
    path("users/<int:pk>/", user_edit, name="user_edit"),
    path("users/<int:pk>/delete/", user_delete, name="user_delete"),
]
