"""URL configuration for the procurement_app project."""

from django.contrib import admin
from django.urls import include, path

from core.views import dashboard, health_check, logout_view, root_view

urlpatterns = [
    path("admin/", admin.site.urls),
    path("login/", root_view, name="login"),
    path("logout/", logout_view, name="logout"),
    path("", root_view, name="root"),
    path("dashboard/", dashboard, name="dashboard"),
    path("healthz", health_check, name="health-check"),
    path("api/", include("procurement.urls")),   # DRF API
    path("", include("procurement.ui_urls")),    # HTML UI routes
]
