from django.contrib.auth import login, logout
from django.contrib.auth.forms import AuthenticationForm
from django.http import HttpResponse
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from procurement.services.dashboard_service import dashboard_summary
from procurement.services.firm_scope import user_firm


def root_view(request):
    """Render the dashboard or the login form depending on authentication."""
    if request.user.is_authenticated:
        return dashboard(request)

    form = AuthenticationForm(request, data=request.POST or None)
    if request.method == "POST" and form.is_valid():
        login(request, form.get_user())
        target = request.GET.get("next")
        if target and url_has_allowed_host_and_scheme(target, {request.get_host()}):
            return redirect(target)
        return redirect("root")

    return render(request, "core/login.html", {"form": form})


@require_POST
def logout_view(request):
    logout(request)
    return redirect("login")


def dashboard(request):
    """Headline workflow counts and top products/vendors for the user's firm."""
    summary = dashboard_summary(user_firm(request.user))
    return render(request, "core/dashboard.html", {"summary": summary})


def health_check(request):
    return HttpResponse("ok")
