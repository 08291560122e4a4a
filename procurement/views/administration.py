from django.contrib import messages
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from ..access import require_permission
from ..forms.admin_forms import UserAccessForm
from ..services import access_service


@require_permission("administrate")
def user_list(request):
    users = get_user_model().objects.select_related("access").order_by("username")
    return render(request, "procurement/user_list.html", {"users": users})


@require_permission("administrate")
def user_create(request):
    form = UserAccessForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        success, msg, _ = access_service.save_user(form.cleaned_data)
        if success:
            messages.success(request, msg)
            return redirect("user_list")
        messages.error(request, msg)
    return render(request, "procurement/user_form.html", {"form": form})


@require_permission("administrate")
def user_edit(request, pk: int):
    user = get_object_or_404(get_user_model(), pk=pk)
    if request.method == "POST":
        form = UserAccessForm(request.POST, user=user)
        if form.is_valid():
            success, msg, _ = access_service.save_user(form.cleaned_data, user=user)
            if success:
                messages.success(request, msg)
                return redirect("user_list")
            messages.error(request, msg)
    else:
        form = UserAccessForm(initial=access_service.initial_for(user), user=user)
    return render(request, "procurement/user_form.html", {"form": form, "edited": user})


@require_POST
@require_permission("administrate")
def user_delete(request, pk: int):
    user = get_object_or_404(get_user_model(), pk=pk)
    success, msg = access_service.delete_user(user, acting_user=request.user)
    if success:
        messages.success(request, msg)
    else:
        messages.error(request, msg)
    return redirect("user_list")
