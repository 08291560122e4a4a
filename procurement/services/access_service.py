"""User administration: logins with firm scope and screen permissions."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from ..models import PERMISSION_KEYS, UserAccess

logger = logging.getLogger(__name__)


def save_user(data: Dict[str, Any], user=None) -> Tuple[bool, str, Optional[Any]]:
    """Create ``user`` when ``None``, otherwise update it in place."""

    User = get_user_model()
    username = (data.get("username") or "").strip()
    if not username:
        return False, "Username is required", None
    unknown = set(data.get("permissions") or []) - set(PERMISSION_KEYS)
    if unknown:
        return False, f"Unknown permissions: {', '.join(sorted(unknown))}", None
    password = data.get("password") or ""
    if user is None and not password:
        return False, "Password is required", None
    try:
        with transaction.atomic():
            if user is None:
                user = User.objects.create_user(username=username, password=password)
            else:
                user.username = username
                if password:
                    user.set_password(password)
            user.first_name = data.get("first_name") or ""
            user.is_active = bool(data.get("is_active", True))
            user.save()
            UserAccess.objects.update_or_create(
                user=user,
                defaults={
                    "firm_name_match": (data.get("firm_name_match") or "").strip(),
                    "permissions": list(data.get("permissions") or []),
                },
            )
    except IntegrityError as exc:
        logger.error("Integrity error saving user %s: %s", username, exc)
        return False, f"Username '{username}' already exists.", None
    logger.info("Saved user %s", username)
    return True, f"User {username} saved", user


def delete_user(user, acting_user=None) -> Tuple[bool, str]:
    if acting_user is not None and user.pk == acting_user.pk:
        return False, "You cannot delete your own account"
    username = user.get_username()
    user.delete()
    logger.info("Deleted user %s", username)
    return True, f"User {username} deleted"


def initial_for(user) -> Dict[str, Any]:
    access = getattr(user, "access", None)
    return {
        "username": user.username,
        "first_name": user.first_name,
        "is_active": user.is_active,
        "firm_name_match": access.firm_name_match if access else "",
        "permissions": list(access.permissions or []) if access else [],
    }
