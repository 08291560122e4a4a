import os
import sys
from decimal import Decimal

import django
import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "procurement_app.settings")
django.setup()

from procurement.models import ALL_FIRMS, Indent, Lift, UserAccess  # noqa: E402
from procurement.models.indents import STATUS_PENDING, VENDOR_REGULAR  # noqa: E402
from procurement.models.lifts import BILL_RECEIVED  # noqa: E402
from procurement.services import clock, storage  # noqa: E402
from procurement.services.master_service import master_options  # noqa: E402


@pytest.fixture(autouse=True)
def local_storage(settings, tmp_path, monkeypatch):
    """Keep uploads on the local filesystem and master data uncached."""

    settings.MEDIA_ROOT = str(tmp_path / "media")
    monkeypatch.setattr(storage, "get_supabase_client", lambda: None)
    master_options.clear()
    yield
    master_options.clear()


@pytest.fixture
def admin_user(db):
    from django.contrib.auth import get_user_model

    User = get_user_model()
    user, _ = User.objects.get_or_create(
        username="admin", defaults={"is_superuser": True, "is_staff": True}
    )
    if not user.is_superuser:
        user.is_superuser = True
        user.save()
    UserAccess.objects.get_or_create(user=user, defaults={"firm_name_match": ALL_FIRMS})
    return user


@pytest.fixture(autouse=True)
def logged_in_client(client, db, admin_user):
    """Log in the admin user for tests that require authentication."""

    client.force_login(admin_user)
    yield
    client.logout()


@pytest.fixture
def user_factory(db, django_user_model):
    """Create a login with a firm and a list of permission keys."""

    def create_user(username="clerk", firm="Acme", permissions=()):
        user = django_user_model.objects.create_user(username=username, password="pw")
        UserAccess.objects.create(
            user=user, firm_name_match=firm, permissions=list(permissions)
        )
        return user

    return create_user


@pytest.fixture
def indent_factory(db):
    counter = {"n": 0}

    def create_indent(**kwargs):
        counter["n"] += 1
        defaults = {
            "indent_number": f"SI-{counter['n']:04d}",
            "firm_name": "Acme",
            "indenter_name": "Ravi",
            "department": "Maintenance",
            "area_of_use": "Plant",
            "group_head": "Civil",
            "product_name": "Cement",
            "quantity": Decimal("10"),
            "uom": "Bag",
            "planned1": clock.now(),
        }
        defaults.update(kwargs)
        return Indent.objects.create(**defaults)

    return create_indent


@pytest.fixture
def approved_indent(indent_factory):
    """Indent with an approved regular vendor, waiting for its PO decision."""

    def create(**kwargs):
        stamp = clock.now()
        defaults = {
            "actual1": stamp,
            "vendor_type": VENDOR_REGULAR,
            "approved_quantity": Decimal("10"),
            "planned2": stamp,
            "actual2": stamp,
            "approved_vendor_name": "Shree Traders",
            "approved_rate": Decimal("118.00"),
            "approved_payment_term": "30 days",
            "approved_with_tax": "No",
            "approved_tax_value": Decimal("18"),
            "planned4": stamp,
            "status": STATUS_PENDING,
        }
        defaults.update(kwargs)
        return indent_factory(**defaults)

    return create


@pytest.fixture
def lift_factory(approved_indent):
    counter = {"n": 0}

    def create_lift(indent=None, **kwargs):
        counter["n"] += 1
        if indent is None:
            stamp = clock.now()
            indent = approved_indent(
                po_required="Yes",
                po_number="STORE-PO-25-26-1",
                actual4=stamp,
                planned5=stamp,
                pending_lift_qty=Decimal("10"),
            )
        defaults = {
            "lift_number": f"LF-{counter['n']:04d}",
            "indent": indent,
            "po_number": indent.po_number,
            "vendor_name": indent.approved_vendor_name,
            "product_name": indent.product_name,
            "bill_status": BILL_RECEIVED,
            "bill_no": "B-17",
            "qty": Decimal("4"),
            "bill_amount": Decimal("472"),
            "firm_name_match": indent.firm_name,
            "planned6": clock.now(),
        }
        defaults.update(kwargs)
        return Lift.objects.create(**defaults)

    return create_lift


@pytest.fixture
def po_header():
    from datetime import date, timedelta

    return {
        "party_name": "Shree Traders",
        "quotation_number": "Q-9",
        "quotation_date": date.today(),
        "delivery_date": date.today() + timedelta(days=7),
        "payment_terms": "30 days",
        "terms": ["Delivery at site", "Goods once sold not returnable"],
    }
