import pytest

from procurement.models import Indent, Lift
from procurement.services.firm_scope import (
    firm_field_for,
    is_unrestricted,
    scope_for_user,
    scope_to_firm,
    user_firm,
)


@pytest.mark.django_db
def test_scope_to_firm(indent_factory):
    indent_factory(firm_name="Acme")
    indent_factory(firm_name="Globex")
    qs = Indent.objects.all()
    assert scope_to_firm(qs, "acme", "firm_name").count() == 1
    assert scope_to_firm(qs, "ALL", "firm_name").count() == 2
    assert scope_to_firm(qs, "", "firm_name").count() == 0
    assert scope_to_firm(qs, None, "firm_name").count() == 0


def test_is_unrestricted():
    assert is_unrestricted("all")
    assert is_unrestricted(" All ")
    assert not is_unrestricted("Acme")
    assert not is_unrestricted(None)


def test_firm_field_for():
    assert firm_field_for(Indent) == "firm_name"
    assert firm_field_for(Lift) == "firm_name_match"


@pytest.mark.django_db
def test_user_firm(user_factory, django_user_model):
    assert user_firm(user_factory(firm="Globex")) == "Globex"
    bare = django_user_model.objects.create_user(username="bare", password="pw")
    assert user_firm(bare) == ""
    root = django_user_model.objects.create_superuser(username="root", password="pw")
    assert user_firm(root) == "all"


@pytest.mark.django_db
def test_scope_for_user_uses_model_field(user_factory, lift_factory, indent_factory):
    lift_factory()
    indent_factory(firm_name="Globex")
    user = user_factory(firm="Acme")
    assert scope_for_user(Lift.objects.all(), user).count() == 1
    assert set(scope_for_user(Indent.objects.all(), user).values_list("firm_name", flat=True)) == {"Acme"}
