import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from procurement.models import Indent, StageEvent


def _line(pos, **overrides):
    data = {
        "firm_name": "Acme",
        "department": "Maintenance",
        "group_head": "Civil",
        "product_name": "Cement",
        "quantity": "10",
        "uom": "Bag",
        "area_of_use": "Plant",
        "no_day": "3",
        "specifications": "",
    }
    data.update(overrides)
    return {f"lines-{pos}-{key}": value for key, value in data.items()}


def _management(total):
    return {
        "lines-TOTAL_FORMS": str(total),
        "lines-INITIAL_FORMS": "0",
        "lines-MIN_NUM_FORMS": "1",
        "lines-MAX_NUM_FORMS": "1000",
    }


@pytest.mark.django_db
def test_indent_create_get(client):
    resp = client.get(reverse("indent_create"))
    assert resp.status_code == 200
    assert len(resp.context["formset"].forms) == 1
    assert "product-options" in resp.context["datalists"]


@pytest.mark.django_db
def test_indent_create_post_two_lines(client):
    data = {"indenter_name": "Ravi", "indent_status": "Critical"}
    data.update(_management(2))
    data.update(_line(0))
    data.update(_line(1, product_name="Sand", uom="Ton"))
    data["lines-1-attachment"] = SimpleUploadedFile("datasheet.pdf", b"%PDF-1.4", "application/pdf")
    resp = client.post(reverse("indent_create"), data)
    assert resp.status_code == 302
    assert resp.url == reverse("stage_list", args=["approval"])
    indents = list(Indent.objects.order_by("indent_number"))
    assert [i.indent_number for i in indents] == ["SI-0001", "SI-0002"]
    assert indents[0].attachment == ""
    assert "indent_attachment/SI-0002" in indents[1].attachment
    assert indents[1].planned1 is not None
    assert StageEvent.objects.filter(stage="create_indent").count() == 2


@pytest.mark.django_db
def test_indent_create_requires_positive_quantity(client):
    data = {"indenter_name": "Ravi", "indent_status": "Critical"}
    data.update(_management(1))
    data.update(_line(0, quantity="0"))
    resp = client.post(reverse("indent_create"), data)
    assert resp.status_code == 200
    assert resp.context["formset"].forms[0].errors["quantity"] == ["Must be greater than 0"]
    assert not Indent.objects.exists()


@pytest.mark.django_db
def test_indent_create_without_approval_view_redirects_back(client, user_factory):
    client.force_login(user_factory(permissions=["create_indent"]))
    data = {"indenter_name": "Ravi", "indent_status": "None Critical"}
    data.update(_management(1))
    data.update(_line(0))
    resp = client.post(reverse("indent_create"), data)
    assert resp.url == reverse("indent_create")


@pytest.mark.django_db
def test_indent_create_requires_permission(client, user_factory):
    client.force_login(user_factory(permissions=[]))
    assert client.get(reverse("indent_create")).status_code == 403


@pytest.mark.django_db
def test_indent_detail(client, approved_indent):
    indent = approved_indent()
    resp = client.get(reverse("indent_detail", args=[indent.indent_number]))
    assert resp.status_code == 200
    assert resp.context["current"].key == "po_decision"
    done = [step["stage"].key for step in resp.context["progress"] if step["done"]]
    assert done == ["approval", "vendor_update"]


@pytest.mark.django_db
def test_indent_detail_is_firm_scoped(client, user_factory, indent_factory):
    indent = indent_factory(firm_name="Globex")
    client.force_login(user_factory(firm="Acme", permissions=["create_indent"]))
    assert client.get(reverse("indent_detail", args=[indent.indent_number])).status_code == 404


@pytest.mark.django_db
def test_indent_detail_requires_an_indent_permission(client, user_factory, indent_factory):
    indent = indent_factory()
    client.force_login(user_factory(username="storekeeper", permissions=["store_in"]))
    url = reverse("indent_detail", args=[indent.indent_number])
    assert client.get(url).status_code == 403

    client.force_login(user_factory(username="buyer", permissions=["create_po"]))
    assert client.get(url).status_code == 200
