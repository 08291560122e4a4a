import pytest
from django.test import RequestFactory

from procurement.models import Indent
from procurement.services import list_utils


def test_current_tab_defaults_to_pending():
    factory = RequestFactory()
    assert list_utils.current_tab(factory.get("/")) == "pending"
    assert list_utils.current_tab(factory.get("/", {"tab": "History"})) == "history"
    assert list_utils.current_tab(factory.get("/", {"tab": "bogus"})) == "pending"


@pytest.mark.django_db
def test_apply_search(indent_factory):
    indent_factory(product_name="Cement")
    indent_factory(product_name="Sand", indenter_name="Meena")
    request = RequestFactory().get("/", {"q": "meena"})
    qs, q = list_utils.apply_search(request, Indent.objects.all(), ["product_name", "indenter_name"])
    assert q == "meena"
    assert list(qs.values_list("product_name", flat=True)) == ["Sand"]


@pytest.mark.django_db
def test_paginate(indent_factory):
    for _ in range(3):
        indent_factory()
    request = RequestFactory().get("/", {"page_size": "2", "page": "2"})
    page_obj, per_page = list_utils.paginate(request, Indent.objects.order_by("indent_id"))
    assert per_page == 2
    assert len(page_obj.object_list) == 1


def test_paginate_ignores_bad_page_size():
    request = RequestFactory().get("/", {"page_size": "lots"})
    _, per_page = list_utils.paginate(request, [1, 2, 3])
    assert per_page == 25


def test_export_as_csv():
    response = list_utils.export_as_csv([("SI-0001", "Cement")], ["Indent", "Product"], list, "x.csv")
    assert response["Content-Disposition"] == "attachment; filename=x.csv"
    assert response.content.decode().splitlines() == ["Indent,Product", "SI-0001,Cement"]


def test_build_querystring():
    request = RequestFactory().get("/", {"q": "x", "page": "2", "format": "csv"})
    assert list_utils.build_querystring(request, exclude=("page", "format")) == "q=x"
