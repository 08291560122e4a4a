from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from procurement.models import FullKitting, StageEvent
from procurement.services import kitting_service, storage
from procurement.services.stages import FULL_KITTING


def _data(**overrides):
    data = {
        "fms_name": "Store Fms",
        "status": "Yes",
        "vehicle_number": "MH12AB1234",
        "from_location": "Pune",
        "to_location": "Nagpur",
        "material_load_details": "20 bags",
        "bilty_number": "BL-77",
        "rate_type": "Per MT",
        "amount1": Decimal("4500"),
    }
    data.update(overrides)
    return data


@pytest.fixture
def kitting(lift_factory):
    lift = lift_factory(
        transportation_include="Yes",
        transporter_name="Fast Movers",
        transport_amount=Decimal("1200"),
        vehicle_no="MH12AB1234",
    )
    return kitting_service.open_full_kitting(lift)


@pytest.mark.django_db
def test_open_copies_lift_details(kitting):
    lift = kitting.lift
    assert kitting.lift_number == lift.lift_number
    assert kitting.indent_number == lift.indent.indent_number
    assert kitting.transporter_name == "Fast Movers"
    assert kitting.amount == Decimal("1200")
    assert kitting.firm_name_match == "Acme"
    assert FULL_KITTING.is_pending(kitting)
    assert kitting_service.open_full_kitting(lift) == kitting
    assert FullKitting.objects.count() == 1


@pytest.mark.django_db
def test_update_completes_the_stage(kitting, admin_user):
    image = SimpleUploadedFile("bilty.jpg", b"img", content_type="image/jpeg")
    success, msg, updated = kitting_service.update_full_kitting(
        kitting, _data(), bilty_image=image, user=admin_user
    )
    assert success, msg
    updated.refresh_from_db()
    assert FULL_KITTING.is_history(updated)
    assert updated.from_location == "Pune"
    assert updated.to_location == "Nagpur"
    assert updated.amount1 == Decimal("4500")
    assert f"{storage.BILTY_IMAGE_BUCKET}/bilty-{kitting.lift_number}" in updated.bilty_image
    event = StageEvent.objects.get(stage="full_kitting")
    assert event.firm_name_match == "Acme"
    assert event.changes["bilty_number"] == "BL-77"

    success, msg, _ = kitting_service.update_full_kitting(updated, _data())
    assert not success
    assert msg == f"Lift {kitting.lift_number} is not waiting for full kitting"


@pytest.mark.django_db
@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"status": ""}, "Status must be Yes or No"),
        ({"fms_name": "Other"}, "Unknown FMS name"),
        ({"to_location": " "}, "To is required"),
        ({"bilty_number": ""}, "Bilty number is required"),
        ({"rate_type": "Hourly"}, "Rate type must be Fixed or Per MT"),
        ({"amount1": None}, "Amount is required"),
        ({"amount1": "-1"}, "Amount cannot be negative"),
    ],
)
def test_update_validation(kitting, overrides, message):
    success, msg, _ = kitting_service.update_full_kitting(kitting, _data(**overrides))
    assert not success
    assert msg == message
    kitting.refresh_from_db()
    assert kitting.actual1 is None


@pytest.mark.django_db
def test_failed_upload_leaves_row_pending(kitting, monkeypatch):
    def fail(*args, **kwargs):
        raise storage.StorageError("Bucket unavailable")

    monkeypatch.setattr(storage, "upload_file", fail)
    image = SimpleUploadedFile("bilty.jpg", b"img")
    success, msg, _ = kitting_service.update_full_kitting(kitting, _data(), bilty_image=image)
    assert not success
    assert msg == "Bucket unavailable"
    kitting.refresh_from_db()
    assert FULL_KITTING.is_pending(kitting)
