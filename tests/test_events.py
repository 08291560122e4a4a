from decimal import Decimal

import pytest
from django.contrib.auth.models import AnonymousUser

from procurement.services.events import history_for, record_event


@pytest.mark.django_db
def test_record_event_serialises_changes(admin_user):
    event = record_event(
        stage="approval",
        entity_type="indent",
        entity_id="SI-0001",
        user=admin_user,
        changes={"approved_quantity": Decimal("12.50")},
    )
    event.refresh_from_db()
    assert event.user == admin_user
    assert event.changes == {"approved_quantity": "12.50"}
    assert list(history_for("indent", "SI-0001")) == [event]


@pytest.mark.django_db
def test_record_event_drops_anonymous_user():
    event = record_event(stage="lift", entity_type="lift", entity_id=7, user=AnonymousUser())
    assert event.user is None
    assert event.entity_id == "7"
    assert event.changes == {}
