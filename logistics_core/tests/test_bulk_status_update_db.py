import pytest

from logistics_core.models import CustodyEvent, Item
from logistics_core.services.custody_bulk import Forbidden, bulk_status_update


# ===============================================================
# ORM STORE + CUSTODY EVENTS
# ===============================================================

@pytest.mark.django_db
def test_bulk_receive_writes_status_and_events(item_factory):
    pending = item_factory(id=21, title="Carcassonne (2000)", status="pending")
    delivered = item_factory(id=1144, title="Terraforming Mars (2016)", status="delivered")

    result = bulk_status_update(
        item_ids=[21, 1144],
        action="delivered",
        acting_user_id=7,
        acting_role="VOLUNTEER",
    )

    assert result == [
        {"id": 21, "newStatus": "at_org", "title": "Carcassonne (2000)"},
        {"id": 1144, "newStatus": "delivered", "title": "Terraforming Mars (2016)"},
    ]

    pending.refresh_from_db()
    delivered.refresh_from_db()
    assert pending.status == "at_org"
    assert delivered.status == "delivered"

    ev = CustodyEvent.objects.get(item_id=21)
    assert ev.from_status == "pending"
    assert ev.to_status == "at_org"
    assert ev.action == "delivered"
    assert ev.actor_id == "7"
    assert ev.role == "VOLUNTEER"
    assert ev.changed is True

    noop = CustodyEvent.objects.get(item_id=1144)
    assert noop.changed is False


@pytest.mark.django_db
def test_volunteer_revert_changes_nothing_in_db(item_factory):
    first = item_factory(status="at_org")
    second = item_factory(status="delivered")

    with pytest.raises(Forbidden):
        bulk_status_update(
            item_ids=[first.id, second.id],
            action="pending",
            acting_user_id=7,
            acting_role="VOLUNTEER",
        )

    first.refresh_from_db()
    second.refresh_from_db()
    assert first.status == "at_org"
    assert second.status == "delivered"
    assert CustodyEvent.objects.count() == 0


@pytest.mark.django_db
def test_admin_revert_full_cycle(item_factory):
    item = item_factory(status="delivered")

    for expected in ("at_org", "pending", "pending"):
        result = bulk_status_update(
            item_ids=[item.id],
            action="pending",
            acting_user_id=1,
            acting_role="ADMIN",
        )
        assert result[0]["newStatus"] == expected

    item.refresh_from_db()
    assert item.status == "pending"
    assert CustodyEvent.objects.filter(item_id=item.id).count() == 3


@pytest.mark.django_db
def test_missing_item_is_skipped_without_event(item_factory):
    result = bulk_status_update(
        item_ids=[99999],
        action="delivered",
        acting_user_id=7,
        acting_role="ADMIN",
    )

    assert result == []
    assert CustodyEvent.objects.count() == 0
    assert not Item.objects.filter(pk=99999).exists()


@pytest.mark.django_db
def test_failed_audit_write_does_not_break_batch(item_factory, monkeypatch):
    item = item_factory(status="pending")

    def _boom(*args, **kwargs):
        raise RuntimeError("audit table unavailable")

    monkeypatch.setattr(CustodyEvent.objects, "create", _boom)

    result = bulk_status_update(
        item_ids=[item.id],
        action="delivered",
        acting_user_id=7,
        acting_role="VOLUNTEER",
    )

    assert result[0]["newStatus"] == "at_org"
    item.refresh_from_db()
    assert item.status == "at_org"
