import logging

import pytest

from logistics_core.custody.stores import InMemoryItemStore
from logistics_core.services.custody_bulk import (
    Forbidden,
    InvalidRequest,
    bulk_status_update,
)


def _run(store, audit, item_ids, action, role="VOLUNTEER", user_id=7):
    return bulk_status_update(
        item_ids=item_ids,
        action=action,
        acting_user_id=user_id,
        acting_role=role,
        store=store,
        audit=audit,
    )


# ===============================================================
# TRANSITIONS
# ===============================================================

@pytest.mark.parametrize("role", ["ADMIN", "VOLUNTEER"])
def test_hand_over_from_org_delivers(memory_store, audit_sink, role):
    result = _run(memory_store, audit_sink, [300], "delivered_to_user", role=role)

    assert result == [{"id": 300, "newStatus": "delivered", "title": "Azul (2017)"}]
    assert memory_store.get(300).status == "delivered"


def test_admin_reverts_delivered_to_org(memory_store, audit_sink):
    result = _run(memory_store, audit_sink, [1144], "pending", role="ADMIN")

    assert result[0]["newStatus"] == "at_org"
    assert memory_store.get(1144).status == "at_org"


def test_admin_reverts_org_to_pending(memory_store, audit_sink):
    result = _run(memory_store, audit_sink, [300], "pending", role="ADMIN")

    assert result[0]["newStatus"] == "pending"
    assert memory_store.get(300).status == "pending"


def test_mixed_batch_receives_pending_and_keeps_delivered(memory_store, audit_sink):
    result = _run(memory_store, audit_sink, [21, 1144], "delivered")

    assert result == [
        {"id": 21, "newStatus": "at_org", "title": "Carcassonne (2000)"},
        {"id": 1144, "newStatus": "delivered", "title": "Terraforming Mars (2016)"},
    ]
    assert memory_store.get(21).status == "at_org"
    assert memory_store.get(1144).status == "delivered"


def test_receiving_twice_is_idempotent(memory_store, audit_sink):
    first = _run(memory_store, audit_sink, [300, 1144], "delivered")
    second = _run(memory_store, audit_sink, [300, 1144], "delivered")

    assert [r["newStatus"] for r in first] == ["at_org", "delivered"]
    assert first == second
    assert memory_store.get(300).status == "at_org"
    assert memory_store.get(1144).status == "delivered"


def test_hand_over_before_reception_is_a_no_op(memory_store, audit_sink):
    result = _run(memory_store, audit_sink, [21], "delivered_to_user")

    assert result[0]["newStatus"] == "pending"
    assert memory_store.get(21).status == "pending"


def test_duplicates_are_processed_in_order(memory_store, audit_sink):
    result = _run(memory_store, audit_sink, [1144, 1144], "pending", role="ADMIN")

    assert [r["newStatus"] for r in result] == ["at_org", "pending"]
    assert memory_store.get(1144).status == "pending"


# ===============================================================
# MISSING ITEMS
# ===============================================================

def test_unknown_item_is_skipped(memory_store, audit_sink):
    assert _run(memory_store, audit_sink, [99999], "delivered") == []
    assert audit_sink.records == []


def test_unknown_item_does_not_hide_the_others(memory_store, audit_sink):
    result = _run(memory_store, audit_sink, [99999, 21], "delivered")

    assert [r["id"] for r in result] == [21]


# ===============================================================
# PERMISSIONS
# ===============================================================

def test_volunteer_revert_aborts_whole_batch(memory_store, audit_sink):
    with pytest.raises(Forbidden) as excinfo:
        _run(memory_store, audit_sink, [21, 1144, 300], "pending", role="VOLUNTEER")

    assert excinfo.value.item_id == 21
    assert excinfo.value.title == "Carcassonne (2000)"
    assert "Carcassonne (2000)" in excinfo.value.message
    assert excinfo.value.status_code == 403

    assert memory_store.get(21).status == "pending"
    assert memory_store.get(1144).status == "delivered"
    assert memory_store.get(300).status == "at_org"
    assert audit_sink.records == []


def test_forbidden_names_first_found_item(memory_store, audit_sink):
    with pytest.raises(Forbidden) as excinfo:
        _run(memory_store, audit_sink, [99999, 1144], "pending", role="VOLUNTEER")

    assert excinfo.value.item_id == 1144
    assert memory_store.get(1144).status == "delivered"


# ===============================================================
# VALIDATION
# ===============================================================

@pytest.mark.parametrize("role", ["ADMIN", "VOLUNTEER"])
@pytest.mark.parametrize("action", ["pending", "delivered", "delivered_to_user"])
def test_empty_batch_is_invalid(memory_store, audit_sink, role, action):
    with pytest.raises(InvalidRequest):
        _run(memory_store, audit_sink, [], action, role=role)


@pytest.mark.parametrize("item_ids", [None, "21", 21, [True], ["abc"], [None]])
def test_malformed_item_ids_are_invalid(memory_store, audit_sink, item_ids):
    with pytest.raises(InvalidRequest):
        _run(memory_store, audit_sink, item_ids, "delivered")


def test_numeric_string_ids_are_accepted(memory_store, audit_sink):
    result = _run(memory_store, audit_sink, ["21"], "delivered")
    assert result[0]["id"] == 21


@pytest.mark.parametrize("action", ["", None, "archived", "at_org", "PENDING", " delivered ", "Delivered"])
def test_unknown_action_is_invalid(memory_store, audit_sink, action):
    with pytest.raises(InvalidRequest):
        _run(memory_store, audit_sink, [21], action)


@pytest.mark.parametrize("user_id", [None, "", "   "])
def test_missing_acting_user_is_invalid(memory_store, audit_sink, user_id):
    with pytest.raises(InvalidRequest):
        _run(memory_store, audit_sink, [21], "delivered", user_id=user_id)


@pytest.mark.parametrize(
    "role", ["USER", "", None, "GUEST", "superuser", "administrator", "voluntario", "MEMBER"]
)
def test_non_operator_role_is_invalid(memory_store, audit_sink, role):
    with pytest.raises(InvalidRequest):
        _run(memory_store, audit_sink, [21], "delivered", role=role)

    assert memory_store.get(21).status == "pending"


@pytest.mark.parametrize("role", ["superuser", "administrator"])
def test_admin_lookalike_role_cannot_revert(memory_store, audit_sink, role):
    with pytest.raises(InvalidRequest):
        _run(memory_store, audit_sink, [1144], "pending", role=role)

    assert memory_store.get(1144).status == "delivered"
    assert audit_sink.records == []


def test_role_is_case_insensitive(memory_store, audit_sink):
    result = _run(memory_store, audit_sink, [1144], "pending", role="admin")
    assert result[0]["newStatus"] == "at_org"


# ===============================================================
# AUDIT
# ===============================================================

def test_every_reported_item_is_audited(memory_store, audit_sink):
    _run(memory_store, audit_sink, [21, 99999, 1144], "delivered", user_id=42)

    assert [(r["item_id"], r["new_status"]) for r in audit_sink.records] == [
        (21, "at_org"),
        (1144, "delivered"),
    ]
    first = audit_sink.records[0]
    assert first["actor_id"] == 42
    assert first["from_status"] == "pending"
    assert first["action"] == "delivered"
    assert first["role"] == "VOLUNTEER"


def test_in_memory_store_logs_audit_lines_by_default(memory_store, caplog):
    with caplog.at_level(logging.INFO, logger="logistics_core.custody.stores"):
        bulk_status_update(
            item_ids=[21, 1144],
            action="delivered",
            acting_user_id=42,
            acting_role="VOLUNTEER",
            store=memory_store,
        )

    audit_lines = [
        r.getMessage() for r in caplog.records
        if r.name == "logistics_core.custody.stores"
    ]
    assert audit_lines == [
        "custody audit: actor=42 item=21 status=at_org action=delivered role=VOLUNTEER",
        "custody audit: actor=42 item=1144 status=delivered action=delivered role=VOLUNTEER",
    ]


def test_in_memory_store_rejects_unknown_status():
    store = InMemoryItemStore()
    store.add(1, "Game", "pending")

    with pytest.raises(ValueError):
        store.set(1, "lost")
    with pytest.raises(KeyError):
        store.set(2, "pending")
