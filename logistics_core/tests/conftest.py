# logistics_core/tests/conftest.py

from __future__ import annotations

import uuid
from typing import Any, Callable, Optional

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from logistics_core.custody import CustodyStatus
from logistics_core.custody.stores import InMemoryItemStore
from logistics_core.models import Item, Member


def _rand(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class RecordingAuditSink:
    """Audit sink that keeps what it was given."""

    def __init__(self):
        self.records = []

    def record(self, actor_id, item_id, new_status, **context):
        self.records.append(
            {"actor_id": actor_id, "item_id": item_id, "new_status": new_status, **context}
        )


@pytest.fixture
def staff_user(db):
    User = get_user_model()
    user, _ = User.objects.get_or_create(username="desk", defaults={"is_staff": True})
    user.set_password("pass123")
    user.save(update_fields=["password"])
    return user


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def auth_client(api_client, staff_user) -> APIClient:
    api_client.force_authenticate(user=staff_user)
    return api_client


@pytest.fixture
def member_factory(db) -> Callable[..., Member]:
    def _factory(*, first_name: Optional[str] = None, last_name: str = "", **extra: Any) -> Member:
        return Member.objects.create(
            first_name=first_name or _rand("Member"),
            last_name=last_name,
            **extra,
        )

    return _factory


@pytest.fixture
def item_factory(db) -> Callable[..., Item]:
    """
    Factory for items; pass id= to pin the primary key.
    """

    def _factory(
        *,
        status: str = CustodyStatus.PENDING,
        title: Optional[str] = None,
        **extra: Any,
    ) -> Item:
        return Item.objects.create(
            title=title or _rand("Game"),
            status=status,
            **extra,
        )

    return _factory


@pytest.fixture
def memory_store() -> InMemoryItemStore:
    store = InMemoryItemStore()
    store.add(21, "Carcassonne (2000)", "pending")
    store.add(1144, "Terraforming Mars (2016)", "delivered")
    store.add(300, "Azul (2017)", "at_org")
    return store


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()
