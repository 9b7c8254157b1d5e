# logistics_core/custody/stores.py
"""
Collaborators of the bulk custody update.

The transition authority only needs single-item get/set on a backing store
and somewhere to write audit lines. Two implementations of each:

- ORM-backed (production): Item rows and CustodyEvent rows
- in-memory / log-only: for callers without a database
"""
from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from typing import Any, ContextManager, Dict, Iterable, Optional, Protocol

from django.db import transaction

from logistics_core.custody import CUSTODY_STATES, normalize_status
from logistics_core.models import CustodyEvent, Item

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------

class CustodyItem(Protocol):
    id: int
    title: str
    status: str


class ItemStore(Protocol):
    def get(self, item_id: int) -> Optional[CustodyItem]: ...

    def set(self, item_id: int, status: str) -> None: ...

    def atomic(self) -> ContextManager[Any]: ...


class AuditSink(Protocol):
    def record(self, actor_id: Any, item_id: int, new_status: str, **context: Any) -> None: ...


# ---------------------------------------------------------------------
# ORM-backed
# ---------------------------------------------------------------------

class ORMItemStore:
    def get(self, item_id: int) -> Optional[Item]:
        return Item.objects.filter(pk=item_id).only("id", "title", "status").first()

    def set(self, item_id: int, status: str) -> None:
        # Queryset update: bypasses save() so only status is written.
        Item.objects.filter(pk=item_id).update(status=status)

    def atomic(self):
        return transaction.atomic()


class CustodyEventSink:
    """
    Writes one CustodyEvent per reported item.

    Audit logging must never break custody execution.
    """

    def record(self, actor_id: Any, item_id: int, new_status: str, **context: Any) -> None:
        try:
            # Savepoint: a failed insert must not poison the caller's transaction.
            with transaction.atomic():
                CustodyEvent.objects.create(
                    item_id=item_id,
                    action=context.get("action", ""),
                    from_status=context.get("from_status", new_status),
                    to_status=new_status,
                    actor_id=str(actor_id),
                    role=context.get("role", ""),
                )
        except Exception:
            logger.exception("CustodyEvent logging failed for item %s (ignored).", item_id)


# ---------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------

@dataclass
class CustodyRecord:
    id: int
    title: str
    status: str


class InMemoryItemStore:
    def __init__(self, records: Iterable[CustodyRecord] = ()):
        self._records: Dict[int, CustodyRecord] = {r.id: r for r in records}

    def add(self, item_id: int, title: str, status: str) -> CustodyRecord:
        rec = CustodyRecord(id=item_id, title=title, status=normalize_status(status))
        self._records[item_id] = rec
        return rec

    def get(self, item_id: int) -> Optional[CustodyRecord]:
        return self._records.get(item_id)

    def set(self, item_id: int, status: str) -> None:
        status = normalize_status(status)
        if status not in CUSTODY_STATES:
            raise ValueError(f"Unknown custody status: {status!r}")
        if item_id not in self._records:
            raise KeyError(item_id)
        self._records[item_id].status = status

    def atomic(self):
        return contextlib.nullcontext()


class LoggingAuditSink:
    """Default sink when the store is not ORM-backed."""

    def record(self, actor_id: Any, item_id: int, new_status: str, **context: Any) -> None:
        logger.info(
            "custody audit: actor=%s item=%s status=%s action=%s role=%s",
            actor_id,
            item_id,
            new_status,
            context.get("action", ""),
            context.get("role", ""),
        )
