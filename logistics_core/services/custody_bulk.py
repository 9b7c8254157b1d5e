# logistics_core/services/custody_bulk.py

import logging
from collections.abc import Sequence as SequenceABC
from typing import Any, Dict, List, Optional, Sequence

from rest_framework import status
from rest_framework.exceptions import APIException

from logistics_core.custody import (
    OPERATOR_ROLES,
    REQUESTED_ACTIONS,
    RequestedAction,
    normalize_action,
    normalize_role,
    normalize_status,
    resolve_transition,
    role_allows,
)
from logistics_core.custody.stores import (
    AuditSink,
    CustodyEventSink,
    ItemStore,
    LoggingAuditSink,
    ORMItemStore,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------

class CustodyError(APIException):
    """Base for the two ways a bulk custody update can be refused."""

    @property
    def message(self) -> str:
        return str(self.detail)


class InvalidRequest(CustodyError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid status update request."
    default_code = "invalid_request"


class Forbidden(CustodyError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Your role is not allowed to perform this status update."
    default_code = "forbidden"

    def __init__(self, detail=None, *, item_id: Optional[int] = None, title: str = ""):
        super().__init__(detail)
        self.item_id = item_id
        self.title = title


# ---------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------

def _coerce_item_id(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidRequest(f"Invalid item id: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise InvalidRequest(f"Invalid item id: {value!r}")


def _validated_item_ids(item_ids: Any) -> List[int]:
    if isinstance(item_ids, (str, bytes)) or not isinstance(item_ids, SequenceABC) or not item_ids:
        raise InvalidRequest("itemIds must be a non-empty list of item ids.")
    return [_coerce_item_id(v) for v in item_ids]


def _validate_request(item_ids, action, acting_user_id, acting_role):
    ids = _validated_item_ids(item_ids)

    act = normalize_action(action)
    if act not in REQUESTED_ACTIONS:
        raise InvalidRequest(
            f"Unknown status {action!r}. Expected one of: {', '.join(sorted(REQUESTED_ACTIONS))}."
        )

    if acting_user_id is None or str(acting_user_id).strip() == "":
        raise InvalidRequest("deliveredByUserId is required.")

    role = normalize_role(acting_role)
    if role not in OPERATOR_ROLES:
        raise InvalidRequest(f"Role {acting_role!r} cannot update item status.")

    return ids, act, role


# ---------------------------------------------------------------------
# BULK CUSTODY STATUS UPDATE
# ---------------------------------------------------------------------

def bulk_status_update(
    *,
    item_ids: Sequence[Any],
    action: str,
    acting_user_id: Any,
    acting_role: str,
    store: Optional[ItemStore] = None,
    audit: Optional[AuditSink] = None,
) -> List[Dict[str, Any]]:
    """
    Canonical bulk custody transition engine.

    - Validates the whole request before looking at any item (InvalidRequest)
    - Items are processed in input order, each one independently
    - Unknown item ids are skipped with a warning, never an error
    - A "pending" action from a non-ADMIN aborts the batch (Forbidden)
      at the first item found; nothing is written in that case
    - Every reported item gets one audit record, unchanged ones included

    Returns [{"id", "newStatus", "title"}, ...] in input order.
    """
    ids, act, role = _validate_request(item_ids, action, acting_user_id, acting_role)

    if store is None:
        store = ORMItemStore()
    if audit is None:
        # CustodyEvent rows only make sense next to Item rows.
        audit = CustodyEventSink() if isinstance(store, ORMItemStore) else LoggingAuditSink()

    # --------------------------------------------------
    # 1) Plan: compute every transition before writing
    # --------------------------------------------------
    planned: Dict[int, str] = {}
    plan: List[Dict[str, Any]] = []

    for item_id in ids:
        item = store.get(item_id)
        if item is None:
            logger.warning("Custody update: item %s not found, skipped.", item_id)
            continue

        if act == RequestedAction.PENDING and not role_allows(act, role):
            logger.warning(
                "Custody update rejected: %s %s tried to revert item %s (%s).",
                role,
                acting_user_id,
                item_id,
                item.title,
            )
            raise Forbidden(
                f"Only ADMIN can revert the status of item {item_id} ({item.title}).",
                item_id=item_id,
                title=item.title,
            )

        # Duplicates see what their earlier occurrence planned.
        current = planned.get(item_id, normalize_status(item.status))
        new_status = str(resolve_transition(act, current))
        planned[item_id] = new_status

        plan.append(
            {
                "id": item_id,
                "title": item.title,
                "from_status": current,
                "new_status": new_status,
            }
        )

    # --------------------------------------------------
    # 2) Apply + audit
    # --------------------------------------------------
    updated: List[Dict[str, Any]] = []

    with store.atomic():
        for step in plan:
            if step["new_status"] != step["from_status"]:
                store.set(step["id"], step["new_status"])

            audit.record(
                acting_user_id,
                step["id"],
                step["new_status"],
                from_status=step["from_status"],
                action=act,
                role=role,
            )
            logger.info(
                "Item %s (%s): %s -> %s by %s %s",
                step["id"],
                step["title"],
                step["from_status"],
                step["new_status"],
                role,
                acting_user_id,
            )

            updated.append(
                {
                    "id": step["id"],
                    "newStatus": step["new_status"],
                    "title": step["title"],
                }
            )

    return updated
