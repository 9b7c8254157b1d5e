# logistics_core/custody/__init__.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple

from django.db import models


# ===============================================================
# Canonical custody vocabularies
# ===============================================================

class CustodyStatus(models.TextChoices):
    """Where a traded item physically is."""
    PENDING = "pending", "At original owner"
    AT_ORG = "at_org", "Held by organizers"
    DELIVERED = "delivered", "Delivered to receiving member"


class RequestedAction(models.TextChoices):
    """
    What the caller asks for. Deliberately NOT the same vocabulary as
    CustodyStatus: "delivered" means "hand the item to the organizers".
    """
    DELIVERED = "delivered", "Received by organizers"
    DELIVERED_TO_USER = "delivered_to_user", "Handed to receiving member"
    PENDING = "pending", "Revert one step"


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Admin"
    VOLUNTEER = "VOLUNTEER", "Volunteer"
    USER = "USER", "User"


CUSTODY_STATES: Set[str] = set(CustodyStatus.values)
REQUESTED_ACTIONS: Set[str] = set(RequestedAction.values)

# Roles that may call the bulk status update at all.
OPERATOR_ROLES: Set[str] = {str(Role.ADMIN), str(Role.VOLUNTEER)}


# ===============================================================
# Transition table: (action, current) -> new status
# ===============================================================

_TRANSITION_TABLE = {
    (RequestedAction.PENDING, CustodyStatus.DELIVERED): CustodyStatus.AT_ORG,
    (RequestedAction.PENDING, CustodyStatus.AT_ORG): CustodyStatus.PENDING,
    (RequestedAction.PENDING, CustodyStatus.PENDING): CustodyStatus.PENDING,

    (RequestedAction.DELIVERED, CustodyStatus.PENDING): CustodyStatus.AT_ORG,
    (RequestedAction.DELIVERED, CustodyStatus.AT_ORG): CustodyStatus.AT_ORG,
    (RequestedAction.DELIVERED, CustodyStatus.DELIVERED): CustodyStatus.DELIVERED,

    (RequestedAction.DELIVERED_TO_USER, CustodyStatus.AT_ORG): CustodyStatus.DELIVERED,
    (RequestedAction.DELIVERED_TO_USER, CustodyStatus.PENDING): CustodyStatus.PENDING,
    (RequestedAction.DELIVERED_TO_USER, CustodyStatus.DELIVERED): CustodyStatus.DELIVERED,
}

_ACTION_ROLE_TABLE = {
    RequestedAction.PENDING: {Role.ADMIN},
    RequestedAction.DELIVERED: {Role.ADMIN, Role.VOLUNTEER},
    RequestedAction.DELIVERED_TO_USER: {Role.ADMIN, Role.VOLUNTEER},
}

# Plain-string keys so lookups never depend on enum hashing.
CUSTODY_TRANSITIONS: Dict[Tuple[str, str], str] = {
    (str(act), str(cur)): str(new) for (act, cur), new in _TRANSITION_TABLE.items()
}
ACTION_ROLES: Dict[str, Set[str]] = {
    str(act): {str(r) for r in roles} for act, roles in _ACTION_ROLE_TABLE.items()
}


# ===============================================================
# Normalization
# ===============================================================

def normalize_status(value: Any) -> str:
    return str(value or "").strip().lower()


def normalize_action(value: Any) -> str:
    # Actions are matched exactly: "PENDING" is not "pending".
    return value if isinstance(value, str) else ""


def normalize_role(value: Any) -> str:
    # Case-folded only, no aliases.
    return str(value or "").strip().upper()


# ===============================================================
# Public policy API
# ===============================================================

def resolve_transition(action: str, current: str) -> str:
    """
    Returns the status an item in `current` ends up in after `action`.

    Raises ValueError for an unknown action or status. Role gating is
    separate, see role_allows().
    """
    act = normalize_action(action)
    cur = normalize_status(current)

    if act not in REQUESTED_ACTIONS:
        raise ValueError(f"Unknown custody action: {action!r}")
    if cur not in CUSTODY_STATES:
        raise ValueError(f"Unknown custody status: {current!r}")

    return CUSTODY_TRANSITIONS[(act, cur)]


def required_roles(action: str) -> Set[str]:
    act = normalize_action(action)
    if act not in ACTION_ROLES:
        raise ValueError(f"Unknown custody action: {action!r}")
    return {str(r) for r in ACTION_ROLES[act]}


def role_allows(action: str, role: str) -> bool:
    return normalize_role(role) in required_roles(action)


def allowed_actions(current: str, role: Optional[str] = None) -> List[str]:
    """
    Actions that would actually move an item out of `current`.

    With a role, only the actions that role may perform are returned.
    """
    cur = normalize_status(current)
    if cur not in CUSTODY_STATES:
        return []

    out: List[str] = []
    for act in RequestedAction.values:
        if CUSTODY_TRANSITIONS[(act, cur)] == cur:
            continue
        if role is not None and not role_allows(act, role):
            continue
        out.append(act)
    return sorted(out)


def custody_definition() -> Dict[str, Any]:
    """
    Stable JSON-serializable definition for UI.
    """
    rows = [
        {
            "action": act,
            "from": cur,
            "to": new,
            "changes": new != cur,
            "roles": sorted(required_roles(act)),
        }
        for (act, cur), new in CUSTODY_TRANSITIONS.items()
    ]
    return {
        "states": [{"value": v, "label": str(l)} for v, l in CustodyStatus.choices],
        "actions": [{"value": v, "label": str(l)} for v, l in RequestedAction.choices],
        "roles": list(Role.values),
        "operator_roles": sorted(str(r) for r in OPERATOR_ROLES),
        "transitions": rows,
    }


__all__ = [
    "CustodyStatus",
    "RequestedAction",
    "Role",
    "CUSTODY_STATES",
    "REQUESTED_ACTIONS",
    "OPERATOR_ROLES",
    "CUSTODY_TRANSITIONS",
    "ACTION_ROLES",
    "normalize_status",
    "normalize_action",
    "normalize_role",
    "resolve_transition",
    "required_roles",
    "role_allows",
    "allowed_actions",
    "custody_definition",
]
