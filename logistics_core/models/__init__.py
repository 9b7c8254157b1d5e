from .core import TimeStampedModel, Member, Item
from .custody_event import CustodyEvent

__all__ = [
    "TimeStampedModel",
    "Member",
    "Item",
    "CustodyEvent",
]
