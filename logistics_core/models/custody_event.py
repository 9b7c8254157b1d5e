from django.db import models

from logistics_core.custody import CustodyStatus, RequestedAction


class CustodyEvent(models.Model):
    """
    Immutable audit log for custody transitions.
    """

    item_id = models.PositiveIntegerField()
    action = models.CharField(max_length=32, choices=RequestedAction.choices)
    from_status = models.CharField(max_length=16, choices=CustodyStatus.choices)
    to_status = models.CharField(max_length=16, choices=CustodyStatus.choices)

    # Caller identity comes from the auth layer as-is; no FK on purpose.
    actor_id = models.CharField(max_length=64)
    role = models.CharField(max_length=32)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["item_id"], name="custody_event_item_idx"),
        ]

    @property
    def changed(self) -> bool:
        return self.from_status != self.to_status

    def __str__(self):
        return (
            f"ITEM {self.item_id}: "
            f"{self.from_status} → {self.to_status} "
            f"({self.action}) by {self.actor_id}"
        )
