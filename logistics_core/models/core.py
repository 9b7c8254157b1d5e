# logistics_core/models/core.py

from django.db import models

from logistics_core.custody import CustodyStatus


# ---------------------------------------------------------------------
# Base: adds created_at / updated_at to every model
# ---------------------------------------------------------------------
class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# ---------------------------------------------------------------------
# Member
# ---------------------------------------------------------------------
class Member(TimeStampedModel):
    """A trade participant: brings games to the event and/or picks games up."""
    first_name = models.CharField(max_length=120)
    last_name = models.CharField(max_length=120, blank=True)
    bgg_user = models.CharField(max_length=120, blank=True)
    email = models.EmailField(blank=True)

    class Meta:
        ordering = ["first_name", "last_name", "id"]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self):
        return self.full_name or f"Member {self.pk}"


# ---------------------------------------------------------------------
# Item
# ---------------------------------------------------------------------
class Item(TimeStampedModel):
    """
    A traded game and where it currently is.

    `status` is owned by the custody workflow; change it through
    services.custody_bulk, not by hand.
    """
    title = models.CharField(max_length=255)
    status = models.CharField(
        max_length=16,
        choices=CustodyStatus.choices,
        default=CustodyStatus.PENDING,
        db_index=True,
    )

    owner = models.ForeignKey(
        Member,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="items_to_deliver",
    )
    recipient = models.ForeignKey(
        Member,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="items_to_receive",
    )

    assigned_trade_code = models.PositiveIntegerField(null=True, blank=True, db_index=True)
    table_number = models.CharField(max_length=32, blank=True)
    box_number = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                name="item_status_valid",
                condition=models.Q(status__in=CustodyStatus.values),
            ),
        ]

    def __str__(self):
        return f"{self.title} [{self.status}]"
