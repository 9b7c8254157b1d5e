# logistics_core/filters.py
import django_filters as df

from .custody import CustodyStatus
from .models import Item, CustodyEvent


class ItemFilter(df.FilterSet):
    title = df.CharFilter(field_name="title", lookup_expr="icontains")
    status = df.ChoiceFilter(field_name="status", choices=CustodyStatus.choices)
    owner = df.NumberFilter(field_name="owner_id")
    recipient = df.NumberFilter(field_name="recipient_id")

    class Meta:
        model = Item
        fields = ["title", "status", "owner", "recipient", "assigned_trade_code", "box_number"]


class CustodyEventFilter(df.FilterSet):
    created_at = df.DateTimeFromToRangeFilter()

    class Meta:
        model = CustodyEvent
        fields = ["item_id", "action", "to_status", "actor_id", "role", "created_at"]
