from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from .custody import CustodyStatus, RequestedAction, Role, allowed_actions
from .models import CustodyEvent, Item, Member


# ===============================================================
# Members
# ===============================================================

class MemberSlimSerializer(serializers.ModelSerializer):
    class Meta:
        model = Member
        fields = ("id", "first_name", "last_name")
        read_only_fields = fields


class MemberSerializer(serializers.ModelSerializer):
    class Meta:
        model = Member
        fields = ("id", "first_name", "last_name", "bgg_user", "email")
        read_only_fields = ("id",)


# ===============================================================
# Items
# ===============================================================

class ItemSerializer(serializers.ModelSerializer):
    owner = MemberSlimSerializer(read_only=True)
    recipient = MemberSlimSerializer(read_only=True)
    allowed_actions = serializers.SerializerMethodField()

    class Meta:
        model = Item
        fields = (
            "id",
            "title",
            "status",
            "assigned_trade_code",
            "table_number",
            "box_number",
            "owner",
            "recipient",
            "allowed_actions",
        )
        read_only_fields = fields

    def get_allowed_actions(self, obj: Item):
        return allowed_actions(obj.status)


class ItemDetailSerializer(ItemSerializer):
    """
    Adds who the item was handed to once it reaches "delivered".
    """

    def to_representation(self, instance: Item) -> Dict[str, Any]:
        data = super().to_representation(instance)
        if instance.status == CustodyStatus.DELIVERED and instance.recipient_id:
            data["delivered_to_user_id"] = instance.recipient_id
            data["delivered_to_user_name"] = instance.recipient.full_name
        return data


class ItemSlimSerializer(serializers.ModelSerializer):
    class Meta:
        model = Item
        fields = ("id", "title")
        read_only_fields = fields


class ItemStatusSlimSerializer(serializers.ModelSerializer):
    class Meta:
        model = Item
        fields = ("id", "title", "status")
        read_only_fields = fields


# ===============================================================
# Custody audit
# ===============================================================

class CustodyEventSerializer(serializers.ModelSerializer):
    changed = serializers.BooleanField(read_only=True)

    class Meta:
        model = CustodyEvent
        fields = (
            "id",
            "item_id",
            "action",
            "from_status",
            "to_status",
            "changed",
            "actor_id",
            "role",
            "created_at",
        )
        read_only_fields = fields


# ===============================================================
# Bulk status update (schema only; the service validates)
# ===============================================================

class StatusUpdateRequestSerializer(serializers.Serializer):
    itemIds = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    status = serializers.ChoiceField(choices=RequestedAction.choices)
    deliveredByUserId = serializers.IntegerField()
    userRole = serializers.ChoiceField(choices=[Role.ADMIN, Role.VOLUNTEER])


class UpdatedGameSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    newStatus = serializers.ChoiceField(choices=CustodyStatus.choices)
    title = serializers.CharField()


class StatusUpdateResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    updatedGames = UpdatedGameSerializer(many=True, required=False)
    message = serializers.CharField(required=False)
