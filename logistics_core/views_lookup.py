# logistics_core/views_lookup.py
"""
Lookups used by the scanner screens: scan a game or a member QR code,
see what to receive, what to hand out, and who is waiting at the desk.
"""
from __future__ import annotations

from typing import Optional

from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .custody import CustodyStatus
from .models import CustodyEvent, Item, Member
from .serializers import (
    CustodyEventSerializer,
    ItemDetailSerializer,
    ItemSlimSerializer,
    ItemStatusSlimSerializer,
)


# ------------------------------------------------------------------
# Utilities
# ------------------------------------------------------------------
def _parse_int(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _bad_id(kind: str) -> Response:
    return Response({"message": f"Invalid {kind} id."}, status=400)


def _not_found(kind: str, pk: int) -> Response:
    return Response({"message": f"{kind} {pk} not found."}, status=404)


# ===============================================================
# Items
# ===============================================================

class ItemDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Lookups"], responses=ItemDetailSerializer)
    def get(self, request, item_id: str):
        pk = _parse_int(item_id)
        if pk is None:
            return _bad_id("item")

        item = Item.objects.select_related("owner", "recipient").filter(pk=pk).first()
        if item is None:
            return _not_found("Item", pk)

        return Response(ItemDetailSerializer(item).data)


class ItemHistoryView(APIView):
    """
    Custody timeline of one item, newest first.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Lookups"], responses=CustodyEventSerializer(many=True))
    def get(self, request, item_id: str):
        pk = _parse_int(item_id)
        if pk is None:
            return _bad_id("item")

        if not Item.objects.filter(pk=pk).exists():
            return _not_found("Item", pk)

        events = CustodyEvent.objects.filter(item_id=pk).order_by("-created_at", "-id")
        return Response(
            {
                "item_id": pk,
                "events": CustodyEventSerializer(events, many=True).data,
            }
        )


# ===============================================================
# Members
# ===============================================================

class MemberGamesView(APIView):
    """
    Games a member brings to the event (the "receive games" screen).
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Lookups"])
    def get(self, request, member_id: str):
        pk = _parse_int(member_id)
        if pk is None:
            return _bad_id("member")

        member = Member.objects.filter(pk=pk).first()
        if member is None:
            return _not_found("Member", pk)

        games = member.items_to_deliver.order_by("id")
        return Response(
            {
                "id": member.id,
                "first_name": member.first_name,
                "last_name": member.last_name,
                "games": ItemStatusSlimSerializer(games, many=True).data,
            }
        )


class MemberGamesToRetrieveView(APIView):
    """
    Games held by the organizers that this member can pick up now.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Lookups"])
    def get(self, request, member_id: str):
        pk = _parse_int(member_id)
        if pk is None:
            return _bad_id("member")

        member = Member.objects.filter(pk=pk).first()
        if member is None:
            return _not_found("Member", pk)

        games = member.items_to_receive.filter(status=CustodyStatus.AT_ORG).order_by("id")
        return Response(
            {
                "id": member.id,
                "first_name": member.first_name,
                "last_name": member.last_name,
                "games_to_retrieve": ItemSlimSerializer(games, many=True).data,
            }
        )


class ReadyToPickupView(APIView):
    """
    Members with at least one game waiting for them at the organizers' desk.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Lookups"])
    def get(self, request):
        members = (
            Member.objects
            .filter(items_to_receive__status=CustodyStatus.AT_ORG)
            .annotate(games_count=Count("items_to_receive"))
            .order_by("first_name", "last_name", "id")
        )
        return Response(
            [
                {"id": m.id, "name": m.full_name, "gamesCount": m.games_count}
                for m in members
            ]
        )
