# logistics_core/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .filters import CustodyEventFilter, ItemFilter
from .models import CustodyEvent, Item, Member
from .serializers import (
    CustodyEventSerializer,
    ItemSerializer,
    MemberSerializer,
)


# ===============================================================
# System
# ===============================================================
class HealthCheckView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(tags=["System"])
    def get(self, request):
        return Response({"status": "ok", "service": "mathtrade-logistics"})


# ===============================================================
# Members
# ===============================================================
class MemberViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Member.objects.all()
    serializer_class = MemberSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["bgg_user", "email"]


# ===============================================================
# Items
# ===============================================================
class ItemViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only: item status only changes through the bulk custody update.
    """
    queryset = Item.objects.select_related("owner", "recipient").all()
    serializer_class = ItemSerializer
    permission_classes = [IsAuthenticated]
    filterset_class = ItemFilter


# ===============================================================
# Custody audit log
# ===============================================================
class CustodyEventViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = CustodyEvent.objects.all()
    serializer_class = CustodyEventSerializer
    permission_classes = [IsAuthenticated]
    filterset_class = CustodyEventFilter
