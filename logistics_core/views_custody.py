# logistics_core/views_custody.py
from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .custody import CUSTODY_STATES, allowed_actions, custody_definition, normalize_status
from .serializers import StatusUpdateRequestSerializer, StatusUpdateResponseSerializer
from .services.custody_bulk import CustodyError, InvalidRequest, bulk_status_update

logger = logging.getLogger(__name__)


def _failure(exc: CustodyError) -> Response:
    logger.info("Bulk status update refused (%s): %s", exc.status_code, exc.message)
    return Response({"success": False, "message": exc.message}, status=exc.status_code)


# ===============================================================
# Bulk status update
# ===============================================================

class BulkStatusUpdateView(APIView):
    """
    POST → move a batch of items through the custody workflow

    Expected payload:
      {
        "itemIds": [21, 1144],
        "status": "delivered",
        "deliveredByUserId": 7,
        "userRole": "VOLUNTEER"
      }

    Behavior:
    - Malformed input → 400 {"success": false, "message": ...}
    - Non-ADMIN asking for "pending" → 403, nothing changes
    - Unknown item ids are left out of "updatedGames"
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Custody"],
        request=StatusUpdateRequestSerializer,
        responses={
            200: StatusUpdateResponseSerializer,
            400: StatusUpdateResponseSerializer,
            403: StatusUpdateResponseSerializer,
        },
    )
    def post(self, request):
        try:
            data = request.data
        except (ParseError, UnsupportedMediaType) as exc:
            return _failure(InvalidRequest(f"Malformed request body: {exc.detail}"))

        if not isinstance(data, dict):
            return _failure(InvalidRequest("Request body must be a JSON object."))

        try:
            updated = bulk_status_update(
                item_ids=data.get("itemIds"),
                action=data.get("status"),
                acting_user_id=data.get("deliveredByUserId"),
                acting_role=data.get("userRole"),
            )
        except CustodyError as exc:
            return _failure(exc)

        return Response({"success": True, "updatedGames": updated})


# ===============================================================
# Custody introspection (read-only)
# ===============================================================

class CustodyDefinitionView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Custody"])
    def get(self, request):
        return Response(custody_definition())


class CustodyAllowedActionsView(APIView):
    """
    GET ?status=at_org&role=VOLUNTEER → actions that would move such an item.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Custody"],
        parameters=[
            OpenApiParameter("status", str, required=True),
            OpenApiParameter("role", str, required=False),
        ],
    )
    def get(self, request):
        current = normalize_status(request.query_params.get("status"))
        if current not in CUSTODY_STATES:
            return Response(
                {"message": f"Unknown status {current!r}."},
                status=400,
            )

        role = request.query_params.get("role") or None
        return Response(
            {
                "status": current,
                "role": role,
                "allowed": allowed_actions(current, role),
            }
        )
