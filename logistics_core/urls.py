# logistics_core/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter

# -------------------------------------------------
# Core read-only API ViewSets
# -------------------------------------------------
from .views import (
    HealthCheckView,
    MemberViewSet,
    ItemViewSet,
    CustodyEventViewSet,
)

# -------------------------------------------------
# Custody workflow (bulk update + introspection)
# -------------------------------------------------
from .views_custody import (
    BulkStatusUpdateView,
    CustodyDefinitionView,
    CustodyAllowedActionsView,
)

# -------------------------------------------------
# Scanner lookups
# -------------------------------------------------
from .views_lookup import (
    ItemDetailView,
    ItemHistoryView,
    MemberGamesView,
    MemberGamesToRetrieveView,
    ReadyToPickupView,
)


app_name = "logistics_core"

# -------------------------------------------------
# Router
# -------------------------------------------------
router = DefaultRouter()
router.register(r"items", ItemViewSet, basename="item")
router.register(r"member-list", MemberViewSet, basename="member")
router.register(r"custody-events", CustodyEventViewSet, basename="custody-event")


urlpatterns = [
    path("", include(router.urls)),

    # ============================================================
    # System
    # ============================================================
    path("health/", HealthCheckView.as_view(), name="health_check"),

    # ============================================================
    # Custody workflow
    # ============================================================
    # Must stay above games/<item_id>/
    path("games/update-status/", BulkStatusUpdateView.as_view(), name="games-update-status"),
    path("custody/definition/", CustodyDefinitionView.as_view(), name="custody-definition"),
    path("custody/allowed/", CustodyAllowedActionsView.as_view(), name="custody-allowed"),

    # ============================================================
    # Scanner lookups
    # ============================================================
    path("games/<str:item_id>/", ItemDetailView.as_view(), name="game-detail"),
    path("games/<str:item_id>/history/", ItemHistoryView.as_view(), name="game-history"),
    path("members/<str:member_id>/", MemberGamesView.as_view(), name="member-games"),
    path(
        "members/<str:member_id>/games-to-retrieve/",
        MemberGamesToRetrieveView.as_view(),
        name="member-games-to-retrieve",
    ),
    path("ready-to-pickup/", ReadyToPickupView.as_view(), name="ready-to-pickup"),
]
