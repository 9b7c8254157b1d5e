# logistics_core/admin.py

from django.contrib import admin

from .models import CustodyEvent, Item, Member


# =============================================================
# Custody events (READ-ONLY AUDIT LOG)
# =============================================================

@admin.register(CustodyEvent)
class CustodyEventAdmin(admin.ModelAdmin):
    list_display = (
        "item_id",
        "action",
        "from_status",
        "to_status",
        "actor_id",
        "role",
        "created_at",
    )
    list_filter = (
        "action",
        "from_status",
        "to_status",
        "role",
    )
    search_fields = (
        "item_id",
        "actor_id",
    )
    ordering = ("-created_at",)

    readonly_fields = [f.name for f in CustodyEvent._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =============================================================
# Members and items
# =============================================================

@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("id", "first_name", "last_name", "bgg_user", "email")
    search_fields = ("first_name", "last_name", "bgg_user", "email")


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "title",
        "status",
        "owner",
        "recipient",
        "assigned_trade_code",
        "box_number",
    )
    list_filter = ("status",)
    search_fields = ("title", "owner__first_name", "recipient__first_name")
    raw_id_fields = ("owner", "recipient")
    # Status moves only through the custody workflow.
    readonly_fields = ("status", "created_at", "updated_at")
