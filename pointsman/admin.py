"""Pointsman admin (CORE only).

Contrib models have their own admin in their respective modules:
- pointsman.contrib.quests.admin: QuestAdmin, QuestProgressAdmin
- pointsman.contrib.rewards.admin: RewardAdmin, RewardClaimAdmin
- pointsman.contrib.inbox.admin: NotificationAdmin
"""

from django.contrib import admin
from django.utils.html import format_html

from pointsman.models import PointsAccount, PointsTransaction, ProcessedEvent

TIER_COLORS = {
    "bronze": "#cd7f32",
    "silver": "#c0c0c0",
    "gold": "#ffd700",
    "platinum": "#e5e4e2",
}


class AmountDisplayMixin:
    def amount_display(self, obj):
        if obj.amount > 0:
            return format_html('<span style="color:green">+{}</span>', obj.amount)
        return format_html('<span style="color:red">{}</span>', obj.amount)

    amount_display.short_description = "Баллы"


# ===========================================
# Inline Classes
# ===========================================


class PointsTransactionInline(AmountDisplayMixin, admin.TabularInline):
    model = PointsTransaction
    extra = 0
    fields = ["created_at", "transaction_type", "amount_display", "balance_after", "description", "reference"]
    readonly_fields = fields
    ordering = ["-created_at", "-id"]
    max_num = 0

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ===========================================
# PointsAccount Admin
# ===========================================


@admin.register(PointsAccount)
class PointsAccountAdmin(admin.ModelAdmin):
    list_display = [
        "account_id",
        "display_name",
        "balance",
        "lifetime_points",
        "tier_badge",
        "total_orders",
        "is_active",
        "created_at",
    ]
    list_filter = ["tier", "is_active", "welcome_bonus_received"]
    search_fields = ["account_id", "display_name"]
    readonly_fields = [
        "balance",
        "lifetime_points",
        "tier",
        "total_orders",
        "total_spent",
        "welcome_bonus_received",
        "created_at",
        "updated_at",
    ]
    inlines = [PointsTransactionInline]

    def tier_badge(self, obj):
        color = TIER_COLORS.get(obj.tier, "#6c757d")
        text_color = "#000" if obj.tier in ("gold", "silver", "platinum") else "#fff"
        return format_html(
            '<span style="background:{}; color:{}; padding:2px 8px; '
            'border-radius:3px; font-size:11px;">{} · {}%</span>',
            color,
            text_color,
            obj.get_tier_display(),
            obj.discount_percent,
        )

    tier_badge.short_description = "Уровень"


# ===========================================
# PointsTransaction Admin (read-only log)
# ===========================================


@admin.register(PointsTransaction)
class PointsTransactionAdmin(AmountDisplayMixin, admin.ModelAdmin):
    list_display = [
        "created_at",
        "account_code",
        "transaction_type",
        "amount_display",
        "balance_after",
        "description",
    ]
    list_filter = ["transaction_type"]
    search_fields = ["account__account_id", "description", "reference"]
    readonly_fields = [
        "account",
        "transaction_type",
        "amount",
        "balance_after",
        "description",
        "reference",
        "created_at",
        "created_by",
    ]
    date_hierarchy = "created_at"
    list_select_related = ["account"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def account_code(self, obj):
        return obj.account.account_id

    account_code.short_description = "Счёт"


@admin.register(ProcessedEvent)
class ProcessedEventAdmin(admin.ModelAdmin):
    list_display = ["nonce", "source", "processed_at"]
    list_filter = ["source"]
    search_fields = ["nonce"]
    readonly_fields = ["nonce", "source", "processed_at"]
