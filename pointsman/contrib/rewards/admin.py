"""Rewards admin."""

from django.contrib import admin
from django.utils.html import format_html

from pointsman.contrib.rewards.models import ClaimStatus, Reward, RewardClaim


class RewardClaimInline(admin.TabularInline):
    model = RewardClaim
    extra = 0
    fields = ["redemption_code", "account", "status", "claimed_at", "expires_at", "used_at"]
    readonly_fields = fields
    ordering = ["-claimed_at"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Reward)
class RewardAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "reward_type",
        "points_cost",
        "points_awarded",
        "stock_display",
        "is_featured",
        "is_active",
        "sort_order",
    ]
    list_filter = ["reward_type", "is_featured", "is_active"]
    list_editable = ["is_featured", "is_active", "sort_order"]
    search_fields = ["name", "promo_code"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [RewardClaimInline]

    def stock_display(self, obj):
        if obj.stock_remaining is None:
            return "∞"
        if obj.stock_remaining == 0:
            return format_html('<span style="color:red">{}</span>', 0)
        return obj.stock_remaining

    stock_display.short_description = "Остаток"


@admin.register(RewardClaim)
class RewardClaimAdmin(admin.ModelAdmin):
    list_display = [
        "redemption_code",
        "account",
        "reward_name",
        "points_cost_at_claim",
        "points_awarded_at_claim",
        "status_badge",
        "claimed_at",
        "expires_at",
    ]
    list_filter = ["status"]
    search_fields = ["redemption_code", "account__account_id", "reward_name"]
    readonly_fields = [
        "reward",
        "account",
        "redemption_code",
        "status",
        "reward_name",
        "points_cost_at_claim",
        "points_awarded_at_claim",
        "promo_code_at_claim",
        "claimed_at",
        "expires_at",
        "used_at",
    ]
    date_hierarchy = "claimed_at"

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def status_badge(self, obj):
        if obj.status == ClaimStatus.USED:
            color = "#6c757d"
        elif obj.is_expired:
            return format_html('<span style="color:#dc3545">{}</span>', "Истекла")
        else:
            color = "#198754"
        return format_html('<span style="color:{}">{}</span>', color, obj.get_status_display())

    status_badge.short_description = "Статус"
