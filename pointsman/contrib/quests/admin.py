"""Quests admin."""

from django.contrib import admin
from django.utils.html import format_html

from pointsman.contrib.quests.models import Quest, QuestProgress


class QuestProgressInline(admin.TabularInline):
    model = QuestProgress
    extra = 0
    fields = ["account", "current_value", "is_completed", "reward_claimed", "completion_count", "last_completed_at"]
    readonly_fields = fields
    ordering = ["-updated_at"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Quest)
class QuestAdmin(admin.ModelAdmin):
    list_display = [
        "slug",
        "title",
        "quest_type",
        "target_value",
        "reward_points",
        "is_repeatable",
        "is_active",
        "sort_order",
    ]
    list_filter = ["quest_type", "is_repeatable", "is_active"]
    list_editable = ["is_active", "sort_order"]
    search_fields = ["slug", "title"]
    prepopulated_fields = {"slug": ["title"]}
    readonly_fields = ["created_at", "updated_at"]
    inlines = [QuestProgressInline]


@admin.register(QuestProgress)
class QuestProgressAdmin(admin.ModelAdmin):
    list_display = [
        "account",
        "quest",
        "progress_display",
        "state_display",
        "completion_count",
        "last_completed_at",
    ]
    list_filter = ["quest", "is_completed", "reward_claimed"]
    search_fields = ["account__account_id", "quest__slug"]
    raw_id_fields = ["account"]
    list_select_related = ["account", "quest"]
    readonly_fields = [
        "account",
        "quest",
        "current_value",
        "is_completed",
        "reward_claimed",
        "completion_count",
        "last_completed_at",
        "created_at",
        "updated_at",
    ]

    def has_add_permission(self, request):
        return False

    def progress_display(self, obj):
        return format_html(
            "{}/{} ({}%)",
            obj.current_value,
            obj.quest.target_value,
            int(obj.progress_percent),
        )

    progress_display.short_description = "Прогресс"

    def state_display(self, obj):
        colors = {
            "not_started": "#6c757d",
            "in_progress": "#0d6efd",
            "completed": "#198754",
            "claimed": "#adb5bd",
        }
        return format_html(
            '<span style="color:{}">{}</span>',
            colors.get(obj.state, "#6c757d"),
            obj.state.label,
        )

    state_display.short_description = "Статус"
