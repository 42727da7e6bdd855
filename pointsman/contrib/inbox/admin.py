"""Inbox admin."""

from django.contrib import admin

from pointsman.contrib.inbox.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["created_at", "account", "title", "is_read"]
    list_filter = ["is_read"]
    search_fields = ["account__account_id", "title", "message", "reference"]
    raw_id_fields = ["account"]
    readonly_fields = ["created_at"]
    date_hierarchy = "created_at"
