from django.contrib import admin

from .models import Escalation


@admin.register(Escalation)
class EscalationAdmin(admin.ModelAdmin):
    list_display = ("id", "complaint", "escalated_to_role", "escalated_by", "escalated_at", "resolved")
    list_filter = ("resolved", "escalated_to_role")
    search_fields = ("reason", "complaint__title")
    readonly_fields = ("complaint", "escalated_to_role", "escalated_by", "reason", "escalated_at")
