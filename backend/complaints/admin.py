from django.contrib import admin

from .models import Comment, Complaint, ComplaintStatus


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    readonly_fields = ("author", "message", "is_private", "created_at")


@admin.register(ComplaintStatus)
class ComplaintStatusAdmin(admin.ModelAdmin):
    list_display = ("code", "display")


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "status", "priority", "is_anonymous",
                    "assigned_officer", "created_at")
    list_filter = ("status", "priority", "is_anonymous")
    search_fields = ("title", "description", "category")
    inlines = [CommentInline]


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("complaint", "author", "is_private", "created_at")
    list_filter = ("is_private",)
