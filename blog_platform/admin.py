"""
Django admin configuration for blog_platform.
"""
from django.contrib import admin

from .models import Blog, Category, Comment, Follow, Like, Profile


class CommentInline(admin.TabularInline):
    """Inline for reviewing comments on a blog."""

    model = Comment
    extra = 0
    raw_id_fields = ["user"]
    fields = ["user", "content", "created_at"]
    readonly_fields = ["created_at"]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "blog_count", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ["created_at"]


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "author",
        "visibility",
        "category",
        "like_count",
        "comment_count",
        "read_count",
        "created_at",
    ]
    list_filter = ["visibility", "category", "created_at"]
    search_fields = ["title", "content", "author__username"]
    raw_id_fields = ["author", "category"]
    date_hierarchy = "created_at"
    inlines = [CommentInline]
    readonly_fields = [
        "like_count",
        "comment_count",
        "share_count",
        "read_count",
        "created_at",
        "updated_at",
    ]
    prepopulated_fields = {"slug": ("title",)}

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "feature_image", "author")
        }),
        ("Taxonomy & Visibility", {
            "fields": ("category", "visibility")
        }),
        ("Engagement", {
            "fields": ("like_count", "comment_count", "share_count", "read_count"),
            "classes": ("collapse",),
        }),
        ("Metadata", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["make_public", "make_private"]

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    @admin.action(description="Make selected blogs public")
    def make_public(self, request, queryset):
        updated = queryset.update(visibility=Blog.PUBLIC)
        self.message_user(request, f"{updated} blogs made public.")

    @admin.action(description="Make selected blogs private")
    def make_private(self, request, queryset):
        updated = queryset.update(visibility=Blog.PRIVATE)
        self.message_user(request, f"{updated} blogs made private.")


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["preview", "user", "blog", "created_at"]
    search_fields = ["content", "user__username", "blog__title"]
    raw_id_fields = ["user", "blog"]
    readonly_fields = ["created_at"]

    def delete_model(self, request, obj):
        obj.remove()


@admin.register(Like)
class LikeAdmin(admin.ModelAdmin):
    list_display = ["user", "blog", "created_at"]
    raw_id_fields = ["user", "blog"]
    readonly_fields = ["created_at"]


@admin.register(Follow)
class FollowAdmin(admin.ModelAdmin):
    list_display = ["follower", "author", "created_at"]
    search_fields = ["follower__username", "author__username"]
    raw_id_fields = ["follower", "author"]
    readonly_fields = ["created_at"]


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ["user", "age", "password_changed_at"]
    search_fields = ["user__username", "user__email"]
    raw_id_fields = ["user"]
    filter_horizontal = ["bookmarked_blogs"]
    readonly_fields = ["password_changed_at"]
