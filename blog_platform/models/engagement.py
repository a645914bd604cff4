"""
Like and Comment models for blog-platform.
"""
from django.conf import settings
from django.db import IntegrityError, models, transaction

from ..conf import blog_settings


class Comment(models.Model):
    """Comment left by a user on a blog."""

    blog = models.ForeignKey(
        "blog_platform.Blog",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_comments",
    )
    content = models.TextField(max_length=blog_settings.COMMENT_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["blog", "-created_at"]),
        ]

    def __str__(self):
        return f"Comment by {self.user} on {self.blog}"

    @property
    def preview(self):
        """Return truncated content for admin display."""
        if len(self.content) > 100:
            return self.content[:100] + "..."
        return self.content

    @classmethod
    def add(cls, blog, user, content):
        """Create a comment and bump the blog's comment counter."""
        with transaction.atomic():
            comment = cls.objects.create(blog=blog, user=user, content=content)
            blog.adjust_counter("comment_count", 1)
        return comment

    def can_delete(self, user):
        """The commenter and the blog's author may remove a comment."""
        if user is None or not user.is_authenticated:
            return False
        return user.pk == self.user_id or user.pk == self.blog.author_id

    def remove(self):
        """Delete the comment and decrement the blog's comment counter."""
        with transaction.atomic():
            blog = self.blog
            self.delete()
            blog.adjust_counter("comment_count", -1)


class Like(models.Model):
    """A user's like on a blog. At most one per (blog, user)."""

    blog = models.ForeignKey(
        "blog_platform.Blog",
        on_delete=models.CASCADE,
        related_name="likes",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_likes",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["blog", "user"], name="unique_blog_like"),
        ]

    def __str__(self):
        return f"{self.user} likes {self.blog}"

    @classmethod
    def toggle(cls, blog, user):
        """
        Toggle a like on a blog.

        If the user already likes the blog, the like is removed,
        otherwise it is added. The blog's like counter follows.

        Returns (liked, like_count)
        """
        with transaction.atomic():
            deleted, _ = cls.objects.filter(blog=blog, user=user).delete()
            if deleted:
                blog.adjust_counter("like_count", -1)
                liked = False
            else:
                liked = True
                try:
                    with transaction.atomic():
                        cls.objects.create(blog=blog, user=user)
                except IntegrityError:
                    # A concurrent request already created the like and moved the counter
                    pass
                else:
                    blog.adjust_counter("like_count", 1)

        blog.refresh_from_db(fields=["like_count"])
        return liked, blog.like_count

    @classmethod
    def is_liked(cls, blog, user):
        if user is None or not user.is_authenticated:
            return False
        return cls.objects.filter(blog=blog, user=user).exists()
