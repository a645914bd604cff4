"""
Profile and Follow models for blog-platform.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class Profile(models.Model):
    """
    Blog-specific profile fields for a user.

    One profile exists per user; it is created by a post_save signal.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_profile",
    )
    age = models.PositiveSmallIntegerField(null=True, blank=True)
    profile_photo = models.URLField(blank=True)
    bookmarked_blogs = models.ManyToManyField(
        "blog_platform.Blog",
        blank=True,
        related_name="bookmarked_by",
    )
    password_changed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Tokens issued before this moment are rejected",
    )

    def __str__(self):
        return f"Profile of {self.user}"

    @classmethod
    def for_user(cls, user):
        """Return the user's profile, creating it for users that predate the app."""
        try:
            return user.blog_profile
        except cls.DoesNotExist:
            profile, _ = cls.objects.get_or_create(user=user)
            return profile

    def toggle_bookmark(self, blog):
        """
        Add or remove blog from bookmarks.

        Returns True if the blog is bookmarked afterwards.
        """
        if self.bookmarked_blogs.filter(pk=blog.pk).exists():
            self.bookmarked_blogs.remove(blog)
            return False
        self.bookmarked_blogs.add(blog)
        return True

    def mark_password_changed(self):
        self.password_changed_at = timezone.now()
        self.save(update_fields=["password_changed_at"])

    def password_changed_after(self, issued_at):
        """Check whether the password changed after a token's iat (seconds)."""
        if not self.password_changed_at:
            return False
        return int(self.password_changed_at.timestamp()) > issued_at


class Follow(models.Model):
    """A follower subscribed to an author's blogs."""

    follower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="following",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="followers",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["follower", "author"], name="unique_follow"),
            models.CheckConstraint(
                condition=~models.Q(follower=models.F("author")),
                name="no_self_follow",
            ),
        ]

    def __str__(self):
        return f"{self.follower} follows {self.author}"
