"""
Blog and Category models for blog-platform.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.text import slugify

from ..conf import blog_settings


def get_feature_image_path(instance, filename):
    """Generate upload path for blog feature images."""
    return timezone.now().strftime(blog_settings.FEATURE_IMAGE_UPLOAD_PATH) + filename


class Category(models.Model):
    """Flat category a blog is filed under."""

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)[:100]
        super().save(*args, **kwargs)

    @property
    def blog_count(self):
        """Return count of public blogs in this category."""
        return self.blogs.filter(visibility=Blog.PUBLIC).count()


class Blog(models.Model):
    """
    Blog post.

    Engagement counters are denormalized onto the row so feeds can be
    ranked without joins. They are only ever moved with F() expressions.
    """

    PUBLIC = "public"
    PRIVATE = "private"
    VISIBILITY_CHOICES = [
        (PUBLIC, "Public"),
        (PRIVATE, "Private"),
    ]

    title = models.CharField(max_length=blog_settings.TITLE_MAX_LENGTH)
    slug = models.SlugField(max_length=blog_settings.SLUG_MAX_LENGTH, unique=True)
    content = models.TextField()
    feature_image = models.FileField(upload_to=get_feature_image_path, blank=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blogs",
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="blogs",
    )
    visibility = models.CharField(
        max_length=20,
        choices=VISIBILITY_CHOICES,
        default=PUBLIC,
    )

    # Engagement stats
    like_count = models.PositiveIntegerField(default=0)
    comment_count = models.PositiveIntegerField(default=0)
    share_count = models.PositiveIntegerField(default=0)
    read_count = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["visibility", "-created_at"]),
            models.Index(fields=["author", "-created_at"]),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        # Only derived slugs are de-duplicated; an explicit slug must be unique
        if not self.slug and self.title:
            max_length = self._meta.get_field("slug").max_length
            base_slug = slugify(self.title)[:max_length]
            slug = base_slug
            counter = 1
            while Blog.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                suffix = f"-{counter}"
                slug = base_slug[:max_length - len(suffix)] + suffix
                counter += 1
            self.slug = slug

        if not self.created_at:
            self.created_at = timezone.now()

        super().save(*args, **kwargs)

    @property
    def is_public(self):
        return self.visibility == self.PUBLIC

    @property
    def preview(self):
        """Return truncated content for feed display."""
        if len(self.content) > 280:
            return self.content[:280] + "..."
        return self.content

    def is_author(self, user):
        return user is not None and user.is_authenticated and user.pk == self.author_id

    def can_view(self, user):
        """Check if user has permission to view this blog."""
        if self.is_public:
            return True
        # Private blogs are only visible to their author
        return self.is_author(user)

    def increment_read_count(self):
        """Increment read count atomically."""
        Blog.objects.filter(pk=self.pk).update(read_count=models.F("read_count") + 1)

    def increment_share_count(self):
        """Increment share count atomically."""
        Blog.objects.filter(pk=self.pk).update(share_count=models.F("share_count") + 1)

    def adjust_counter(self, field, delta):
        """
        Move an engagement counter by delta without letting it go negative.
        """
        qs = Blog.objects.filter(pk=self.pk)
        if delta < 0:
            qs = qs.filter(**{f"{field}__gte": -delta})
        qs.update(**{field: models.F(field) + delta})
