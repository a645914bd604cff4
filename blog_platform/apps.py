"""Django app configuration for blog_platform."""
from django.apps import AppConfig


class BlogPlatformConfig(AppConfig):
    """Configuration for the blog platform app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "blog_platform"
    verbose_name = "Blog Platform"

    def ready(self):
        """Connect signal handlers."""
        from . import signals  # noqa: F401
