"""
Signal handlers for blog-platform.
"""
import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_profile(sender, instance, created, **kwargs):
    """Give every new user a blog profile."""
    if created:
        Profile.objects.get_or_create(user=instance)
        logger.debug("Created blog profile for user %s", instance.pk)
