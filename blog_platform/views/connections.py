"""
Follow relationships between readers and authors.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from ..api import ApiError, ApiView, api_response
from ..auth import login_required
from ..models import Follow
from ..serializers import serialize_follow

logger = logging.getLogger(__name__)


def get_author_id(data):
    """Read and validate the authorId field of a request payload."""
    author_id = data.get("authorId")
    if author_id in (None, ""):
        raise ApiError(400, "Author ID is required")
    try:
        return int(author_id)
    except (TypeError, ValueError):
        raise ApiError(400, "Author ID must be an integer")


class FollowView(ApiView):
    @login_required
    def post(self, request):
        author_id = get_author_id(self.data)
        if author_id == request.user.pk:
            raise ApiError(400, "You cannot follow yourself")

        author = get_user_model().objects.filter(pk=author_id, is_active=True).first()
        if author is None:
            raise ApiError(404, "Author not found")

        try:
            with transaction.atomic():
                follow = Follow.objects.create(follower=request.user, author=author)
        except IntegrityError:
            raise ApiError(400, "Already following this user")

        logger.info("User %s followed %s", request.user.pk, author_id)
        return api_response(serialize_follow(follow), "Following successfully")


class UnfollowView(ApiView):
    @login_required
    def post(self, request):
        author_id = get_author_id(self.data)
        deleted, _ = Follow.objects.filter(follower=request.user, author_id=author_id).delete()
        if not deleted:
            raise ApiError(404, "Follow relationship not found")

        logger.info("User %s unfollowed %s", request.user.pk, author_id)
        return api_response({"authorId": author_id}, "Un-followed successfully")


class FollowedUsersView(ApiView):
    @login_required
    def get(self, request):
        follows = Follow.objects.filter(follower=request.user).select_related("author__blog_profile")
        return api_response(
            [serialize_follow(f) for f in follows],
            "Followed users fetched successfully",
        )


class CheckFollowView(ApiView):
    @login_required
    def post(self, request):
        author_id = get_author_id(self.data)
        is_following = Follow.objects.filter(follower=request.user, author_id=author_id).exists()
        return api_response({"isFollowing": is_following}, "Follow status fetched")
