"""
Likes, comments and bookmarks.
"""
import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404

from ..api import ApiError, ApiView, api_response
from ..auth import login_required, optional_auth
from ..forms import CommentForm
from ..models import Blog, Comment, Like, Profile
from ..serializers import serialize_blog, serialize_comment
from .blogs import blog_queryset, get_visible_blog

logger = logging.getLogger(__name__)


class LikeToggleView(ApiView):
    @login_required
    def post(self, request, blog_id):
        blog = get_visible_blog(request.user, pk=blog_id)
        liked, like_count = Like.toggle(blog, request.user)
        return api_response(
            {"liked": liked, "likeCount": like_count},
            "Blog liked" if liked else "Blog unliked",
        )


class LikeStatusView(ApiView):
    @optional_auth
    def get(self, request, blog_id):
        blog = get_visible_blog(request.user, pk=blog_id)
        return api_response(
            {"liked": Like.is_liked(blog, request.user), "likeCount": blog.like_count},
            "Like status fetched",
        )


class LikedBlogsView(ApiView):
    @login_required
    def get(self, request):
        blogs = (
            blog_queryset()
            .filter(likes__user=request.user)
            .filter(Q(visibility=Blog.PUBLIC) | Q(author=request.user))
            .order_by("-likes__created_at", "-likes__pk")
        )
        return api_response([serialize_blog(b) for b in blogs], "Liked posts fetched successfully")


class BlogCommentsView(ApiView):
    @optional_auth
    def get(self, request, blog_id):
        blog = get_visible_blog(request.user, pk=blog_id)
        comments = blog.comments.select_related("user__blog_profile").order_by("-created_at", "-pk")
        return api_response(
            [serialize_comment(c) for c in comments],
            "Comments fetched successfully",
        )

    @login_required
    def post(self, request, blog_id):
        blog = get_visible_blog(request.user, pk=blog_id)
        form = CommentForm(self.data)
        if not form.is_valid():
            raise ApiError.from_form(form)

        comment = Comment.add(blog, request.user, form.cleaned_data["content"])
        return api_response(serialize_comment(comment), "Comment added successfully", status=201)


class CommentDeleteView(ApiView):
    @login_required
    def delete(self, request, comment_id):
        comment = get_object_or_404(Comment.objects.select_related("blog"), pk=comment_id)
        if not comment.can_delete(request.user):
            raise ApiError(403, "You are not authorized to delete this comment")

        comment.remove()
        logger.info("User %s deleted comment %s", request.user.pk, comment_id)
        return api_response(None, "Comment deleted successfully")


class UserCommentsView(ApiView):
    @login_required
    def get(self, request):
        comments = (
            Comment.objects.filter(user=request.user)
            .select_related("user__blog_profile", "blog")
            .order_by("-created_at")
        )
        data = []
        for comment in comments:
            item = serialize_comment(comment)
            item["blog"] = {"id": comment.blog_id, "title": comment.blog.title, "slug": comment.blog.slug}
            data.append(item)
        return api_response(data, "User comments fetched successfully")


class BookmarkToggleView(ApiView):
    @login_required
    def post(self, request, blog_id):
        blog = get_visible_blog(request.user, pk=blog_id)
        bookmarked = Profile.for_user(request.user).toggle_bookmark(blog)
        return api_response(
            {"bookmarked": bookmarked},
            "Blog bookmarked" if bookmarked else "Blog unbookmarked",
        )


class BookmarkedBlogsView(ApiView):
    @login_required
    def get(self, request):
        blogs = (
            blog_queryset()
            .filter(bookmarked_by__user=request.user)
            .filter(Q(visibility=Blog.PUBLIC) | Q(author=request.user))
        )
        return api_response([serialize_blog(b) for b in blogs], "Bookmarked blogs fetched successfully")
