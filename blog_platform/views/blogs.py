"""
Blog and category views.
"""
import logging

from django.core.paginator import EmptyPage, PageNotAnInteger, Paginator
from django.forms.models import model_to_dict
from django.http import Http404
from django.shortcuts import get_object_or_404

from ..api import ApiError, ApiView, api_response
from ..auth import login_required, optional_auth
from ..conf import blog_settings
from ..forms import BlogForm, BlogUpdateForm, CategoryForm
from ..models import Blog, Category, Follow
from ..ranking import SORT_CHOICES, SORT_LATEST, SORT_OLDEST, apply_sort
from ..serializers import serialize_blog, serialize_category

logger = logging.getLogger(__name__)

BLOG_UPDATE_FIELDS = ["title", "content", "slug", "visibility", "category"]


def blog_queryset():
    return Blog.objects.select_related("author__blog_profile", "category")


def get_visible_blog(user, **lookup):
    """Fetch a blog the user may see, hiding private blogs as 404."""
    blog = get_object_or_404(blog_queryset(), **lookup)
    if not blog.can_view(user):
        raise Http404("Blog not found")
    return blog


def get_owned_blog(user, blog_id, action):
    blog = get_object_or_404(blog_queryset(), pk=blog_id)
    if not blog.is_author(user):
        raise ApiError(403, f"You are not authorized to {action} this blog")
    return blog


def paginate(request, queryset):
    """Return (items, meta) for the page/limit query parameters."""
    try:
        limit = int(request.GET.get("limit", blog_settings.BLOGS_PER_PAGE))
    except ValueError:
        raise ApiError(400, "limit must be an integer")
    limit = max(1, min(limit, blog_settings.MAX_BLOGS_PER_PAGE))

    paginator = Paginator(queryset, limit)
    try:
        page = paginator.page(request.GET.get("page", 1))
    except PageNotAnInteger:
        raise ApiError(400, "page must be an integer")
    except EmptyPage:
        page = None

    items = list(page.object_list) if page else []
    meta = {
        "page": page.number if page else int(request.GET.get("page")),
        "limit": limit,
        "total": paginator.count,
        "totalPages": paginator.num_pages,
    }
    return items, meta


class BlogListView(ApiView):
    """List public blogs, ranked by the ``sort`` query parameter."""

    def get(self, request):
        sort = request.GET.get("sort", SORT_LATEST)
        if sort not in SORT_CHOICES:
            raise ApiError(400, f"sort must be one of: {', '.join(SORT_CHOICES)}")

        qs = blog_queryset().filter(visibility=Blog.PUBLIC)
        category = request.GET.get("category")
        if category:
            qs = qs.filter(category__slug=category)

        blogs, meta = paginate(request, apply_sort(qs, sort))
        return api_response(
            [serialize_blog(b) for b in blogs],
            "Blogs fetched successfully",
            meta=meta,
        )


class BlogCreateView(ApiView):
    @login_required
    def post(self, request):
        files = {"feature_image": request.FILES.get("featureImage") or request.FILES.get("feature_image")}
        form = BlogForm(self.data, files)
        if not form.is_valid():
            raise ApiError.from_form(form)

        blog = form.save(commit=False)
        blog.author = request.user
        blog.save()
        logger.info("User %s created blog %s", request.user.pk, blog.pk)
        return api_response(serialize_blog(blog), "Blog created successfully", status=201)


class BlogBySlugView(ApiView):
    @optional_auth
    def get(self, request, slug):
        blog = get_visible_blog(request.user, slug=slug)
        blog.increment_read_count()
        blog.refresh_from_db(fields=["read_count"])
        return api_response(serialize_blog(blog), "Blog fetched successfully")


class BlogDetailView(ApiView):
    @optional_auth
    def get(self, request, blog_id):
        blog = get_visible_blog(request.user, pk=blog_id)
        return api_response(serialize_blog(blog), "Blog fetched successfully")

    @login_required
    def patch(self, request, blog_id):
        blog = get_owned_blog(request.user, blog_id, "update")

        data = model_to_dict(blog, fields=BLOG_UPDATE_FIELDS)
        data.update({k: v for k, v in self.data.items() if k in BLOG_UPDATE_FIELDS and v not in (None, "")})
        form = BlogUpdateForm(data, instance=blog)
        if not form.is_valid():
            raise ApiError.from_form(form)

        blog = form.save()
        return api_response(serialize_blog(blog), "Blog updated successfully")

    @login_required
    def delete(self, request, blog_id):
        blog = get_owned_blog(request.user, blog_id, "delete")
        blog.delete()
        logger.info("User %s deleted blog %s", request.user.pk, blog_id)
        return api_response(None, "Blog deleted successfully")


class UserBlogsView(ApiView):
    @login_required
    def get(self, request):
        blogs = blog_queryset().filter(author=request.user).order_by("-created_at")
        return api_response([serialize_blog(b) for b in blogs], "User Blogs fetched successfully")


class BlogShareView(ApiView):
    @optional_auth
    def post(self, request, blog_id):
        blog = get_visible_blog(request.user, pk=blog_id)
        blog.increment_share_count()
        blog.refresh_from_db(fields=["share_count"])
        return api_response({"shareCount": blog.share_count}, "Share recorded")


class FollowingFeedView(ApiView):
    """Public blogs written by authors the user follows."""

    @login_required
    def get(self, request):
        sort = request.GET.get("sort", SORT_LATEST)
        if sort not in (SORT_LATEST, SORT_OLDEST):
            raise ApiError(400, "sort must be latest or oldest")

        author_ids = Follow.objects.filter(follower=request.user).values_list("author_id", flat=True)
        qs = blog_queryset().filter(visibility=Blog.PUBLIC, author_id__in=author_ids)
        blogs = apply_sort(qs, sort)
        return api_response(
            {
                "blogs": [serialize_blog(b) for b in blogs],
                "followingCount": len(author_ids),
            },
            "Following blogs fetched successfully",
        )


class CategoryListView(ApiView):
    def get(self, request):
        categories = Category.objects.order_by("name")
        return api_response(
            [serialize_category(c) for c in categories],
            "Categories fetched successfully",
        )


class CategoryCreateView(ApiView):
    @login_required
    def post(self, request):
        form = CategoryForm(self.data)
        if not form.is_valid():
            raise ApiError.from_form(form)

        category = form.save()
        return api_response(serialize_category(category), "Category created successfully", status=201)
