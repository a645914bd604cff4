"""
Tests for blog-platform models.
"""
import pytest
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from blog_platform.models import Blog, Category, Comment, Follow, Like, Profile

User = get_user_model()


class TestCategory:
    """Tests for Category model."""

    def test_create_category(self, db):
        """Test creating a category derives its slug."""
        cat = Category.objects.create(name="My Category")
        assert cat.name == "My Category"
        assert cat.slug == "my-category"

    def test_slug_unique(self, db, category):
        with pytest.raises(IntegrityError):
            Category.objects.create(name="Another", slug=category.slug)

    def test_blog_count_ignores_private(self, db, category, user):
        Blog.objects.create(title="Public one", content="x", author=user, category=category)
        Blog.objects.create(
            title="Private one", content="x", author=user, category=category, visibility=Blog.PRIVATE
        )
        assert category.blog_count == 1


class TestBlog:
    """Tests for Blog model."""

    def test_create_blog(self, db, user, category):
        blog = Blog.objects.create(
            title="Hello World",
            content="My first blog!",
            author=user,
            category=category,
        )
        assert blog.slug == "hello-world"
        assert blog.visibility == Blog.PUBLIC
        assert blog.created_at is not None
        assert (blog.like_count, blog.comment_count, blog.read_count, blog.share_count) == (0, 0, 0, 0)

    def test_derived_slug_is_deduplicated(self, db, user, category):
        first = Blog.objects.create(title="Same Title", content="a", author=user, category=category)
        second = Blog.objects.create(title="Same Title", content="b", author=user, category=category)
        assert first.slug == "same-title"
        assert second.slug == "same-title-1"

    def test_derived_slug_fits_column_with_suffix(self, db, user, category):
        max_length = Blog._meta.get_field("slug").max_length
        title = "a" * max_length
        first = Blog.objects.create(title=title, content="a", author=user, category=category)
        second = Blog.objects.create(title=title, content="b", author=user, category=category)

        assert len(first.slug) == max_length
        assert len(second.slug) == max_length
        assert second.slug.endswith("-1")
        assert second.slug != first.slug

    def test_explicit_duplicate_slug_fails(self, db, user, category, blog):
        with pytest.raises(IntegrityError):
            Blog.objects.create(
                title="Different", content="c", slug=blog.slug, author=user, category=category
            )

    def test_preview_truncation(self, db, user, category):
        blog = Blog.objects.create(title="Long one", content="x" * 500, author=user, category=category)
        assert len(blog.preview) == 283  # 280 + "..."

    def test_public_visibility(self, db, blog, other_user):
        assert blog.can_view(None)
        assert blog.can_view(other_user)

    def test_private_visibility(self, db, user, other_user, category):
        blog = Blog.objects.create(
            title="Private", content="Secret", author=user, category=category, visibility=Blog.PRIVATE
        )
        assert blog.can_view(user)
        assert not blog.can_view(other_user)
        assert not blog.can_view(None)

    def test_increment_read_count(self, db, blog):
        blog.increment_read_count()
        blog.increment_read_count()
        blog.refresh_from_db()
        assert blog.read_count == 2

    def test_counter_never_negative(self, db, blog):
        blog.adjust_counter("comment_count", -1)
        blog.refresh_from_db()
        assert blog.comment_count == 0


class TestLike:
    """Tests for Like model."""

    def test_toggle_like_create(self, db, blog, user):
        liked, count = Like.toggle(blog, user)
        assert liked is True
        assert count == 1
        assert blog.likes.count() == 1

    def test_toggle_like_twice_removes(self, db, blog, user):
        Like.toggle(blog, user)
        liked, count = Like.toggle(blog, user)
        assert liked is False
        assert count == 0
        assert blog.likes.count() == 0

    def test_likes_from_different_users(self, db, blog, user, other_user):
        Like.toggle(blog, user)
        liked, count = Like.toggle(blog, other_user)
        assert liked
        assert count == 2

    def test_unique_per_user(self, db, blog, user):
        Like.objects.create(blog=blog, user=user)
        with pytest.raises(IntegrityError):
            Like.objects.create(blog=blog, user=user)

    def test_toggle_survives_concurrent_like(self, db, blog, user, monkeypatch):
        """A like created between the delete and the insert still counts once."""
        Like.toggle(blog, user)
        monkeypatch.setattr(QuerySet, "delete", lambda self: (0, {}))

        liked, count = Like.toggle(blog, user)
        assert liked is True
        assert count == 1
        assert Like.objects.filter(blog=blog, user=user).count() == 1

    def test_is_liked(self, db, blog, user, other_user):
        Like.toggle(blog, user)
        assert Like.is_liked(blog, user)
        assert not Like.is_liked(blog, other_user)
        assert not Like.is_liked(blog, None)


class TestComment:
    """Tests for Comment model."""

    def test_add_comment_bumps_counter(self, db, blog, user):
        comment = Comment.add(blog, user, "Great blog!")
        blog.refresh_from_db()
        assert comment.content == "Great blog!"
        assert blog.comment_count == 1

    def test_remove_comment_decrements_counter(self, db, blog, user):
        comment = Comment.add(blog, user, "Soon gone")
        comment.remove()
        blog.refresh_from_db()
        assert blog.comment_count == 0
        assert not Comment.objects.exists()

    def test_can_delete(self, db, blog, user, other_user):
        third = User.objects.create_user(username="third", password="pass")
        comment = Comment.add(blog, other_user, "Hi")
        assert comment.can_delete(other_user)  # commenter
        assert comment.can_delete(user)  # blog author
        assert not comment.can_delete(third)


class TestProfile:
    """Tests for Profile model."""

    def test_profile_created_with_user(self, db, user):
        assert Profile.objects.filter(user=user).exists()

    def test_toggle_bookmark(self, db, user, blog):
        profile = user.blog_profile
        assert profile.toggle_bookmark(blog) is True
        assert list(profile.bookmarked_blogs.all()) == [blog]
        assert profile.toggle_bookmark(blog) is False
        assert profile.bookmarked_blogs.count() == 0

    def test_for_user_creates_missing_profile(self, db, user):
        Profile.objects.filter(user=user).delete()
        fresh = User.objects.get(pk=user.pk)

        profile = Profile.for_user(fresh)
        assert profile.pk is not None
        assert Profile.objects.filter(user=user).count() == 1

    def test_password_changed_after(self, db, user):
        profile = user.blog_profile
        assert not profile.password_changed_after(0)

        profile.mark_password_changed()
        issued_before = int(profile.password_changed_at.timestamp()) - 10
        assert profile.password_changed_after(issued_before)
        assert not profile.password_changed_after(issued_before + 20)


class TestFollow:
    """Tests for Follow model."""

    def test_follow_pair_unique(self, db, user, other_user):
        Follow.objects.create(follower=user, author=other_user)
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Follow.objects.create(follower=user, author=other_user)

    def test_reverse_follow_allowed(self, db, user, other_user):
        Follow.objects.create(follower=user, author=other_user)
        Follow.objects.create(follower=other_user, author=user)
        assert Follow.objects.count() == 2

    def test_self_follow_rejected(self, db, user):
        with pytest.raises(IntegrityError):
            Follow.objects.create(follower=user, author=user)
