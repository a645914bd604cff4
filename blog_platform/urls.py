"""
URL configuration for blog-platform.

Include in your project urls.py:

    path('api/v1/', include('blog_platform.urls')),
"""
from django.urls import path

from . import views

app_name = "blog_platform"

urlpatterns = [
    # Authentication
    path("auth/sign-up", views.SignUpView.as_view(), name="sign_up"),
    path("auth/login", views.LoginView.as_view(), name="login"),
    path("auth/log-out", views.LogoutView.as_view(), name="log_out"),
    path("auth/me", views.MeView.as_view(), name="me"),
    path("auth/refresh-token", views.RefreshTokenView.as_view(), name="refresh_token"),
    path("auth/change-password", views.ChangePasswordView.as_view(), name="change_password"),

    # Blog lists and CRUD
    path("blogs/", views.BlogListView.as_view(), name="blog_list"),
    path("blogs/create", views.BlogCreateView.as_view(), name="blog_create"),
    path("blogs/slug/<slug:slug>", views.BlogBySlugView.as_view(), name="blog_by_slug"),
    path("blogs/user-blogs", views.UserBlogsView.as_view(), name="user_blogs"),
    path("blogs/following", views.FollowingFeedView.as_view(), name="following_feed"),
    path("blogs/<int:blog_id>", views.BlogDetailView.as_view(), name="blog_detail"),
    path("blogs/<int:blog_id>/share", views.BlogShareView.as_view(), name="blog_share"),

    # Categories
    path("blogs/categories", views.CategoryListView.as_view(), name="category_list"),
    path("blogs/category", views.CategoryCreateView.as_view(), name="category_create"),

    # Likes
    path("blogs/<int:blog_id>/like", views.LikeToggleView.as_view(), name="like_toggle"),
    path("blogs/<int:blog_id>/like-status", views.LikeStatusView.as_view(), name="like_status"),
    path("blogs/liked-posts", views.LikedBlogsView.as_view(), name="liked_posts"),

    # Comments
    path("blogs/<int:blog_id>/comments", views.BlogCommentsView.as_view(), name="blog_comments"),
    path("blogs/comments/<int:comment_id>", views.CommentDeleteView.as_view(), name="comment_delete"),
    path("blogs/comments", views.UserCommentsView.as_view(), name="user_comments"),

    # Bookmarks
    path("blogs/<int:blog_id>/bookmark", views.BookmarkToggleView.as_view(), name="bookmark_toggle"),
    path("blogs/bookmarks", views.BookmarkedBlogsView.as_view(), name="bookmarks"),

    # Follows
    path("connections/follow", views.FollowView.as_view(), name="follow"),
    path("connections/unfollow", views.UnfollowView.as_view(), name="unfollow"),
    path("connections/followed-users", views.FollowedUsersView.as_view(), name="followed_users"),
    path("connections/check-follow", views.CheckFollowView.as_view(), name="check_follow"),
]
