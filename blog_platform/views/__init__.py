"""
Views for blog-platform.
"""
from .auth import (
    ChangePasswordView,
    LoginView,
    LogoutView,
    MeView,
    RefreshTokenView,
    SignUpView,
)
from .blogs import (
    BlogBySlugView,
    BlogCreateView,
    BlogDetailView,
    BlogListView,
    BlogShareView,
    CategoryCreateView,
    CategoryListView,
    FollowingFeedView,
    UserBlogsView,
)
from .connections import CheckFollowView, FollowedUsersView, FollowView, UnfollowView
from .engagement import (
    BlogCommentsView,
    BookmarkedBlogsView,
    BookmarkToggleView,
    CommentDeleteView,
    LikedBlogsView,
    LikeStatusView,
    LikeToggleView,
    UserCommentsView,
)
