"""
Plain-dict representations of blog-platform models for JSON responses.
"""


def _iso(value):
    return value.isoformat() if value else None


def author_summary(user):
    profile = getattr(user, "blog_profile", None)
    return {
        "id": user.pk,
        "username": user.get_username(),
        "firstName": user.first_name,
        "lastName": user.last_name,
        "profilePhoto": profile.profile_photo if profile else "",
    }


def serialize_user(user):
    """Full representation of the authenticated user."""
    profile = getattr(user, "blog_profile", None)
    data = author_summary(user)
    data.update({
        "email": user.email,
        "age": profile.age if profile else None,
        "bookmarkedBlogs": (
            list(profile.bookmarked_blogs.values_list("pk", flat=True)) if profile else []
        ),
        "dateJoined": _iso(user.date_joined),
    })
    return data


def serialize_category(category):
    return {
        "id": category.pk,
        "name": category.name,
        "slug": category.slug,
    }


def serialize_blog(blog):
    data = {
        "id": blog.pk,
        "title": blog.title,
        "slug": blog.slug,
        "content": blog.content,
        "featureImage": blog.feature_image.url if blog.feature_image else None,
        "visibility": blog.visibility,
        "author": author_summary(blog.author),
        "category": serialize_category(blog.category),
        "likeCount": blog.like_count,
        "commentCount": blog.comment_count,
        "shareCount": blog.share_count,
        "readCount": blog.read_count,
        "createdAt": _iso(blog.created_at),
        "updatedAt": _iso(blog.updated_at),
    }
    score = getattr(blog, "score", None)
    if score is not None:
        data["score"] = score
    return data


def serialize_comment(comment):
    return {
        "id": comment.pk,
        "blogId": comment.blog_id,
        "user": author_summary(comment.user),
        "content": comment.content,
        "createdAt": _iso(comment.created_at),
    }


def serialize_follow(follow):
    return {
        "id": follow.pk,
        "author": dict(author_summary(follow.author), email=follow.author.email),
        "createdAt": _iso(follow.created_at),
    }
