"""
Input validation for blog-platform endpoints.
"""
from django import forms
from django.contrib.auth import get_user_model, password_validation
from django.utils.text import slugify

from .conf import blog_settings
from .models import Blog, Category, Comment, Profile


class BlogForm(forms.ModelForm):
    """Create or update a blog. The slug is derived from the title when omitted."""

    class Meta:
        model = Blog
        fields = ["title", "content", "slug", "visibility", "category", "feature_image"]
        error_messages = {
            "category": {"invalid_choice": "Category does not exist"},
            "slug": {"unique": "A blog with this slug already exists"},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["slug"].required = False
        self.fields["visibility"].required = False

    def clean_title(self):
        title = self.cleaned_data["title"].strip()
        if len(title) < blog_settings.TITLE_MIN_LENGTH:
            raise forms.ValidationError(
                f"Title must be at least {blog_settings.TITLE_MIN_LENGTH} characters"
            )
        return title

    def clean_content(self):
        content = self.cleaned_data["content"]
        if not content.strip():
            raise forms.ValidationError("Content is required")
        return content

    def clean_visibility(self):
        return self.cleaned_data.get("visibility") or Blog.PUBLIC

    def clean_feature_image(self):
        image = self.cleaned_data.get("feature_image")
        content_type = getattr(image, "content_type", None)
        if content_type and content_type not in blog_settings.ALLOWED_IMAGE_TYPES:
            raise forms.ValidationError("Only image files are allowed")
        return image


class BlogUpdateForm(BlogForm):
    """Partial update of an existing blog; the feature image is kept."""

    class Meta(BlogForm.Meta):
        fields = ["title", "content", "slug", "visibility", "category"]


class CategoryForm(forms.ModelForm):
    class Meta:
        model = Category
        fields = ["name", "slug"]
        error_messages = {
            "slug": {"unique": "A category with this slug already exists"},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["slug"].required = False

    def clean(self):
        cleaned_data = super().clean()
        if not cleaned_data.get("slug") and cleaned_data.get("name"):
            cleaned_data["slug"] = slugify(cleaned_data["name"])[:100]
        return cleaned_data


class CommentForm(forms.ModelForm):
    class Meta:
        model = Comment
        fields = ["content"]

    def clean_content(self):
        content = self.cleaned_data["content"].strip()
        if not content:
            raise forms.ValidationError("Comment content is required")
        return content


class SignUpForm(forms.Form):
    username = forms.CharField(max_length=150)
    email = forms.EmailField()
    password = forms.CharField()
    first_name = forms.CharField(max_length=150, required=False)
    last_name = forms.CharField(max_length=150, required=False)
    age = forms.IntegerField(min_value=0, max_value=150, required=False)
    profile_photo = forms.URLField(required=False)

    def clean_username(self):
        username = self.cleaned_data["username"]
        if get_user_model().objects.filter(username__iexact=username).exists():
            raise forms.ValidationError("Username is already taken")
        return username

    def clean_email(self):
        email = self.cleaned_data["email"].lower()
        if get_user_model().objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("Email is already registered")
        return email

    def clean_password(self):
        password = self.cleaned_data["password"]
        password_validation.validate_password(password)
        return password

    def save(self):
        User = get_user_model()
        user = User.objects.create_user(
            username=self.cleaned_data["username"],
            email=self.cleaned_data["email"],
            password=self.cleaned_data["password"],
            first_name=self.cleaned_data["first_name"],
            last_name=self.cleaned_data["last_name"],
        )
        profile = Profile.for_user(user)
        profile.age = self.cleaned_data["age"]
        profile.profile_photo = self.cleaned_data["profile_photo"]
        profile.save(update_fields=["age", "profile_photo"])
        return user


class ChangePasswordForm(forms.Form):
    old_password = forms.CharField()
    new_password = forms.CharField()

    def __init__(self, user, *args, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_old_password(self):
        old_password = self.cleaned_data["old_password"]
        if not self.user.check_password(old_password):
            raise forms.ValidationError("Old password is incorrect")
        return old_password

    def clean_new_password(self):
        new_password = self.cleaned_data["new_password"]
        password_validation.validate_password(new_password, self.user)
        return new_password

    def save(self):
        self.user.set_password(self.cleaned_data["new_password"])
        self.user.save(update_fields=["password"])
        Profile.for_user(self.user).mark_password_changed()
        return self.user
