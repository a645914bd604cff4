"""
Account views: sign-up, login, logout, current user, token refresh.
"""
import logging

from django.contrib.auth import authenticate as check_credentials
from django.contrib.auth import get_user_model

from ..api import ApiError, ApiView, api_response
from ..auth import clear_token_cookie, issue_token, login_required, set_token_cookie
from ..forms import ChangePasswordForm, SignUpForm
from ..serializers import serialize_user

logger = logging.getLogger(__name__)

# Wire names accepted for sign-up fields
SIGN_UP_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "profilePhoto": "profile_photo",
}


def _session_response(user, message, status=200):
    token = issue_token(user)
    response = api_response(
        {"token": token, "user": serialize_user(user)},
        message,
        status=status,
    )
    return set_token_cookie(response, token)


class SignUpView(ApiView):
    def post(self, request):
        data = {SIGN_UP_FIELDS.get(key, key): value for key, value in self.data.items()}
        form = SignUpForm(data)
        if not form.is_valid():
            raise ApiError.from_form(form)

        user = form.save()
        logger.info("New user signed up: %s", user.pk)
        return _session_response(user, "User registered successfully", status=201)


class LoginView(ApiView):
    def post(self, request):
        identifier = (self.data.get("email") or self.data.get("username") or "").strip()
        password = self.data.get("password") or ""
        if not identifier or not password:
            raise ApiError(400, "Email and password are required")

        User = get_user_model()
        username = identifier
        if "@" in identifier:
            match = User.objects.filter(email__iexact=identifier).first()
            username = match.get_username() if match else None

        user = None
        if username:
            user = check_credentials(request, username=username, password=password)
        if user is None:
            logger.info("Failed login for %s", identifier)
            raise ApiError(401, "Invalid email or password")

        return _session_response(user, "Logged in successfully")


class LogoutView(ApiView):
    def get(self, request):
        return clear_token_cookie(api_response(None, "Logged out successfully"))

    post = get


class MeView(ApiView):
    @login_required
    def get(self, request):
        return api_response(serialize_user(request.user), "User fetched successfully")


class RefreshTokenView(ApiView):
    @login_required
    def post(self, request):
        return _session_response(request.user, "Token refreshed")


class ChangePasswordView(ApiView):
    @login_required
    def post(self, request):
        data = {
            "old_password": self.data.get("oldPassword", self.data.get("old_password")),
            "new_password": self.data.get("newPassword", self.data.get("new_password")),
        }
        form = ChangePasswordForm(request.user, data)
        if not form.is_valid():
            raise ApiError.from_form(form)

        user = form.save()
        logger.info("User %s changed password", user.pk)
        return _session_response(user, "Password changed successfully")
