"""
JSON envelope, error type and base view for blog-platform.

Every response has the shape:

    {"success": bool, "data": ..., "message": str}
"""
import json
import logging

from django.http import Http404, JsonResponse, QueryDict
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error that is reported to the client with a status code."""

    def __init__(self, status_code, message, errors=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors

    @classmethod
    def from_form(cls, form, message="Validation failed"):
        """Build a 400 error from a bound, invalid form."""
        errors = {field: [str(e) for e in errs] for field, errs in form.errors.items()}
        first = next(iter(errors.values()), [message])[0]
        return cls(400, first, errors=errors)


def api_response(data=None, message="", status=200, success=True, meta=None):
    payload = {"success": success, "data": data, "message": message}
    if meta is not None:
        payload["meta"] = meta
    return JsonResponse(payload, status=status)


def error_response(error):
    payload = {"success": False, "data": None, "message": error.message}
    if error.errors:
        payload["errors"] = error.errors
    return JsonResponse(payload, status=error.status_code)


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """
    Base view for JSON endpoints.

    Parses the request payload into self.data and turns ApiError and
    Http404 into enveloped error responses.
    """

    def dispatch(self, request, *args, **kwargs):
        try:
            self.data = self.parse_payload(request)
            return super().dispatch(request, *args, **kwargs)
        except ApiError as e:
            return error_response(e)
        except Http404 as e:
            return error_response(ApiError(404, str(e) or "Not found"))

    def parse_payload(self, request):
        """Return the request payload as a dict-like object."""
        if request.content_type == "application/json":
            if not request.body:
                return {}
            try:
                payload = json.loads(request.body)
            except ValueError:
                raise ApiError(400, "Malformed JSON body")
            if not isinstance(payload, dict):
                raise ApiError(400, "JSON body must be an object")
            return payload
        if request.method == "POST":
            return request.POST
        if request.content_type == "application/x-www-form-urlencoded":
            return QueryDict(request.body, encoding=request.encoding)
        if request.body:
            raise ApiError(400, f"Unsupported content type for {request.method}: {request.content_type}")
        return {}

    def http_method_not_allowed(self, request, *args, **kwargs):
        logger.debug("Method %s not allowed on %s", request.method, request.path)
        raise ApiError(405, f"Method {request.method} not allowed")
