"""JSON response helpers shared by the API views."""

import json

from django.http import HttpRequest, HttpResponse, JsonResponse

from core.exceptions import DomainError, ValidationError


def json_success(data, status: int = 200) -> JsonResponse:
    """Wrap a payload in the {"data": ...} envelope."""
    return JsonResponse({"data": data}, status=status, safe=False)


def json_error(status: int, code: str, message: str, details: dict | None = None) -> JsonResponse:
    """Render an {"error": {...}} body with the given status."""
    return JsonResponse(
        {"error": {"code": code, "message": message, "details": details or {}}},
        status=status,
    )


def domain_error_response(exc: DomainError) -> JsonResponse:
    """Render a DomainError using the status and code carried by its class."""
    return JsonResponse({"error": exc.as_dict()}, status=exc.status)


def no_content() -> HttpResponse:
    return HttpResponse(status=204)


def parse_json_body(request: HttpRequest) -> dict:
    """
    Decode a JSON object request body.

    An empty body decodes to {} so optional-only payloads may be omitted.

    Raises:
        ValidationError: If the body is not valid JSON or not an object.
    """
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError("Invalid request body", details={"body": str(exc)}) from exc
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload
