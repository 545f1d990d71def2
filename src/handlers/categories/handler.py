"""
Lambda handler for ``GET /categories`` and ``POST /categories``.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import get_settings
from core.utils.auth import require_bearer_token
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import CategoriesResponse, SaveCategoriesRequest
from .service import CategoriesService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Read the category list, or replace it (bearer token required)."""
    method = (event.get("httpMethod") or "GET").upper()
    logger.info(
        "Received categories request",
        extra={"http_method": method, "request_id": getattr(context, "aws_request_id", None)},
    )

    settings = get_settings()

    if method != "POST":
        service = CategoriesService(settings)
        response = CategoriesResponse(categories=service.get_categories())
        return ResponseBuilder.ok(response.model_dump())

    require_bearer_token(event, settings.admin_token)

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    if not isinstance(body, dict):
        return ResponseBuilder.bad_request(message="Invalid JSON body: expected an object")

    is_valid, result = validate_request(SaveCategoriesRequest, body)
    if not is_valid:
        return result

    request: SaveCategoriesRequest = result
    saved = CategoriesService(settings).save_categories(request.categories)

    return ResponseBuilder.ok({"success": True, "categories": saved})
