"""
Lambda handler responsible for returning a single photo with full EXIF.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import NotFoundError
from core.models.photo import detail_projection
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import GetPhotoRequest
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``GET /photos/{id}``.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        200 with ``{"item": {...}}``, or 404 when the id is unknown
    """
    logger.info(
        "Received photo detail request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    path_params = event.get("pathParameters") or {}

    is_valid, result = validate_request(GetPhotoRequest, {"id": path_params.get("id")})
    if not is_valid:
        return result

    request: GetPhotoRequest = result
    service = GetService()

    try:
        record = service.get_photo(request.id)
    except NotFoundError as exc:
        logger.warning("Photo not found", extra={"id": request.id})
        return ResponseBuilder.not_found(exc.message, error=exc.error_code)

    return ResponseBuilder.ok({"item": detail_projection(record)})
