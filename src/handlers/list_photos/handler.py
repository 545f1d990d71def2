"""
Lambda handler responsible for listing photos with optional category filtering.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.photo import PhotoSummary
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ListPhotosRequest, ListPhotosResponse
from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``GET /photos?page&pageSize&category``.

    Returns a page of light photo summaries, newest first. A page past the
    end of the feed is an empty list, not an error.
    """
    logger.info(
        "Received photo list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    params = event.get("queryStringParameters") or {}

    is_valid, result = validate_request(ListPhotosRequest, params)
    if not is_valid:
        return result

    request: ListPhotosRequest = result
    service = ListService()

    records = service.list_photos(
        page=request.page,
        page_size=request.page_size,
        category=request.category,
    )

    response = ListPhotosResponse(
        items=[PhotoSummary.from_record(record) for record in records],
    )
    return ResponseBuilder.ok(response.model_dump(mode="json"))
