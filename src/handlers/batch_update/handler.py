"""
Lambda handler responsible for applying one EXIF change set to many photos.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import get_settings
from core.utils.auth import require_bearer_token
from core.utils.constants import METRICS_NAMESPACE, SERVICE_NAME
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import BatchUpdateRequest, BatchUpdateResponse
from .service import BatchUpdateService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``POST /batch_update`` with ``{"ids": [...], "updates": {...}}``.

    Responds 200 with one result per id even when some ids fail, so
    callers can tell a partial failure from a total one.
    """
    logger.info(
        "Received batch update request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    settings = get_settings()
    require_bearer_token(event, settings.admin_token)

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    if not isinstance(body, dict):
        return ResponseBuilder.bad_request(message="Invalid JSON body: expected an object")

    is_valid, result = validate_request(BatchUpdateRequest, body)
    if not is_valid:
        return result

    request: BatchUpdateRequest = result
    service = BatchUpdateService(settings)

    results = service.update_many(request.ids, request.updates.changes())

    failed = sum(1 for item in results if not item.success)
    metrics.add_metric(name="BatchItemUpdated", unit=MetricUnit.Count, value=len(results) - failed)
    metrics.add_metric(name="BatchItemFailed", unit=MetricUnit.Count, value=failed)

    response = BatchUpdateResponse(results=results)
    return ResponseBuilder.ok(response.model_dump(exclude_none=True))
