"""
Lambda handler responsible for deleting a photo.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import get_settings
from core.models.errors import NotFoundError
from core.utils.auth import require_bearer_token
from core.utils.constants import METRICS_NAMESPACE, SERVICE_NAME
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import DeletePhotoRequest, DeletePhotoResponse
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``DELETE /photos/{id}``.

    This function:
    - Rejects requests without the admin bearer token (401)
    - Validates the path parameter (400)
    - Delegates deletion to the service layer (404 when the id is unknown)
    """
    logger.info(
        "Received photo delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    settings = get_settings()
    require_bearer_token(event, settings.admin_token)

    path_params = event.get("pathParameters") or {}

    is_valid, result = validate_request(DeletePhotoRequest, {"id": path_params.get("id")})
    if not is_valid:
        return result

    request: DeletePhotoRequest = result
    service = DeleteService(settings)

    try:
        service.delete_photo(request.id)
    except NotFoundError as exc:
        logger.warning("Photo not found during delete", extra={"id": request.id})
        return ResponseBuilder.not_found(exc.message, error=exc.error_code)

    metrics.add_metric(name="PhotoDeleted", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.ok(DeletePhotoResponse(id=request.id).model_dump())
