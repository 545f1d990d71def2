"""
Lambda handler responsible for photo upload: create, or edit when the metadata carries an id.
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
from core.utils.multipart import parse_upload_body
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import UploadMetadata, UploadPhotoResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``POST /upload``.

    The body is ``multipart/form-data`` (``meta`` JSON part, ``file`` part,
    optional ``file_small``/``file_medium``/``file_large`` parts) or the
    equivalent JSON document with base64 file contents.

    Returns:
        201 ``{"success": true, "id", "url", "urls"?}`` for a new photo,
        200 with the same shape for an edit, 404 when editing an unknown id
    """
    logger.info(
        "Received photo upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "is_base64_encoded": bool(event.get("isBase64Encoded")),
        },
    )

    settings = get_settings()
    require_bearer_token(event, settings.admin_token)

    payload = parse_upload_body(event)

    is_valid, result = validate_request(UploadMetadata, payload.meta)
    if not is_valid:
        return result

    meta: UploadMetadata = result
    service = UploadService(settings)

    try:
        record = service.save(meta, file=payload.file, variants=payload.variants)
    except NotFoundError as exc:
        logger.warning("Edit requested for unknown photo", extra={"id": meta.id})
        return ResponseBuilder.not_found(exc.message, error=exc.error_code)

    response = UploadPhotoResponse(id=record.id, url=record.url, urls=record.urls)
    body = response.model_dump(exclude_none=True)

    if meta.is_edit:
        metrics.add_metric(name="PhotoUpdated", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.ok(body)

    metrics.add_metric(name="PhotoCreated", unit=MetricUnit.Count, value=1)
    return ResponseBuilder.created(body)
