"""
Lambda handler letting the gallery check an admin password before storing it as its bearer token.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import get_settings
from core.utils.auth import tokens_match
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import VerifyRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``POST /verify`` with ``{"password": "..."}``.

    Returns:
        200 ``{"success": true}`` on a match, 401 ``{"success": false}``
        otherwise, 400 when the password is missing
    """
    logger.info(
        "Received password verification request",
        extra={"request_id": getattr(context, "aws_request_id", None)},
    )

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    if not isinstance(body, dict):
        return ResponseBuilder.bad_request(message="Invalid JSON body: expected an object")

    is_valid, result = validate_request(VerifyRequest, body)
    if not is_valid:
        return result

    request: VerifyRequest = result

    if not tokens_match(request.password, get_settings().admin_token):
        logger.warning("Password verification failed")
        return ResponseBuilder.unauthorized("Invalid password", extra={"success": False})

    return ResponseBuilder.ok({"success": True})
