"""Runtime configuration loaded from the Lambda environment."""

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.utils.constants import (
    DEFAULT_FAN_OUT_WORKERS,
    DEFAULT_KV_PARTITION,
    DEFAULT_SCAN_CEILING,
    ENV_ADMIN_TOKEN,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_FAN_OUT_WORKERS,
    ENV_IMAGE_BASE_URL,
    ENV_PHOTO_BUCKET_NAME,
    ENV_PHOTO_KV_PARTITION,
    ENV_PHOTO_KV_TABLE_NAME,
    ENV_SCAN_CEILING,
)

REQUIRED_ENV_VARS = (
    ENV_ADMIN_TOKEN,
    ENV_IMAGE_BASE_URL,
    ENV_PHOTO_KV_TABLE_NAME,
    ENV_PHOTO_BUCKET_NAME,
)


class PortfolioSettings(BaseModel):
    """Explicit service configuration handed to services and adapters."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    admin_token: str = Field(..., min_length=1, description="Static bearer token for mutations")
    image_base_url: str = Field(..., min_length=1, description="Public base URL of the image bucket")

    kv_table_name: str = Field(..., min_length=1, description="DynamoDB table holding the KV namespace")
    kv_partition: str = Field(DEFAULT_KV_PARTITION, min_length=1, description="Namespace hash key value")
    bucket_name: str = Field(..., min_length=1, description="S3 bucket holding image objects")

    aws_endpoint_url: str | None = Field(None, description="Override endpoint (LocalStack)")
    aws_region: str | None = Field(None, description="AWS region for boto3 clients")

    scan_ceiling: int = Field(
        DEFAULT_SCAN_CEILING,
        ge=1,
        description="Maximum keys returned by one prefix listing; older records beyond it are not listed",
    )
    fan_out_workers: int = Field(DEFAULT_FAN_OUT_WORKERS, ge=1, le=64)

    @classmethod
    def from_env(cls) -> "PortfolioSettings":
        """Build settings from environment variables.

        Raises:
            RuntimeError: If a required variable is unset or a value is invalid
        """
        missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
        if missing:
            raise RuntimeError(
                f"Required environment variables are not set: {', '.join(missing)}"
            )

        values: dict[str, object] = {
            "admin_token": os.getenv(ENV_ADMIN_TOKEN),
            "image_base_url": os.getenv(ENV_IMAGE_BASE_URL),
            "kv_table_name": os.getenv(ENV_PHOTO_KV_TABLE_NAME),
            "bucket_name": os.getenv(ENV_PHOTO_BUCKET_NAME),
            "aws_endpoint_url": os.getenv(ENV_AWS_ENDPOINT_URL) or None,
            "aws_region": os.getenv(ENV_AWS_REGION) or None,
        }

        optional = {
            "kv_partition": ENV_PHOTO_KV_PARTITION,
            "scan_ceiling": ENV_SCAN_CEILING,
            "fan_out_workers": ENV_FAN_OUT_WORKERS,
        }
        for field_name, env_name in optional.items():
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise RuntimeError(f"Invalid service configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> PortfolioSettings:
    """Return the settings for this execution environment, loaded once per cold start."""
    return PortfolioSettings.from_env()
