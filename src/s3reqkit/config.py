"""Configuration loading and Pydantic models for s3reqkit."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from s3reqkit.logging_config import configure_logging
from s3reqkit.metrics import init_metrics
from s3reqkit.partplan import MAX_PART_SIZE, MIN_PART_SIZE


class BucketConfig(BaseModel):
    """Bucket-name validation settings."""

    strict: bool = False


class UploadConfig(BaseModel):
    """Multipart upload settings."""

    # 0 lets calc_part_info pick the part size.
    part_size: int = 0

    @field_validator("part_size")
    @classmethod
    def _check_part_size(cls, value: int) -> int:
        if value != 0 and not MIN_PART_SIZE <= value <= MAX_PART_SIZE:
            raise ValueError(
                f"part_size must be 0 or between {MIN_PART_SIZE} and {MAX_PART_SIZE} bytes"
            )
        return value


class LoggingConfig(BaseModel):
    """Log output settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["text", "json"] = "text"


class MetricsConfig(BaseModel):
    """Prometheus metrics settings."""

    enabled: bool = False


class S3ReqKitConfig(BaseModel):
    """Top-level s3reqkit configuration."""

    buckets: BucketConfig = Field(default_factory=BucketConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)


def _parse_buckets(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the buckets section from YAML data into a dict for Pydantic."""
    if data is None:
        return {}
    return {"strict": data.get("strict", False)}


def _parse_upload(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the upload section from YAML data."""
    if data is None:
        return {}
    return {"part_size": data.get("part_size", 0)}


def _parse_logging(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the logging section from YAML data.

    Level names are accepted in any case.
    """
    if data is None:
        return {}
    return {
        "level": str(data.get("level", "INFO")).upper(),
        "format": data.get("format", "text"),
    }


def _parse_metrics(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the metrics section from YAML data."""
    if data is None:
        return {}
    return {"enabled": data.get("enabled", False)}


def load_config(path: Path) -> S3ReqKitConfig:
    """Load an S3ReqKitConfig from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A fully populated S3ReqKitConfig validated by Pydantic.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If a value is out of range.
    """
    with open(path, "r") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh) or {}

    return S3ReqKitConfig(
        buckets=BucketConfig(**_parse_buckets(raw.get("buckets"))),
        upload=UploadConfig(**_parse_upload(raw.get("upload"))),
        logging=LoggingConfig(**_parse_logging(raw.get("logging"))),
        metrics=MetricsConfig(**_parse_metrics(raw.get("metrics"))),
    )


def apply_config(config: S3ReqKitConfig) -> None:
    """Configure logging and, when enabled, register Prometheus metrics."""
    configure_logging(level=config.logging.level, fmt=config.logging.format)
    if config.metrics.enabled:
        init_metrics()
