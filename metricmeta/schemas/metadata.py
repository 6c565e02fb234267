from typing import Literal

from pydantic import BaseModel


class MetricMetadata(BaseModel):
    type: str = ""
    help: str = ""
    unit: str = ""


class MetadataResponse(BaseModel):
    """Prometheus-style metadata listing keyed by metric name."""

    status: Literal["success"] = "success"
    data: dict[str, list[MetricMetadata]]


class MetricMetadataResponse(BaseModel):
    status: Literal["success"] = "success"
    data: list[MetricMetadata]
