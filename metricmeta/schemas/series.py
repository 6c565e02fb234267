import json

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from metricmeta.domain.metadata import MetadataEntry
from metricmeta.schemas.metadata import MetricMetadata


class SeriesCreate(BaseModel):
    labels: dict[str, str] = Field(..., description="Series labels, including __name__")


class Series(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    metric_name: str
    labels: dict[str, str]
    metadata: MetricMetadata | None = Field(
        default=None, validation_alias=AliasChoices("metadata_json", "metadata")
    )

    @field_validator("labels", mode="before")
    @classmethod
    def decode_labels(cls, v):
        """Labels are stored as a JSON object string."""
        if isinstance(v, str):
            return json.loads(v) if v else {}
        return v

    @field_validator("metadata", mode="before")
    @classmethod
    def decode_metadata(cls, v):
        if isinstance(v, str):
            if not v:
                return None
            return MetadataEntry.from_json(v).to_dict()
        return v
