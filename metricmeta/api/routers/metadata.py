from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from metricmeta.api.deps import get_db
from metricmeta.schemas.metadata import MetadataResponse, MetricMetadataResponse
from metricmeta.services.metadata import get_metric_metadata, list_metadata

router = APIRouter(prefix="/metadata", tags=["metadata"])


@router.get("", response_model=MetadataResponse)
def get_metadata(
    metric: str | None = Query(default=None),
    limit: int = Query(default=0),
    limit_per_metric: int = Query(default=0),
    db: Session = Depends(get_db),
):
    """
    Get metric metadata, Prometheus style.
    - limit caps the total number of entries (<= 0 means no limit)
    - limit_per_metric caps entries per metric (<= 0 means 1)
    """
    grouped = list_metadata(
        db, metric=metric, limit=limit, limit_per_metric=limit_per_metric
    )
    return MetadataResponse(
        data={
            name: [entry.to_dict() for entry in entries]
            for name, entries in grouped.items()
        }
    )


@router.get("/{metric}", response_model=MetricMetadataResponse)
def get_metadata_for_metric(
    metric: str,
    limit_per_metric: int = Query(default=0),
    db: Session = Depends(get_db),
):
    entries = get_metric_metadata(db, metric, limit_per_metric=limit_per_metric)
    return MetricMetadataResponse(data=[entry.to_dict() for entry in entries])
