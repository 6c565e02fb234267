import json
import logging
import time

from sqlalchemy.orm import Session

import metricmeta.repositories.time_series as series_repo
from metricmeta.db.models.time_series import TimeSeries as TimeSeriesModel
from metricmeta.domain.metadata import (
    METRIC_NAME_LABEL,
    METRIC_TYPE_LABEL,
    METRIC_TYPES,
    MetadataEntry,
    is_metadata_label,
)
from metricmeta.errors import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

# Entries returned per metric when the caller does not ask for more
DEFAULT_LIMIT_PER_METRIC = 1


def create_series(db: Session, labels: dict[str, str]) -> TimeSeriesModel:
    """
    Store a series, splitting its metadata labels from its identity labels.

    Raises:
        BadRequestError: If __name__ is missing or the metric type is unsupported
    """
    metric_name = labels.get(METRIC_NAME_LABEL, "")
    if not metric_name:
        raise BadRequestError("series is missing the __name__ label")

    metric_type = labels.get(METRIC_TYPE_LABEL, "")
    if metric_type and metric_type not in METRIC_TYPES:
        raise BadRequestError(f"unsupported metric type: {metric_type}")

    entry = MetadataEntry.from_labels(labels)
    series_labels = {k: v for k, v in labels.items() if not is_metadata_label(k)}

    return series_repo.create_series(
        db,
        metric_name=metric_name,
        labels=json.dumps(series_labels, sort_keys=True),
        metadata_json=entry.to_json(),
        updated_at_ns=time.time_ns(),
    )


def get_series(db: Session, series_id: int) -> TimeSeriesModel:
    """
    Raises:
        NotFoundError: If the series doesn't exist
    """
    series = series_repo.get_series_by_id(db, series_id)
    if series is None:
        raise NotFoundError("Series not found")
    return series


def _group_entries(
    rows: list[tuple[str, str]], limit: int, limit_per_metric: int
) -> dict[str, list[MetadataEntry]]:
    per_metric = limit_per_metric if limit_per_metric > 0 else DEFAULT_LIMIT_PER_METRIC
    grouped: dict[str, list[MetadataEntry]] = {}
    slots: dict[str, int] = {}
    total = 0
    for metric_name, metadata_json in rows:
        if limit > 0 and total >= limit:
            break
        # Slots are taken before parsing: an unreadable row still uses its place
        taken = slots.get(metric_name, 0)
        if taken >= per_metric:
            continue
        slots[metric_name] = taken + 1
        total += 1
        try:
            entry = MetadataEntry.from_json(metadata_json)
        except ValueError:
            logger.error("Skipping unreadable metadata for %s", metric_name, exc_info=True)
            continue
        grouped.setdefault(metric_name, []).append(entry)
    return grouped


def list_metadata(
    db: Session,
    metric: str | None = None,
    limit: int = 0,
    limit_per_metric: int = 0,
) -> dict[str, list[MetadataEntry]]:
    """
    List metric metadata keyed by metric name.

    - limit_per_metric > 0 caps entries per metric (newest first), default 1
    - limit > 0 caps the total number of entries returned
    - an unknown metric yields an empty mapping
    """
    rows = series_repo.get_metadata_rows(db, metric_name=metric or None)
    return _group_entries(rows, limit, limit_per_metric)


def get_metric_metadata(
    db: Session, metric: str, limit_per_metric: int = 0
) -> list[MetadataEntry]:
    """
    Get metadata entries for a single metric.

    Raises:
        NotFoundError: If the metric has no metadata
    """
    grouped = _group_entries(
        series_repo.get_metadata_rows(db, metric_name=metric), 0, limit_per_metric
    )
    entries = grouped.get(metric)
    if not entries:
        raise NotFoundError(f"no metadata found for metric {metric}")
    return entries
