from sqlalchemy.orm import Session

from metricmeta.db.models.time_series import TimeSeries as TimeSeriesModel


def get_series_by_id(db: Session, series_id: int) -> TimeSeriesModel | None:
    """Get a series by ID."""
    return db.query(TimeSeriesModel).filter(TimeSeriesModel.id == series_id).first()


def get_metadata_rows(
    db: Session, metric_name: str | None = None
) -> list[tuple[str, str]]:
    """
    Get (metric_name, metadata_json) pairs for series that carry metadata.

    Rows are ordered by metric name, newest first within a metric.
    """
    query = db.query(TimeSeriesModel.metric_name, TimeSeriesModel.metadata_json).filter(
        TimeSeriesModel.metadata_json != ""
    )
    if metric_name is not None:
        query = query.filter(TimeSeriesModel.metric_name == metric_name)
    rows = query.order_by(
        TimeSeriesModel.metric_name,
        TimeSeriesModel.updated_at_ns.desc(),
        TimeSeriesModel.id.desc(),
    ).all()
    return [(row.metric_name, row.metadata_json) for row in rows]


def create_series(
    db: Session,
    metric_name: str,
    labels: str,
    metadata_json: str,
    updated_at_ns: int,
) -> TimeSeriesModel:
    """Create a new series in the database. Pure data access - no business logic."""
    db_series = TimeSeriesModel(
        metric_name=metric_name,
        labels=labels,
        metadata_json=metadata_json,
        updated_at_ns=updated_at_ns,
    )
    db.add(db_series)
    db.commit()
    db.refresh(db_series)
    return db_series
