from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from metricmeta.api.deps import get_db
from metricmeta.schemas.series import Series, SeriesCreate
from metricmeta.services.metadata import create_series, get_series

router = APIRouter(prefix="/series", tags=["series"])


@router.post("", response_model=Series, status_code=status.HTTP_201_CREATED)
def create_new_series(series_data: SeriesCreate, db: Session = Depends(get_db)):
    """
    Store a series. Metadata labels (__metric_type__, __metric_help__,
    __metric_unit__) are split off and kept as the series' metadata.
    """
    series = create_series(db, series_data.labels)
    return Series.model_validate(series)


@router.get("/{series_id}", response_model=Series)
def get_series_by_id(series_id: int, db: Session = Depends(get_db)):
    series = get_series(db, series_id)
    return Series.model_validate(series)
