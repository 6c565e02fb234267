from metricmeta.db.models.time_series import TimeSeries

__all__ = ["TimeSeries"]
