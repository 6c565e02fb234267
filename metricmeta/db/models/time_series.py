from sqlalchemy import BigInteger, Column, Integer, String, Text

from metricmeta.db.base import Base


class TimeSeries(Base):
    __tablename__ = "time_series"

    id = Column(Integer, primary_key=True, index=True)
    metric_name = Column(String(255), nullable=False, index=True)
    labels = Column(Text, nullable=False, default="{}")
    metadata_json = Column(Text, nullable=False, default="")
    updated_at_ns = Column(BigInteger, nullable=False)
