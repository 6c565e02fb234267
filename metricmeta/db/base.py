from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from metricmeta.core.config import settings

# Normalize database URL to use psycopg3 driver if using standard postgresql://
database_url = settings.database_url
if database_url.startswith("postgresql://") and "+psycopg" not in database_url:
    database_url = database_url.replace("postgresql://", "postgresql+psycopg://", 1)

# SQLite connections are shared across the request thread pool
connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}

engine = create_engine(database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
