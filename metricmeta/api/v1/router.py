from fastapi import APIRouter

from metricmeta.api.routers import metadata, series

api_router = APIRouter()

api_router.include_router(series.router)
api_router.include_router(metadata.router)
