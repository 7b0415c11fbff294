"""Health check: always answers, reports "degraded" when the database is unreachable."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schoolhub.core.config import settings
from schoolhub.core.database import check_db_connected, get_db
from schoolhub.schemas.common import HealthResponse

router = APIRouter()

API_VERSION = "0.1.0"


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        environment=settings.APP_ENV,
        version=API_VERSION,
        database="connected" if connected else "disconnected",
    )
