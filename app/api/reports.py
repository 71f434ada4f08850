"""Report API endpoints. Reports always use fresh server data."""

import logging
from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_repository
from app.core.exceptions import NetworkUnavailableError
from app.schemas.responses import CategoryTotal, MonthlyTotal
from app.services.reports import monthly_net, top_categories
from app.services.repository import LogRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


async def _fetch_all(repository: LogRepository, context: str):
    try:
        return await repository.list_all_logs()
    except NetworkUnavailableError as e:
        logger.error(f"Error loading {context}: {e}")
        raise HTTPException(status_code=503, detail=f"Failed to load {context}")


@router.get("/top-categories", response_model=list[CategoryTotal])
async def get_top_categories(repository: LogRepository = Depends(get_repository)):
    """Top 3 categories by total calories."""
    logs = await _fetch_all(repository, "category insights")
    return [CategoryTotal(**c) for c in top_categories(logs)]


@router.get("/monthly", response_model=list[MonthlyTotal])
async def get_monthly(repository: LogRepository = Depends(get_repository)):
    """Net calories per month (intake minus burn), highest first."""
    logs = await _fetch_all(repository, "monthly calorie analysis")
    return [MonthlyTotal(**m) for m in monthly_net(logs)]
