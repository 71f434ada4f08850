"""Log API endpoints."""

import logging
from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_feed, get_repository
from app.core.exceptions import LogValidationError, NetworkUnavailableError
from app.schemas.logs import LogRecord, NewLogRequest
from app.schemas.responses import LogListResponse
from app.services.feed import LogFeed
from app.services.repository import LogRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/logs", tags=["logs"])

OFFLINE_NOTICE = "Showing cached data"


@router.get("", response_model=LogListResponse)
async def list_logs(
    repository: LogRepository = Depends(get_repository),
    feed: LogFeed = Depends(get_feed),
):
    """List logs, falling back to cached logs when the server is unreachable."""
    try:
        result = await repository.list_logs()
    except NetworkUnavailableError as e:
        logger.error(f"Error loading logs: {e}")
        raise HTTPException(status_code=503, detail="Failed to load logs")

    feed.replace(result.records, result.is_offline)
    return LogListResponse(
        logs=result.records,
        is_offline=result.is_offline,
        notice=OFFLINE_NOTICE if result.is_offline else None,
    )


@router.get("/feed", response_model=LogListResponse)
async def get_feed_snapshot(feed: LogFeed = Depends(get_feed)):
    """Logs currently shown, including any pushed since the last refresh."""
    return LogListResponse(
        logs=feed.snapshot(),
        is_offline=feed.is_offline,
        notice=OFFLINE_NOTICE if feed.is_offline else None,
    )


@router.get("/{log_id}", response_model=LogRecord)
async def get_log(log_id: int, repository: LogRepository = Depends(get_repository)):
    """Get one log's detail."""
    try:
        return await repository.get_log(log_id)
    except NetworkUnavailableError as e:
        logger.error(f"Error loading log details: {e}")
        raise HTTPException(status_code=503, detail="Failed to load log details")


@router.post("", response_model=LogRecord, status_code=201)
async def create_log(
    body: NewLogRequest,
    repository: LogRepository = Depends(get_repository),
    feed: LogFeed = Depends(get_feed),
):
    """Create a log. Only possible while the server is reachable."""
    try:
        record = await repository.create_log(body)
    except LogValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NetworkUnavailableError as e:
        logger.error(f"Error creating log: {e}")
        raise HTTPException(status_code=503, detail="Failed to create log. Online only.")

    feed.add(record)
    return record


@router.delete("/{log_id}", response_model=LogRecord)
async def delete_log(
    log_id: int,
    repository: LogRepository = Depends(get_repository),
    feed: LogFeed = Depends(get_feed),
):
    """Delete a log. Only possible while the server is reachable."""
    try:
        record = await repository.delete_log(log_id)
    except NetworkUnavailableError as e:
        logger.error(f"Error deleting log: {e}")
        raise HTTPException(status_code=503, detail="Failed to delete log. Online only.")

    feed.remove(log_id)
    return record
