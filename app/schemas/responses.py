"""Pydantic response models for API endpoints."""

from pydantic import BaseModel

from app.schemas.logs import LogRecord


class LogListResponse(BaseModel):
    """Log list, flagged when it came from the local cache."""
    logs: list[LogRecord]
    is_offline: bool
    notice: str | None = None


class CategoryTotal(BaseModel):
    """Summed calories for one category."""
    category: str
    total_calories: float


class MonthlyTotal(BaseModel):
    """Net calories (intake minus burn) for one month."""
    month: str  # "YYYY-MM"
    total_calories: float
