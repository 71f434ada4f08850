# Database models
from app.models.database import LogEntry, FetchedLog

__all__ = [
    "LogEntry",
    "FetchedLog",
]
