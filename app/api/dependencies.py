"""FastAPI dependencies for the services built in the app lifespan."""

from fastapi import Request

from app.services.feed import LogFeed
from app.services.repository import LogRepository


def get_repository(request: Request) -> LogRepository:
    """Dependency for FastAPI to get the log repository."""
    return request.app.state.repository


def get_feed(request: Request) -> LogFeed:
    """Dependency for FastAPI to get the in-memory log feed."""
    return request.app.state.feed
