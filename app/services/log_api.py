"""Calorie log server API client."""

import logging
from typing import Any, Optional
import httpx
from pydantic import ValidationError

from app.core.exceptions import LogValidationError, NetworkUnavailableError
from app.schemas.logs import LogRecord, NewLogRequest

logger = logging.getLogger(__name__)


class LogApiClient:
    """Async client for the calorie log server.

    Every failure (timeout, transport error, non-success status, unreadable
    body) surfaces as NetworkUnavailableError. A create rejected with HTTP 400
    surfaces as LogValidationError carrying the server's message.
    """

    def __init__(self, base_url: str, timeout: float = 3.0):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
            )
        return self.client

    async def close(self):
        """Close the HTTP client."""
        if self.client:
            await self.client.aclose()
            self.client = None

    async def _request(self, method: str, path: str, context: str, **kwargs) -> Any:
        """Send a request and return the decoded JSON body."""
        client = await self._get_client()
        logger.info(f"{method} {path}")
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"{context}: request timeout - server unreachable ({e})")
            raise NetworkUnavailableError(f"{context}: request timeout - server unreachable") from e
        except httpx.HTTPError as e:
            logger.warning(f"{context}: transport error: {e}")
            raise NetworkUnavailableError(f"{context}: {e}") from e

        if response.is_error:
            if method == "POST" and response.status_code == 400:
                message = self._error_message(response) or context
                logger.warning(f"{context}: rejected by server: {message}")
                raise LogValidationError(message)
            logger.warning(f"{context}: HTTP {response.status_code}: {response.text[:200]}")
            raise NetworkUnavailableError(f"{context}: HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"{context}: failed to parse JSON: {e}, body: {response.text[:200]}")
            raise NetworkUnavailableError(f"{context}: invalid response body") from e

        logger.debug(f"{method} {path} success: {data}")
        return data

    def _error_message(self, response: httpx.Response) -> str | None:
        """Pull the server's error text out of a rejection body, if any."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("error")
        return None

    def _parse_record(self, data: Any, context: str) -> LogRecord:
        try:
            return LogRecord.model_validate(data)
        except ValidationError as e:
            logger.error(f"{context}: unexpected record shape: {e}")
            raise NetworkUnavailableError(f"{context}: unexpected record shape") from e

    def _parse_records(self, data: Any, context: str) -> list[LogRecord]:
        if not isinstance(data, list):
            logger.error(f"{context}: expected a list, got {type(data).__name__}")
            raise NetworkUnavailableError(f"{context}: expected a list of logs")
        return [self._parse_record(item, context) for item in data]

    async def get_logs(self) -> list[LogRecord]:
        """Get the log list."""
        data = await self._request("GET", "/logs", "Failed to fetch logs")
        return self._parse_records(data, "Failed to fetch logs")

    async def get_log(self, log_id: int) -> LogRecord:
        """Get a single log with its full detail."""
        context = f"Failed to fetch log {log_id}"
        data = await self._request("GET", f"/log/{log_id}", context)
        return self._parse_record(data, context)

    async def create_log(self, new_log: NewLogRequest) -> LogRecord:
        """Create a log. Returns the stored log with its server-assigned id."""
        data = await self._request(
            "POST",
            "/log",
            "Failed to create log",
            json=new_log.model_dump(by_alias=True),
        )
        return self._parse_record(data, "Failed to create log")

    async def delete_log(self, log_id: int) -> LogRecord:
        """Delete a log. Returns the deleted log's last value."""
        context = f"Failed to delete log {log_id}"
        data = await self._request("DELETE", f"/log/{log_id}", context)
        return self._parse_record(data, context)

    async def get_all_logs(self) -> list[LogRecord]:
        """Get every log on the server, for reports."""
        data = await self._request("GET", "/allLogs", "Failed to fetch all logs")
        return self._parse_records(data, "Failed to fetch all logs")
