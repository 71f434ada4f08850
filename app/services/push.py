"""WebSocket listener for logs pushed by the server."""

import asyncio
import json
import logging
from typing import Optional
import websockets
from pydantic import ValidationError

from app.schemas.logs import LogRecord
from app.services.events import EventBus, LOG_CREATED

logger = logging.getLogger(__name__)


class PushChannel:
    """Keeps a WebSocket open to the server and publishes each pushed log.

    Every text frame is expected to be one log as a JSON object. Frames that
    don't parse are logged and dropped. When the connection drops or can't be
    opened, the channel waits `reconnect_interval` seconds and tries again.
    """

    def __init__(self, url: str, bus: EventBus, reconnect_interval: float = 5.0):
        self.url = url
        self.bus = bus
        self.reconnect_interval = reconnect_interval
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start listening in the background. No-op if already running."""
        if self.is_running:
            logger.warning("Push channel already started")
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop listening and close the connection."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Push channel stopped")

    async def _run(self) -> None:
        while True:
            try:
                logger.info(f"Connecting to push channel at {self.url}")
                async with websockets.connect(self.url) as ws:
                    logger.info("Push channel connected")
                    async for message in ws:
                        await self.handle_message(message)
                logger.info("Push channel disconnected")
            except asyncio.CancelledError:
                raise
            except (OSError, asyncio.TimeoutError, websockets.WebSocketException) as e:
                logger.warning(f"Push channel error: {e}")
            except Exception as e:
                logger.error(f"Push channel failed unexpectedly: {e}")
            await asyncio.sleep(self.reconnect_interval)

    async def handle_message(self, message: str | bytes) -> Optional[LogRecord]:
        """Parse one frame and publish it. Returns the log, or None if the frame was dropped."""
        logger.debug(f"Push message received: {message!r}")
        try:
            record = LogRecord.model_validate(json.loads(message))
        except (ValueError, RecursionError, ValidationError) as e:
            logger.error(f"Failed to parse push message: {e}")
            return None

        await self.bus.publish(LOG_CREATED, record)
        return record
