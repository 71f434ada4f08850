import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from app.core.config import get_settings
from app.core.database import create_engine, create_session_maker
from app.api import logs, reports
from app.services.events import EventBus, LOG_CREATED
from app.services.feed import LogFeed
from app.services.local_store import LocalStore
from app.services.log_api import LogApiClient
from app.services.push import PushChannel
from app.services.repository import LogRepository
from app.services.scheduler import start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    settings = get_settings()

    # Startup
    engine = create_engine(settings.db_path, echo=settings.debug)
    store = LocalStore(create_session_maker(engine))
    await store.init()

    remote = LogApiClient(settings.api_base_url, timeout=settings.request_timeout_seconds)
    repository = LogRepository(store, remote, timeout=settings.request_timeout_seconds)
    feed = LogFeed()

    # Show cached logs until the first refresh completes
    cached = await repository.load_cached()
    if cached:
        feed.replace(cached, is_offline=True)

    bus = EventBus()
    bus.subscribe(LOG_CREATED, repository.ingest_pushed)
    bus.subscribe(LOG_CREATED, feed.add)
    push = PushChannel(settings.push_url, bus, reconnect_interval=settings.push_reconnect_seconds)
    push.start()

    app.state.repository = repository
    app.state.feed = feed
    app.state.bus = bus

    start_scheduler(repository, feed, settings.refresh_interval_minutes)
    yield
    # Shutdown
    stop_scheduler()
    await push.stop()
    await remote.close()
    await engine.dispose()


logging.basicConfig(level=logging.DEBUG if get_settings().debug else logging.INFO)

# Create FastAPI application
app = FastAPI(
    title="Calorie Log Client",
    description="Offline-first client for a calorie intake/burn log server",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(logs.router)
app.include_router(reports.router)


@app.get("/")
async def root():
    """Redirect root to the log feed."""
    return RedirectResponse(url="/api/logs/feed")
