from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

# Create declarative base
Base = declarative_base()


def create_engine(db_path: str, echo: bool = False) -> AsyncEngine:
    """Create the async SQLite engine for the local cache."""
    return create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        echo=echo,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the given engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
