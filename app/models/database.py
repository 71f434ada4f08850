from sqlalchemy import Column, Integer, String, Float, Text

from app.core.database import Base


class LogEntry(Base):
    """Cached calorie log record, keyed by the server-assigned id."""

    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, autoincrement=False)
    date = Column(String, nullable=False, index=True)  # "YYYY-MM-DD"
    amount = Column(Float, nullable=False)
    kind = Column("type", String, nullable=False)  # "intake" or "burn"
    category = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")


class FetchedLog(Base):
    """Marker for logs whose detail was fetched individually from the server."""

    __tablename__ = "fetched"

    id = Column(Integer, primary_key=True, autoincrement=False)
