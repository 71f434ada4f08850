"""Pydantic models for calorie log records."""

from pydantic import BaseModel, ConfigDict, Field


class NewLogRequest(BaseModel):
    """Payload for creating a log. The server assigns the id."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    date: str = ""  # "YYYY-MM-DD"
    amount: float = 0
    kind: str = Field(default="", alias="type")  # "intake" or "burn"
    category: str = ""
    description: str = ""


class LogRecord(NewLogRequest):
    """A calorie log as stored on the server and in the local cache."""

    id: int
