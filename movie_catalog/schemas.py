from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict


def format_json_time(value: datetime) -> str:
    """Format as RFC 3339 with seconds precision. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_json_time(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


class MovieJSON(BaseModel):
    """Export document for a single movie.

    Empty strings and zero numbers mean "not set" and are left out when the
    document is written with `to_dict`. Timestamps are always written.
    """

    name: str = ""
    aliases: str = ""
    date: str = ""
    rating: int = 0
    duration: int = 0
    director: str = ""
    synopsis: str = ""
    url: str = ""
    studio: str = ""
    front_image: str = ""
    back_image: str = ""
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict:
        data = self.model_dump(exclude_defaults=True)
        data["created_at"] = self.created_at
        data["updated_at"] = self.updated_at
        return data


class StudioBase(BaseModel):
    name: Optional[str] = None


class StudioCreate(StudioBase):
    pass


class StudioResponse(StudioBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MovieBase(BaseModel):
    name: Optional[str] = None
    aliases: Optional[str] = None
    date: Optional[str] = None
    rating: Optional[int] = None
    duration: Optional[int] = None
    director: Optional[str] = None
    synopsis: Optional[str] = None
    url: Optional[str] = None
    studio_id: Optional[int] = None


class MovieCreate(MovieBase):
    # base64 encoded
    front_image: Optional[str] = None
    back_image: Optional[str] = None


class MovieResponse(MovieBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
