from datetime import datetime, timezone
from pydantic import BaseModel, Field
from hms.core.base import Entity

def _now() -> datetime:
    return datetime.now(timezone.utc)

class Comment(BaseModel):
    id: str
    text: str
    author_id: str
    author_name: str | None = None
    author_role: str | None = None
    timestamp: datetime = Field(default_factory=_now)

class Post(Entity):
    id_prefix = "POST"

    title: str
    content: str
    category: str | None = None
    author_id: str | None = None
    author_name: str | None = None
    created_at: datetime = Field(default_factory=_now)
    likes: int = 0
    comments: list[Comment] = Field(default_factory=list)
