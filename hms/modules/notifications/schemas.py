from typing import Literal
from pydantic import BaseModel, Field

class NotificationCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=64)
    sender: str | None = None  # defaults to the sending user
    recipient: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    description: str | None = None

class NotificationDecision(BaseModel):
    status: Literal["approved", "rejected"]
