from pydantic import BaseModel, Field

class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category: str | None = None

class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)
