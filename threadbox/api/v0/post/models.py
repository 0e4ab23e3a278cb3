from pydantic import BaseModel, Field
from datetime import datetime


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=256)
    content: str = Field(..., min_length=1, max_length=4096)


class PostResponse(BaseModel):
    id: int
    username: str
    title: str
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}
