"""User request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=254)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    ai_provider: str
    ai_model: str
    created_at: datetime
    # encrypted key columns are NEVER returned

    model_config = {"from_attributes": True}
