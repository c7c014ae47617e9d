from pydantic import BaseModel, EmailStr, Field


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, examples=["Ada Lovelace"])
    email: EmailStr = Field(..., examples=["ada@example.com"])
    message: str = Field(..., min_length=1, max_length=10000, examples=["Loved the projects section!"])
