"""
Pydantic schemas for user requests and responses
"""

from pydantic import BaseModel, EmailStr, Field


class UserWrite(BaseModel):
    """Body of create and update requests"""

    email: EmailStr = Field(
        ...,
        description="E-mail address the user signs in to Power BI with",
        examples=["jane.doe@example.com"]
    )


class UserResponse(BaseModel):
    """Schema for user API responses"""

    id: int = Field(..., description="Database-assigned user identifier")
    email: str = Field(..., description="User e-mail address")

    class Config:
        from_attributes = True


class UserCreated(BaseModel):
    id: int
