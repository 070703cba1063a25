from datetime import datetime
from pydantic import BaseModel, EmailStr


class UserResponse(BaseModel):
    """Schema for user response."""
    id: str
    name: str
    email: EmailStr
    role: str
    created_at: datetime

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "64b7f0c2a1e4c3d2b1a09f87",
                "name": "Ada",
                "email": "user@example.com",
                "role": "customer",
                "created_at": "2024-01-01T00:00:00"
            }
        }
