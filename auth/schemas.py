"""
Pydantic schemas for request/response models in the auth module.
"""

from pydantic import BaseModel


class UserOut(BaseModel):
    """Schema for responses containing the signed-in user's id."""
    user_id: str
    message: str
