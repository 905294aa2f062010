"""
Pydantic schemas for property images.
"""

from pydantic import BaseModel, Field


class PropertyImageResponse(BaseModel):
    """Image entry as embedded in property responses."""

    id: int
    url: str = Field(..., examples=["https://images.unsplash.com/photo-1568605114967-8130f3a36994?w=800"])
    position: int
