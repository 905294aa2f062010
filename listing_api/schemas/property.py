"""
Pydantic schemas for property requests and responses.
Handles property create/update validation and the listing response envelope.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from listing_api.models.property import PropertyType, PropertyStatus
from listing_api.schemas.image import PropertyImageResponse
from listing_api.utils.pagination import INT32_MAX


PERMITTED_FIELDS = (
    "title",
    "description",
    "price",
    "bedrooms",
    "property_type",
    "status",
    "latitude",
    "longitude",
    "published_at",
)

REQUIRED_FIELDS = ("title", "price", "bedrooms", "property_type")


class PropertyFields(BaseModel):
    """Validators shared by create and update schemas."""

    @field_validator(*REQUIRED_FIELDS, mode="before", check_fields=False)
    @classmethod
    def reject_blank(cls, v):
        """Required attributes may not be null or blank."""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("blank", "can't be blank")
        return v

    @field_validator("title", check_fields=False)
    @classmethod
    def strip_title(cls, v):
        return v.strip() if v is not None else v

    @field_validator("property_type", check_fields=False)
    @classmethod
    def validate_property_type(cls, v):
        """Property type must be one of the known dwelling kinds."""
        if v is not None and v not in {t.value for t in PropertyType}:
            raise PydanticCustomError("inclusion", "is not included in the list")
        return v

    @field_validator("status", check_fields=False)
    @classmethod
    def validate_status(cls, v):
        """Status must be one of the known sale states."""
        if v is not None and v not in {s.value for s in PropertyStatus}:
            raise PydanticCustomError("inclusion", "is not included in the list")
        return v


class PropertyCreate(PropertyFields):
    """Schema for creating a new property."""

    title: str = Field(
        ...,
        max_length=255,
        description="Property listing title",
        examples=["Renovated family home close to parks"]
    )
    description: Optional[str] = Field(
        None,
        description="Detailed property description"
    )
    price: int = Field(
        ...,
        ge=0,
        le=INT32_MAX,
        description="Price in whole currency units",
        examples=[1650000]
    )
    bedrooms: int = Field(
        ...,
        ge=0,
        le=INT32_MAX,
        description="Number of bedrooms",
        examples=[3]
    )
    property_type: str = Field(
        ...,
        description="house, apartment, townhouse, unit or studio",
        examples=["house"]
    )
    status: str = Field(
        PropertyStatus.AVAILABLE.value,
        description="available, under_offer or sold",
        examples=["available"]
    )
    latitude: Optional[Decimal] = Field(
        None,
        ge=-90,
        le=90,
        description="Latitude coordinate",
        examples=[-37.8136]
    )
    longitude: Optional[Decimal] = Field(
        None,
        ge=-180,
        le=180,
        description="Longitude coordinate",
        examples=[144.9631]
    )
    published_at: Optional[datetime] = Field(
        None,
        description="When the listing went public"
    )


class PropertyUpdate(PropertyFields):
    """Schema for partially updating a property; only supplied fields change."""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    price: Optional[int] = Field(None, ge=0, le=INT32_MAX)
    bedrooms: Optional[int] = Field(None, ge=0, le=INT32_MAX)
    property_type: Optional[str] = None
    status: Optional[str] = None
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    published_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def reject_null_status(cls, v):
        if v is None:
            raise PydanticCustomError("blank", "can't be blank")
        return v


class PropertyResponse(BaseModel):
    """Property representation with its ordered images and display price."""

    id: int
    title: str
    description: Optional[str] = None
    price: int
    formatted_price: str = Field(..., examples=["$1,650,000"])
    bedrooms: int
    property_type: str
    status: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    property_images: List[PropertyImageResponse] = Field(default_factory=list)


class ListingMetadata(BaseModel):
    limit: int = Field(..., description="Effective page size")
    next_cursor: Optional[str] = Field(
        None,
        description="Id to pass as cursor for the next page; absent on the last page"
    )


class PropertyListResponse(BaseModel):
    """Cursor-paginated property listing."""

    properties: List[PropertyResponse]
    metadata: ListingMetadata
