"""
Record types for the rental tables.

Each model mirrors one table as it leaves the data facade. Rows are
validated here instead of being passed around as loose dicts.
"""

from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator


class Category(BaseModel):
    id: str
    name: str = Field(..., description="Category name, e.g. SUV")
    description: Optional[str] = None


class Car(BaseModel):
    id: str
    brand: str = Field(..., description="Car brand, e.g. Mercedes-Benz")
    model: str = Field(..., description="Model name")
    year: int = Field(..., description="Manufacturing year")
    color: str
    price_per_day: float = Field(..., ge=0, description="Rental price per day in IDR")
    transmission: str = Field(..., description="manual or automatic")
    fuel_type: str = Field(..., description="petrol, diesel, electric, hybrid")
    seats: int = Field(5, ge=0, description="Seating capacity")
    features: List[str] = Field(default_factory=list)
    gallery_images: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    image_url: Optional[str] = None
    category_id: Optional[str] = None
    category_name: Optional[str] = Field(None, description="Joined from categories.name")
    is_featured: bool = False
    is_available: bool = True

    @field_validator("features", "gallery_images", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []


class BookingIn(BaseModel):
    """Insert shape of a booking row."""
    car_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    start_date: str = Field(..., description="Calendar date, YYYY-MM-DD")
    end_date: str = Field(..., description="Calendar date, YYYY-MM-DD")
    total_days: int = Field(..., ge=1)
    total_price: float = Field(..., ge=0)
    notes: Optional[str] = None
    status: str = "pending"


class Booking(BookingIn):
    id: str
    created_at: Optional[datetime] = None


class BookingRequest(BaseModel):
    """JSON body of a booking submission. Emptiness is checked by the booking module."""
    car_id: Optional[str] = None
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    start_date: str = ""
    end_date: str = ""
    notes: str = ""


class StatusUpdate(BaseModel):
    status: str


class GalleryItem(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    event_type: Optional[str] = None
    is_featured: bool = False


class Testimonial(BaseModel):
    id: str
    customer_name: str
    customer_title: Optional[str] = None
    content: str
    rating: int = Field(5, ge=1, le=5)
    image_url: Optional[str] = None
    is_featured: bool = False


class Profile(BaseModel):
    id: str
    user_id: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: str = "user"


class DashboardStats(BaseModel):
    total_cars: int = 0
    total_bookings: int = 0
    pending_bookings: int = 0
    total_revenue: float = 0
