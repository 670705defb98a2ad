import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Float, Boolean, Text, JSON, ForeignKey

from database import Base


def new_id():
    return str(uuid.uuid4())


class TimestampMixin:
    id = Column(String(36), primary_key=True, default=new_id)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Category(TimestampMixin, Base):
    __tablename__ = "categories"
    name = Column(String, nullable=False)
    description = Column(Text)


class Car(TimestampMixin, Base):
    __tablename__ = "cars"
    brand = Column(String, nullable=False)
    model = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    color = Column(String, nullable=False)
    price_per_day = Column(Float, nullable=False)
    transmission = Column(String, nullable=False)
    fuel_type = Column(String, nullable=False)
    seats = Column(Integer, nullable=False, default=5)
    features = Column(JSON)
    gallery_images = Column(JSON)
    description = Column(Text)
    image_url = Column(String)
    category_id = Column(String(36), ForeignKey("categories.id"))
    is_featured = Column(Boolean, nullable=False, default=False)
    is_available = Column(Boolean, nullable=False, default=True)


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"
    car_id = Column(String(36), ForeignKey("cars.id"), nullable=False)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    start_date = Column(String, nullable=False)
    end_date = Column(String, nullable=False)
    total_days = Column(Integer, nullable=False)
    total_price = Column(Float, nullable=False)
    notes = Column(Text)
    status = Column(String, nullable=False, default="pending")


class Gallery(TimestampMixin, Base):
    __tablename__ = "galleries"
    title = Column(String, nullable=False)
    description = Column(Text)
    image_url = Column(String)
    event_type = Column(String)
    is_featured = Column(Boolean, nullable=False, default=False)


class Testimonial(TimestampMixin, Base):
    __tablename__ = "testimonials"
    customer_name = Column(String, nullable=False)
    customer_title = Column(String)
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False, default=5)
    image_url = Column(String)
    is_featured = Column(Boolean, nullable=False, default=False)


class Profile(TimestampMixin, Base):
    __tablename__ = "profiles"
    user_id = Column(String(36), nullable=False, unique=True, index=True)
    full_name = Column(String)
    phone = Column(String)
    role = Column(String, nullable=False, default="user")


# Auth facade tables
class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class AuthSession(Base):
    __tablename__ = "auth_sessions"
    token = Column(String, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False)
