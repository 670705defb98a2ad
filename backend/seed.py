import logging

from auth import create_admin_account
from errors import AuthError

logger = logging.getLogger(__name__)

CATEGORIES = [
    {"name": "Sedan", "description": "Comfortable executive sedans"},
    {"name": "SUV", "description": "Spacious vehicles for families and groups"},
    {"name": "Luxury", "description": "Premium cars for special occasions"},
    {"name": "Wedding Car", "description": "Decorated cars for weddings and ceremonies"},
]

SAMPLE_CARS = [
    {
        "brand": "Mercedes-Benz",
        "model": "E-Class",
        "year": 2022,
        "color": "Obsidian Black",
        "price_per_day": 2500000,
        "transmission": "automatic",
        "fuel_type": "petrol",
        "seats": 5,
        "features": ["Leather seats", "Sunroof", "Professional chauffeur", "Wi-Fi"],
        "description": "Executive comfort for corporate events and airport transfers.",
        "image_url": "https://images.unsplash.com/photo-1618843479313-40f8afb4b4d8?q=80&w=1600&auto=format&fit=crop",
        "category": "Luxury",
        "is_featured": True,
    },
    {
        "brand": "Toyota",
        "model": "Alphard",
        "year": 2023,
        "color": "Pearl White",
        "price_per_day": 3000000,
        "transmission": "automatic",
        "fuel_type": "hybrid",
        "seats": 7,
        "features": ["Captain seats", "Ambient lighting", "Professional chauffeur"],
        "description": "The favourite for wedding entourages and VIP guests.",
        "image_url": "https://images.unsplash.com/photo-1549317661-bd32c8ce0db2?q=80&w=1600&auto=format&fit=crop",
        "category": "Wedding Car",
        "is_featured": True,
    },
    {
        "brand": "Toyota",
        "model": "Fortuner",
        "year": 2021,
        "color": "Silver",
        "price_per_day": 1200000,
        "transmission": "automatic",
        "fuel_type": "diesel",
        "seats": 7,
        "features": ["4x4", "Roof rails"],
        "description": "Reliable SUV for trips around Surabaya and East Java.",
        "image_url": "https://images.unsplash.com/photo-1519641471654-76ce0107ad1b?q=80&w=1600&auto=format&fit=crop",
        "category": "SUV",
        "is_featured": False,
    },
    {
        "brand": "Honda",
        "model": "Accord",
        "year": 2020,
        "color": "Modern Steel",
        "price_per_day": 500000,
        "transmission": "automatic",
        "fuel_type": "petrol",
        "seats": 5,
        "features": ["Cruise control"],
        "description": "Elegant sedan for everyday business travel.",
        "image_url": "https://images.unsplash.com/photo-1503376780353-7e6692767b70?q=80&w=1600&auto=format&fit=crop",
        "category": "Sedan",
        "is_featured": False,
    },
]

SAMPLE_GALLERY = [
    {"title": "Garden Wedding", "description": "Alphard entourage for a garden reception.",
     "event_type": "wedding", "is_featured": True},
    {"title": "Product Launch", "description": "Executive fleet for a product launch.",
     "event_type": "corporate", "is_featured": False},
    {"title": "Graduation Ceremony", "description": "Chauffeured arrivals for graduates.",
     "event_type": "ceremonial", "is_featured": False},
]

SAMPLE_TESTIMONIALS = [
    {"customer_name": "Rina Wijaya", "customer_title": "Bride", "rating": 5, "is_featured": True,
     "content": "The car was spotless and the driver was right on time. Our wedding day was perfect."},
    {"customer_name": "Budi Santoso", "customer_title": "Event Manager", "rating": 5, "is_featured": True,
     "content": "We rely on Elegance for every corporate event. Always professional."},
    {"customer_name": "Andi Pratama", "customer_title": None, "rating": 4, "is_featured": False,
     "content": "Great service and fair prices."},
]


def seed_demo_data(store, auth, admin_email: str, admin_password: str):
    if store.count("cars") > 0:
        return

    category_ids = {}
    for category in CATEGORIES:
        row = store.insert("categories", category)
        category_ids[row["name"]] = row["id"]

    for car in SAMPLE_CARS:
        values = dict(car)
        values["category_id"] = category_ids[values.pop("category")]
        store.insert("cars", values)

    for item in SAMPLE_GALLERY:
        store.insert("galleries", item)
    for item in SAMPLE_TESTIMONIALS:
        store.insert("testimonials", item)

    try:
        create_admin_account(store, auth, admin_email, admin_password)
    except AuthError:
        logger.info("Demo admin %s already exists", admin_email)

    logger.info("Seeded demo data: %d cars", len(SAMPLE_CARS))
