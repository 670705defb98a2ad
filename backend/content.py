from typing import List, Optional

from schemas import GalleryItem, Testimonial

ALL = "all"

EVENT_TYPES = [
    {"value": ALL, "label": "All Events"},
    {"value": "wedding", "label": "Weddings"},
    {"value": "corporate", "label": "Corporate"},
    {"value": "ceremonial", "label": "Ceremonial"},
]


def fetch_gallery(store) -> List[GalleryItem]:
    rows = store.select("galleries", order=[("is_featured", False), ("created_at", False)])
    return [GalleryItem.model_validate(row) for row in rows]


def filter_by_event_type(items: List[GalleryItem], event_type: Optional[str]) -> List[GalleryItem]:
    if not event_type or event_type == ALL:
        return items
    return [item for item in items if item.event_type == event_type]


def fetch_testimonials(store) -> List[Testimonial]:
    rows = store.select("testimonials", eq={"is_featured": True}, order=[("created_at", False)])
    return [Testimonial.model_validate(row) for row in rows]


def stars(rating: int) -> str:
    rating = max(0, min(5, rating))
    return "★" * rating + "☆" * (5 - rating)
