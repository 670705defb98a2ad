from typing import Dict, Iterable, Any

from schemas import DashboardStats

PENDING = "pending"


def aggregate(car_count: int, bookings: Iterable[Dict[str, Any]]) -> DashboardStats:
    """
    Summarise fetched booking rows.

    Revenue adds total_price of every row whatever its status, cancelled
    bookings included.
    """
    bookings = list(bookings)
    return DashboardStats(
        total_cars=car_count or 0,
        total_bookings=len(bookings),
        pending_bookings=sum(1 for b in bookings if b.get("status") == PENDING),
        total_revenue=sum(float(b.get("total_price") or 0) for b in bookings),
    )


def fetch_stats(store) -> DashboardStats:
    car_count = store.count("cars")
    bookings = store.select("bookings", columns=["total_price", "status"])
    return aggregate(car_count, bookings)
