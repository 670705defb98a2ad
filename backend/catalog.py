import logging
from typing import List, Optional

from schemas import Car, Category

logger = logging.getLogger(__name__)

ALL = "all"


def format_price(price) -> str:
    """Rupiah without decimals, e.g. Rp 1.500.000"""
    amount = f"{round(float(price or 0)):,}".replace(",", ".")
    return f"Rp {amount}"


def filter_by_category(cars: List[Car], category: Optional[str]) -> List[Car]:
    if not category or category == ALL:
        return cars
    return [car for car in cars if car.category_name == category]


def fetch_categories(store) -> List[Category]:
    return [Category.model_validate(row) for row in store.select("categories", order=[("name", True)])]


def fetch_fleet(store) -> List[Car]:
    """Available cars, featured first, each carrying its category name."""
    names = {c.id: c.name for c in fetch_categories(store)}
    rows = store.select("cars", eq={"is_available": True}, order=[("is_featured", False)])
    cars = []
    for row in rows:
        car = Car.model_validate(row)
        car.category_name = names.get(car.category_id)
        cars.append(car)
    return cars


def fetch_car(store, car_id: Optional[str]) -> Optional[Car]:
    if not car_id:
        return None
    row = store.single("cars", eq={"id": car_id})
    if row is None:
        return None
    car = Car.model_validate(row)
    if car.category_id:
        category = store.single("categories", columns=["name"], eq={"id": car.category_id})
        car.category_name = category["name"] if category else None
    return car
