import logging
import math
from dataclasses import dataclass, fields
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Union

from errors import BookingValidationError, BookingSubmissionError, StoreError
from schemas import Car, Booking, BookingIn

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime, None]

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class BookingForm:
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    start_date: str = ""
    end_date: str = ""
    notes: str = ""

    def clear(self):
        for f in fields(self):
            setattr(self, f.name, "")


def parse_date(value: DateLike) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def calculate_total_days(start_date: DateLike, end_date: DateLike) -> int:
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start is None or end is None:
        return 0
    days = math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)
    # same-day and inverted ranges still show one day until submission checks them
    return max(1, days)


def calculate_total_price(car: Optional[Car], start_date: DateLike, end_date: DateLike) -> float:
    if car is None:
        return 0
    return car.price_per_day * calculate_total_days(start_date, end_date)


def validate(car: Optional[Car], form: BookingForm):
    if car is None:
        raise BookingValidationError("Please select a car first")

    required = (form.customer_name, form.customer_email, form.customer_phone,
                form.start_date, form.end_date)
    if not all(required):
        raise BookingValidationError("Please fill in all required fields")

    start = parse_date(form.start_date)
    end = parse_date(form.end_date)
    if start is None or end is None:
        raise BookingValidationError("Invalid date")
    if start >= end:
        raise BookingValidationError("End date must be after start date")


def submit_booking(store, car: Optional[Car], form: BookingForm,
                   on_close: Optional[Callable[[], None]] = None) -> dict:
    """
    Validate the form and insert one pending booking.

    Validation failures raise BookingValidationError before the store is
    touched. A store failure raises BookingSubmissionError and leaves the
    form as it was; on success the form is cleared and on_close called.
    """
    validate(car, form)

    record = BookingIn(
        car_id=car.id,
        customer_name=form.customer_name,
        customer_email=form.customer_email,
        customer_phone=form.customer_phone,
        start_date=form.start_date,
        end_date=form.end_date,
        total_days=calculate_total_days(form.start_date, form.end_date),
        total_price=calculate_total_price(car, form.start_date, form.end_date),
        notes=form.notes,
        status="pending",
    )

    try:
        row = store.insert("bookings", record.model_dump())
    except StoreError as e:
        logger.error("Booking for car %s could not be saved: %s", car.id, e)
        raise BookingSubmissionError("Failed to submit booking. Please try again.") from e

    logger.info("Booking %s created for %s %s, %d days",
                row.get("id"), car.brand, car.model, record.total_days)
    form.clear()
    if on_close is not None:
        on_close()
    return row


BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")


def fetch_bookings(store) -> List[Booking]:
    return [Booking.model_validate(row) for row in store.select("bookings", order=[("created_at", False)])]


def set_status(store, booking_id: str, status: str) -> Optional[Booking]:
    if status not in BOOKING_STATUSES:
        current = store.single("bookings", eq={"id": booking_id})
        # a status set elsewhere may be saved back unchanged
        if current is None or current["status"] != status:
            raise BookingValidationError(f"Unknown status: {status}")
        return Booking.model_validate(current)
    rows = store.update("bookings", {"status": status}, eq={"id": booking_id})
    if not rows:
        return None
    logger.info("Booking %s marked %s", booking_id, status)
    return Booking.model_validate(rows[0])
