from datetime import date

import pytest

from booking import (BookingForm, calculate_total_days, calculate_total_price,
                     set_status, submit_booking)
from errors import BookingSubmissionError, BookingValidationError
from conftest import RecordingStore, make_car


def filled_form(**values):
    data = {
        "customer_name": "Rina Wijaya",
        "customer_email": "rina@example.com",
        "customer_phone": "+62 811 000 111",
        "start_date": "2024-01-01",
        "end_date": "2024-01-04",
        "notes": "Wedding on Saturday",
    }
    data.update(values)
    return BookingForm(**data)


# ------------------ calculator ------------------
def test_total_days_without_dates_is_zero():
    assert calculate_total_days("", "2024-01-04") == 0
    assert calculate_total_days("2024-01-01", None) == 0


def test_total_days_counts_whole_days():
    assert calculate_total_days("2024-01-01", "2024-01-04") == 3
    assert calculate_total_days(date(2024, 2, 27), date(2024, 3, 1)) == 3


def test_partial_day_rounds_up():
    assert calculate_total_days("2024-01-01T08:00", "2024-01-02T09:00") == 2


@pytest.mark.parametrize("start,end", [
    ("2024-01-01", "2024-01-01"),
    ("2024-01-05", "2024-01-01"),
])
def test_total_days_floor_is_one(start, end):
    assert calculate_total_days(start, end) == 1


def test_unparsable_date_counts_as_absent():
    assert calculate_total_days("tomorrow", "2024-01-04") == 0


def test_total_price(car):
    assert calculate_total_price(car, "2024-01-01", "2024-01-04") == 1500000
    assert calculate_total_price(make_car(price_per_day=0), "2024-01-01", "2024-01-04") == 0


def test_total_price_without_car_is_zero():
    assert calculate_total_price(None, "2024-01-01", "2024-01-04") == 0


# ------------------ submission ------------------
def test_submit_inserts_pending_booking(recording_store, car):
    form = filled_form()
    closed = []

    row = submit_booking(recording_store, car, form, on_close=lambda: closed.append(True))

    assert len(recording_store.inserted) == 1
    table, values = recording_store.inserted[0]
    assert table == "bookings"
    assert values["car_id"] == "car-1"
    assert values["total_days"] == 3
    assert values["total_price"] == 1500000
    assert values["status"] == "pending"
    assert values["notes"] == "Wedding on Saturday"
    assert row["id"] == "row-1"
    assert form == BookingForm()
    assert closed == [True]


def test_submit_without_car_is_rejected_first(recording_store):
    with pytest.raises(BookingValidationError, match="select a car"):
        submit_booking(recording_store, None, BookingForm())
    assert recording_store.inserted == []


@pytest.mark.parametrize("field", [
    "customer_name", "customer_email", "customer_phone", "start_date", "end_date",
])
def test_submit_requires_field(recording_store, car, field):
    form = filled_form(**{field: ""})
    with pytest.raises(BookingValidationError, match="required fields"):
        submit_booking(recording_store, car, form)
    assert recording_store.inserted == []


def test_notes_are_optional(recording_store, car):
    submit_booking(recording_store, car, filled_form(notes=""))
    assert recording_store.inserted[0][1]["notes"] == ""


def test_only_empty_fields_count_as_missing(recording_store, car):
    submit_booking(recording_store, car, filled_form(customer_name=" "))
    assert recording_store.inserted[0][1]["customer_name"] == " "


@pytest.mark.parametrize("start,end", [
    ("2024-01-05", "2024-01-01"),
    ("2024-01-01", "2024-01-01"),
])
def test_submit_rejects_bad_date_order(recording_store, car, start, end):
    form = filled_form(start_date=start, end_date=end)
    with pytest.raises(BookingValidationError, match="End date must be after start date"):
        submit_booking(recording_store, car, form)
    assert recording_store.inserted == []
    assert form.start_date == start


def test_submit_rejects_invalid_date(recording_store, car):
    with pytest.raises(BookingValidationError, match="Invalid date"):
        submit_booking(recording_store, car, filled_form(end_date="next week"))
    assert recording_store.inserted == []


def test_store_failure_keeps_form(car):
    store = RecordingStore(fail=True)
    form = filled_form()
    closed = []

    with pytest.raises(BookingSubmissionError, match="Failed to submit booking"):
        submit_booking(store, car, form, on_close=lambda: closed.append(True))

    assert form.customer_name == "Rina Wijaya"
    assert closed == []


def test_identical_submissions_create_two_rows(recording_store, car):
    submit_booking(recording_store, car, filled_form())
    submit_booking(recording_store, car, filled_form())
    assert len(recording_store.inserted) == 2


# ------------------ status ------------------
def test_set_status(store, add_car):
    car = make_car(id=add_car()["id"])
    row = submit_booking(store, car, filled_form())

    booking = set_status(store, row["id"], "confirmed")
    assert booking.status == "confirmed"
    assert booking.total_price == 1500000


def test_set_status_rejects_unknown_status(store):
    with pytest.raises(BookingValidationError):
        set_status(store, "missing", "archived")


def test_set_status_missing_booking(store):
    assert set_status(store, "missing", "cancelled") is None


def test_unlisted_status_can_be_saved_unchanged(store, add_car):
    car = make_car(id=add_car()["id"])
    row = submit_booking(store, car, filled_form())
    store.update("bookings", {"status": "awaiting_payment"}, eq={"id": row["id"]})

    assert set_status(store, row["id"], "awaiting_payment").status == "awaiting_payment"
    with pytest.raises(BookingValidationError):
        set_status(store, row["id"], "archived")
