from catalog import fetch_car, fetch_fleet, filter_by_category, format_price
from content import fetch_gallery, fetch_testimonials, filter_by_event_type, stars
from schemas import GalleryItem
from conftest import make_car


def fleet():
    return [
        make_car(id="a", category_name="SUV"),
        make_car(id="b", category_name="Luxury"),
        make_car(id="c", category_name="SUV"),
        make_car(id="d", category_name=None),
    ]


def test_filter_all_returns_input_unchanged():
    cars = fleet()
    assert filter_by_category(cars, "all") is cars
    assert filter_by_category(cars, "") is cars


def test_filter_by_category_name():
    result = filter_by_category(fleet(), "SUV")
    assert [car.id for car in result] == ["a", "c"]


def test_filter_is_idempotent():
    once = filter_by_category(fleet(), "Luxury")
    assert filter_by_category(once, "Luxury") == once


def test_filter_unknown_category_is_empty():
    assert filter_by_category(fleet(), "Van") == []


def test_format_price():
    assert format_price(1500000) == "Rp 1.500.000"
    assert format_price(0) == "Rp 0"
    assert format_price(None) == "Rp 0"


def test_fetch_fleet_joins_category_and_puts_featured_first(store, add_car):
    add_car(category="SUV", brand="Toyota", model="Fortuner")
    add_car(category="Luxury", brand="Mercedes-Benz", model="E-Class", is_featured=True)
    add_car(category="SUV", brand="Honda", model="CR-V", is_available=False)

    cars = fetch_fleet(store)

    assert [car.model for car in cars] == ["E-Class", "Fortuner"]
    assert cars[0].category_name == "Luxury"
    assert cars[1].category_name == "SUV"
    assert cars[1].features == []


def test_fetch_car(store, add_car):
    row = add_car(category="Wedding Car", features=["Ribbon", "Flowers"])
    car = fetch_car(store, row["id"])
    assert car.category_name == "Wedding Car"
    assert car.features == ["Ribbon", "Flowers"]
    assert fetch_car(store, "missing") is None
    assert fetch_car(store, None) is None


def test_gallery_filter():
    items = [
        GalleryItem(id="1", title="A", event_type="wedding"),
        GalleryItem(id="2", title="B", event_type="corporate"),
        GalleryItem(id="3", title="C"),
    ]
    assert filter_by_event_type(items, "all") is items
    assert [i.id for i in filter_by_event_type(items, "wedding")] == ["1"]


def test_gallery_lists_featured_first(store):
    store.insert("galleries", {"title": "Launch", "event_type": "corporate"})
    store.insert("galleries", {"title": "Garden Wedding", "event_type": "wedding", "is_featured": True})

    assert [i.title for i in fetch_gallery(store)] == ["Garden Wedding", "Launch"]


def test_only_featured_testimonials(store):
    store.insert("testimonials", {"customer_name": "Rina", "content": "Perfect", "rating": 5, "is_featured": True})
    store.insert("testimonials", {"customer_name": "Andi", "content": "Good", "rating": 4})

    testimonials = fetch_testimonials(store)
    assert [t.customer_name for t in testimonials] == ["Rina"]


def test_stars():
    assert stars(4) == "★★★★☆"
    assert stars(5) == "★★★★★"
