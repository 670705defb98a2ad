import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Form, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

import models  # noqa: F401  registers tables on Base
from auth import AuthClient, admin_login, create_admin_account, is_admin
from booking import (BookingForm, BOOKING_STATUSES, calculate_total_days, calculate_total_price,
                     fetch_bookings, set_status, submit_booking)
from catalog import ALL, fetch_car, fetch_categories, fetch_fleet, filter_by_category, format_price
from config import settings
from content import EVENT_TYPES, fetch_gallery, fetch_testimonials, filter_by_event_type, stars
from dashboard import fetch_stats
from database import Base, SessionLocal, engine
from errors import AccessDenied, AuthError, BookingSubmissionError, BookingValidationError, StoreError
from schemas import BookingRequest, DashboardStats, StatusUpdate
from seed import seed_demo_data
from services.email_service import send_booking_emails
from services.whatsapp_service import booking_message, send_whatsapp
from store import DataStore

# ================== LOGGING ==================
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ================== DATABASE ==================
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

Base.metadata.create_all(engine)


def get_store() -> DataStore:
    return DataStore(SessionLocal)


def get_auth() -> AuthClient:
    return AuthClient(SessionLocal, ttl_hours=settings.SESSION_TTL_HOURS)


# ================== APP ==================
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DEMO_DATA:
        seed_demo_data(get_store(), get_auth(), settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    yield


app = FastAPI(title="Elegance Car Rental", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.mount("/static", StaticFiles(directory=os.path.join(BASE_DIR, "frontend", "static")), name="static")

templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "frontend", "templates"))
templates.env.filters["price"] = format_price
templates.env.filters["stars"] = stars


# ================== HELPERS ==================
def current_admin(request: Request, store: DataStore, auth: AuthClient) -> Optional[str]:
    user_id = auth.get_user(request.cookies.get(settings.SESSION_COOKIE))
    if user_id and is_admin(store, user_id):
        return user_id
    return None


def require_admin(request: Request, store: DataStore = Depends(get_store),
                  auth: AuthClient = Depends(get_auth)) -> str:
    user_id = auth.get_user(request.cookies.get(settings.SESSION_COOKIE))
    if not user_id:
        raise HTTPException(401, "Not signed in")
    if not is_admin(store, user_id):
        raise HTTPException(403, "You don't have admin privileges.")
    return user_id


def render_index(request: Request, store: DataStore, category: str = ALL, event_type: str = ALL,
                 car_id: Optional[str] = None, form: Optional[BookingForm] = None,
                 error: Optional[str] = None, status_code: int = 200):
    load_errors = []

    try:
        categories = fetch_categories(store)
        cars = fetch_fleet(store)
    except StoreError:
        logger.error("Fleet could not be loaded")
        categories, cars = [], []
        load_errors.append("Our fleet could not be loaded right now.")

    try:
        gallery = fetch_gallery(store)
    except StoreError:
        logger.error("Gallery could not be loaded")
        gallery = []
        load_errors.append("The gallery could not be loaded right now.")

    try:
        testimonials = fetch_testimonials(store)
    except StoreError:
        logger.error("Testimonials could not be loaded")
        testimonials = []

    form = form or BookingForm()
    selected_car = next((car for car in cars if car.id == car_id), None)

    return templates.TemplateResponse(request, "index.html", {
        "categories": categories,
        "selected_category": category or ALL,
        "cars": filter_by_category(cars, category),
        "all_cars": cars,
        "event_types": EVENT_TYPES,
        "selected_event_type": event_type or ALL,
        "gallery": filter_by_event_type(gallery, event_type),
        "testimonials": testimonials,
        "form": form,
        "selected_car": selected_car,
        "total_days": calculate_total_days(form.start_date, form.end_date),
        "total_price": calculate_total_price(selected_car, form.start_date, form.end_date),
        "error": error,
        "load_errors": load_errors,
    }, status_code=status_code)


async def notify_new_booking(booking: dict, car):
    # the booking is already saved, a failed alert must not fail the response
    try:
        await send_booking_emails(booking, car)
        await run_in_threadpool(send_whatsapp, booking_message(booking, car))
    except Exception:
        logger.exception("Notifications for booking %s failed", booking.get("id"))


def load_car(store: DataStore, car_id: Optional[str]):
    """Only cars offered in the fleet can be booked."""
    try:
        car = fetch_car(store, car_id)
    except StoreError as e:
        raise BookingSubmissionError("Failed to submit booking. Please try again.") from e
    if car is not None and not car.is_available:
        return None
    return car


# ================== PAGES ==================
@app.get("/", response_class=HTMLResponse)
def index(request: Request, category: str = ALL, event_type: str = ALL, car_id: Optional[str] = None,
          store: DataStore = Depends(get_store)):
    return render_index(request, store, category, event_type, car_id)


@app.post("/book", response_class=HTMLResponse)
async def book(
    request: Request,
    car_id: str = Form(""),
    customer_name: str = Form(""),
    customer_email: str = Form(""),
    customer_phone: str = Form(""),
    start_date: str = Form(""),
    end_date: str = Form(""),
    notes: str = Form(""),
    store: DataStore = Depends(get_store),
):
    form = BookingForm(customer_name, customer_email, customer_phone, start_date, end_date, notes)
    try:
        car = load_car(store, car_id)
        booking = submit_booking(store, car, form)
    except BookingValidationError as e:
        logger.warning("Booking rejected: %s", e)
        return render_index(request, store, car_id=car_id, form=form, error=str(e), status_code=400)
    except BookingSubmissionError as e:
        return render_index(request, store, car_id=car_id, form=form, error=str(e), status_code=503)

    await notify_new_booking(booking, car)
    return RedirectResponse("/success", status_code=303)


@app.get("/success", response_class=HTMLResponse)
def success(request: Request):
    return templates.TemplateResponse(request, "success.html", {})


# ================== API ==================
@app.get("/api/categories")
def api_categories(store: DataStore = Depends(get_store)):
    try:
        return fetch_categories(store)
    except StoreError:
        raise HTTPException(503, "Categories could not be loaded")


@app.get("/api/cars")
def api_cars(category: str = ALL, store: DataStore = Depends(get_store)):
    try:
        return filter_by_category(fetch_fleet(store), category)
    except StoreError:
        raise HTTPException(503, "Fleet could not be loaded")


@app.get("/api/gallery")
def api_gallery(event_type: str = ALL, store: DataStore = Depends(get_store)):
    try:
        return filter_by_event_type(fetch_gallery(store), event_type)
    except StoreError:
        raise HTTPException(503, "Gallery could not be loaded")


@app.get("/api/testimonials")
def api_testimonials(store: DataStore = Depends(get_store)):
    try:
        return fetch_testimonials(store)
    except StoreError:
        raise HTTPException(503, "Testimonials could not be loaded")


@app.get("/api/quote")
def api_quote(car_id: Optional[str] = None, start_date: str = "", end_date: str = "",
              store: DataStore = Depends(get_store)):
    try:
        car = fetch_car(store, car_id)
    except StoreError:
        raise HTTPException(503, "Car could not be loaded")
    total_price = calculate_total_price(car, start_date, end_date)
    return {
        "car_id": car.id if car else None,
        "total_days": calculate_total_days(start_date, end_date),
        "total_price": total_price,
        "formatted_price": format_price(total_price),
    }


@app.post("/api/bookings")
async def api_create_booking(payload: BookingRequest, store: DataStore = Depends(get_store)):
    form = BookingForm(
        payload.customer_name, payload.customer_email, payload.customer_phone,
        payload.start_date, payload.end_date, payload.notes,
    )
    try:
        car = load_car(store, payload.car_id)
        booking = submit_booking(store, car, form)
    except BookingValidationError as e:
        logger.warning("Booking rejected: %s", e)
        raise HTTPException(400, str(e))
    except BookingSubmissionError as e:
        raise HTTPException(503, str(e))

    await notify_new_booking(booking, car)
    return {
        "id": booking["id"],
        "total_days": booking["total_days"],
        "total_price": booking["total_price"],
        "status": booking["status"],
    }


# ================== ADMIN ==================
@app.get("/admin/login", response_class=HTMLResponse)
def admin_login_page(request: Request, store: DataStore = Depends(get_store),
                     auth: AuthClient = Depends(get_auth)):
    if current_admin(request, store, auth):
        return RedirectResponse("/admin", status_code=303)
    return templates.TemplateResponse(request, "admin_login.html", {
        "allow_signup": settings.ALLOW_ADMIN_SIGNUP,
    })


def render_login(request: Request, error: Optional[str] = None, message: Optional[str] = None,
                 email: str = "", status_code: int = 200):
    return templates.TemplateResponse(request, "admin_login.html", {
        "error": error,
        "message": message,
        "email": email,
        "allow_signup": settings.ALLOW_ADMIN_SIGNUP,
    }, status_code=status_code)


@app.post("/admin/login", response_class=HTMLResponse)
def admin_login_submit(request: Request, email: str = Form(""), password: str = Form(""),
                       store: DataStore = Depends(get_store), auth: AuthClient = Depends(get_auth)):
    try:
        session = admin_login(store, auth, email, password)
    except AuthError as e:
        logger.warning("Admin login failed for %s", email)
        return render_login(request, error=str(e) or "Invalid credentials", email=email, status_code=401)
    except AccessDenied as e:
        return render_login(request, error=str(e), email=email, status_code=403)
    except StoreError:
        return render_login(request, error="Login is unavailable right now.", email=email, status_code=503)

    response = RedirectResponse("/admin", status_code=303)
    response.set_cookie(
        settings.SESSION_COOKIE,
        session.token,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        samesite="lax",
    )
    return response


@app.post("/admin/signup", response_class=HTMLResponse)
def admin_signup(request: Request, email: str = Form(""), password: str = Form(""),
                 store: DataStore = Depends(get_store), auth: AuthClient = Depends(get_auth)):
    if not settings.ALLOW_ADMIN_SIGNUP:
        raise HTTPException(404)
    try:
        create_admin_account(store, auth, email, password)
    except AuthError as e:
        return render_login(request, error=str(e), email=email, status_code=400)
    except StoreError:
        return render_login(request, error="Sign up is unavailable right now.", email=email, status_code=503)
    return render_login(request, message="Admin account created successfully. You can now sign in.",
                        email=email)


@app.post("/admin/logout")
def admin_logout(request: Request, auth: AuthClient = Depends(get_auth)):
    token = request.cookies.get(settings.SESSION_COOKIE)
    if token:
        try:
            auth.sign_out(token)
        except StoreError:
            logger.error("Session could not be revoked on sign out")
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(settings.SESSION_COOKIE)
    return response


@app.get("/admin", response_class=HTMLResponse)
def admin(request: Request, store: DataStore = Depends(get_store), auth: AuthClient = Depends(get_auth)):
    if not current_admin(request, store, auth):
        return RedirectResponse("/admin/login", status_code=303)

    error = None
    try:
        stats = fetch_stats(store)
        bookings = fetch_bookings(store)
    except StoreError:
        logger.error("Dashboard stats could not be loaded")
        stats, bookings = DashboardStats(), []
        error = "Dashboard data could not be loaded right now."

    return templates.TemplateResponse(request, "admin.html", {
        "stats": stats,
        "bookings": bookings,
        "statuses": BOOKING_STATUSES,
        "error": error,
    })


@app.post("/admin/bookings/{booking_id}/status")
def admin_booking_status_form(booking_id: str, status: str = Form(...), _: str = Depends(require_admin),
                              store: DataStore = Depends(get_store)):
    try:
        booking = set_status(store, booking_id, status)
    except BookingValidationError as e:
        raise HTTPException(400, str(e))
    except StoreError:
        raise HTTPException(503, "Booking could not be updated")
    if booking is None:
        raise HTTPException(404, "Booking not found")
    return RedirectResponse("/admin", status_code=303)


@app.get("/api/admin/stats")
def admin_stats(_: str = Depends(require_admin), store: DataStore = Depends(get_store)):
    try:
        return fetch_stats(store)
    except StoreError:
        raise HTTPException(503, "Dashboard data could not be loaded")


@app.get("/api/admin/bookings")
def admin_bookings(_: str = Depends(require_admin), store: DataStore = Depends(get_store)):
    try:
        return fetch_bookings(store)
    except StoreError:
        raise HTTPException(503, "Bookings could not be loaded")


@app.post("/api/admin/bookings/{booking_id}/status")
def admin_booking_status(booking_id: str, payload: StatusUpdate, _: str = Depends(require_admin),
                         store: DataStore = Depends(get_store)):
    try:
        booking = set_status(store, booking_id, payload.status)
    except BookingValidationError as e:
        raise HTTPException(400, str(e))
    except StoreError:
        raise HTTPException(503, "Booking could not be updated")
    if booking is None:
        raise HTTPException(404, "Booking not found")
    return booking


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
