import logging
import os
from html import escape

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig

from catalog import format_price
from config import settings

logger = logging.getLogger(__name__)

TEMPLATE_FOLDER = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "frontend", "templates")


def get_mail_config() -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.MAIL_USERNAME,
        MAIL_PASSWORD=settings.MAIL_PASSWORD,
        MAIL_FROM=settings.MAIL_FROM,
        MAIL_PORT=settings.MAIL_PORT,
        MAIL_SERVER=settings.MAIL_SERVER,
        MAIL_STARTTLS=True,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=True,
        TEMPLATE_FOLDER=TEMPLATE_FOLDER,
    )


def render_booking_email(booking: dict, car) -> str:
    return f"""
    <html>
    <body>
        <h2>Dear {escape(booking["customer_name"])},</h2>
        <p>Thank you for booking the <b>{escape(car.brand)} {escape(car.model)}</b>
        from <b>{escape(booking["start_date"])}</b> to <b>{escape(booking["end_date"])}</b>.</p>
        <p>Duration: {booking["total_days"]} day(s)<br>
        Total: {format_price(booking["total_price"])}</p>
        <p>Your booking is pending. We will contact you shortly to confirm it.</p>
        <hr>
        <p>Elegance Car Rental</p>
    </body>
    </html>
    """


def render_admin_email(booking: dict, car) -> str:
    return f"""
    <html>
    <body>
        <h2>New booking</h2>
        <p>Car: {escape(car.brand)} {escape(car.model)}</p>
        <p>Name: {escape(booking["customer_name"])}</p>
        <p>Phone: {escape(booking["customer_phone"])}</p>
        <p>Email: {escape(booking["customer_email"])}</p>
        <p>Dates: {escape(booking["start_date"])} to {escape(booking["end_date"])}</p>
        <p>Total: {format_price(booking["total_price"])}</p>
        <p><a href="{settings.DOMAIN}/admin">Open dashboard</a></p>
    </body>
    </html>
    """


async def send_booking_emails(booking: dict, car):
    if not settings.mail_enabled:
        return

    try:
        fm = FastMail(get_mail_config())
    except Exception:
        logger.exception("Mail settings are invalid, booking emails skipped")
        return

    messages = [
        ("Your Elegance Car Rental booking", booking["customer_email"], render_booking_email),
        ("New booking received", settings.MAIL_USERNAME, render_admin_email),
    ]
    for subject, recipient, render in messages:
        try:
            await fm.send_message(MessageSchema(
                subject=subject,
                recipients=[recipient],
                body=render(booking, car),
                subtype="html"
            ))
        except Exception:
            logger.exception("Sending booking email to %s failed", recipient)
