import logging

from twilio.rest import Client

from catalog import format_price
from config import settings

logger = logging.getLogger(__name__)


def booking_message(booking: dict, car) -> str:
    return (
        f"New booking: {car.brand} {car.model}\n"
        f"{booking['customer_name']} ({booking['customer_phone']})\n"
        f"{booking['start_date']} to {booking['end_date']}, "
        f"{booking['total_days']} day(s), {format_price(booking['total_price'])}"
    )


def send_whatsapp(message: str):
    if not settings.whatsapp_enabled:
        return

    try:
        client = Client(settings.TWILIO_SID, settings.TWILIO_AUTH_TOKEN)
        client.messages.create(
            body=message,
            from_=f"whatsapp:{settings.TWILIO_WHATSAPP_FROM}",
            to=f"whatsapp:{settings.ADMIN_WHATSAPP_TO}"
        )
    except Exception:
        logger.exception("WhatsApp booking alert failed")
