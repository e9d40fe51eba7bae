from __future__ import annotations

import re
from datetime import date

from app.domain.entities.appointment import Appointment
from app.domain.entities.notification import NotificationKind


def format_whatsapp_number(phone: str, country_code: str = "55") -> str:
    """
    Normalize a phone number to the international digits-only form.
    (11) 99999-9999 -> 5511999999999
    """
    digits = re.sub(r"\D", "", phone)
    if len(digits) in (10, 11):
        return f"{country_code}{digits}"
    return digits


def format_long_date(value: date) -> str:
    return f"{value.strftime('%A')}, {value.strftime('%B')} {value.day:02d}"


def render_message(
    kind: NotificationKind,
    appointment: Appointment,
    service_name: str,
    business_name: str = "",
    currency: str = "R$",
) -> str:
    when = format_long_date(appointment.date)
    price = f"{currency} {appointment.price:.2f}"
    signature = f"\n\n{business_name}" if business_name else ""

    if kind == NotificationKind.confirmation:
        body = (
            "✅ *Appointment confirmed!*\n\n"
            f"Hi {appointment.client_name}!\n\n"
            "Your appointment has been *confirmed*:\n\n"
            f"📅 *Date:* {when}\n"
            f"🕐 *Time:* {appointment.time}\n"
            f"✂️ *Service:* {service_name}\n"
            f"💰 *Price:* {price}\n\n"
            "We look forward to seeing you!\n\n"
            "If you have any questions, get in touch with us."
        )
    elif kind == NotificationKind.reschedule:
        body = (
            "🔄 *Appointment rescheduled!*\n\n"
            f"Hi {appointment.client_name}!\n\n"
            "Your appointment has been *moved*:\n\n"
            f"📅 *New date:* {when}\n"
            f"🕐 *New time:* {appointment.time}\n"
            f"✂️ *Service:* {service_name}\n"
            f"💰 *Price:* {price}\n\n"
            "See you at the new time!\n\n"
            "If you have any questions, get in touch with us."
        )
    elif kind == NotificationKind.cancellation:
        body = (
            "❌ *Appointment cancelled*\n\n"
            f"Hi {appointment.client_name}!\n\n"
            "Unfortunately your appointment has been *cancelled*:\n\n"
            f"📅 *Date:* {when}\n"
            f"🕐 *Time:* {appointment.time}\n"
            f"✂️ *Service:* {service_name}\n\n"
            "We are sorry for the inconvenience.\n\n"
            "To book again, get in touch with us."
        )
    elif kind == NotificationKind.reminder:
        body = (
            "⏰ *Appointment reminder*\n\n"
            f"Hi {appointment.client_name}!\n\n"
            "This is a reminder of your appointment:\n\n"
            f"📅 *Date:* {when}\n"
            f"🕐 *Time:* {appointment.time}\n"
            f"✂️ *Service:* {service_name}\n"
            f"💰 *Price:* {price}\n\n"
            "See you soon! 🎉\n\n"
            "If you need to reschedule, let us know in advance."
        )
    else:
        body = f"Hi {appointment.client_name}! Your appointment is on {when} at {appointment.time}."
    return body + signature
