"""Notification services for sending reservation emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

from apps.reservations.domain.errors import NotificationFailure

if TYPE_CHECKING:  # pragma: no cover
    from apps.reservations.domain.entities import Reservation, Unit

logger = logging.getLogger(__name__)

SIGNATURE = "<p>Saludos,<br>El equipo de la villa</p>"


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(recipient_email: str, subject: str, html_message: str) -> None:
    """
    Send one email with an HTML body and its plain text version.

    Raises:
        NotificationFailure: The mail backend rejected the message
    """
    try:
        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )
    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        raise NotificationFailure(f"Email to {recipient_email} failed: {e}") from e

    logger.info(f"Email sent successfully to {recipient_email}: {subject}")


def _format_price(amount: int) -> str:
    return f"${amount:,}".replace(",", ".")


def _stay_details(reservation: "Reservation", unit: "Unit") -> str:
    add_on = "Sí" if reservation.includes_add_on else "No"
    return f"""
        <ul>
            <li><strong>Código:</strong> {reservation.confirmation_code}</li>
            <li><strong>Cabaña:</strong> {escape(unit.name)}</li>
            <li><strong>Llegada:</strong> {reservation.check_in.strftime("%d/%m/%Y")}</li>
            <li><strong>Salida:</strong> {reservation.check_out.strftime("%d/%m/%Y")}</li>
            <li><strong>Noches:</strong> {reservation.nights}</li>
            <li><strong>Huéspedes:</strong> {reservation.guests}</li>
            <li><strong>Kit de asado:</strong> {add_on}</li>
            <li><strong>Total:</strong> {_format_price(reservation.total_price)}</li>
        </ul>
    """


def send_reservation_received_email(reservation: "Reservation", unit: "Unit") -> None:
    """Guest email right after creation: code, payment instructions, deadline."""
    subject = f"Reserva {reservation.confirmation_code} recibida, pendiente de pago"
    instructions = "<br>".join(escape(line) for line in reservation.payment_instructions.splitlines())
    deadline = reservation.frozen_until.strftime("%d/%m/%Y %H:%M") if reservation.frozen_until else "-"

    html_message = f"""
    <html>
    <body>
        <h2>Hola, {escape(reservation.guest_name)}</h2>
        <p>Recibimos tu solicitud de reserva. Las fechas quedan apartadas hasta el {deadline}.</p>
        <h3>Detalles de la reserva:</h3>
        {_stay_details(reservation, unit)}
        <h3>Instrucciones de pago:</h3>
        <p>{instructions}</p>
        {SIGNATURE}
    </body>
    </html>
    """
    send_email_notification(reservation.guest_email, subject, html_message)


def send_new_reservation_to_owner_email(reservation: "Reservation", unit: "Unit") -> None:
    """Owner email about a new pending reservation awaiting the deposit."""
    owner_email = getattr(settings, "OWNER_EMAIL", "")
    if not owner_email:
        logger.debug("OWNER_EMAIL not configured, owner notification skipped")
        return

    subject = f"Nueva reserva pendiente: {unit.name} {reservation.check_in.isoformat()}"
    html_message = f"""
    <html>
    <body>
        <h2>Nueva reserva pendiente de pago</h2>
        <p><strong>Huésped:</strong> {escape(reservation.guest_name)} ({escape(reservation.guest_email)})</p>
        {_stay_details(reservation, unit)}
        <p>Confirma la reserva en el panel de administración cuando llegue el depósito.</p>
    </body>
    </html>
    """
    send_email_notification(owner_email, subject, html_message)


def send_reservation_confirmed_email(reservation: "Reservation", unit: "Unit") -> None:
    subject = f"Reserva {reservation.confirmation_code} confirmada"
    html_message = f"""
    <html>
    <body>
        <h2>Hola, {escape(reservation.guest_name)}</h2>
        <p>Recibimos tu depósito. Tu reserva está confirmada.</p>
        {_stay_details(reservation, unit)}
        {SIGNATURE}
    </body>
    </html>
    """
    send_email_notification(reservation.guest_email, subject, html_message)


def send_reservation_expired_email(reservation: "Reservation", unit: "Unit") -> None:
    subject = f"Reserva {reservation.confirmation_code} expirada"
    html_message = f"""
    <html>
    <body>
        <h2>Hola, {escape(reservation.guest_name)}</h2>
        <p>No recibimos el depósito a tiempo, así que liberamos las fechas de tu reserva
        en {escape(unit.name)} ({reservation.check_in.strftime("%d/%m/%Y")} -
        {reservation.check_out.strftime("%d/%m/%Y")}).</p>
        <p>Si aún quieres venir, puedes hacer una nueva reserva.</p>
        {SIGNATURE}
    </body>
    </html>
    """
    send_email_notification(reservation.guest_email, subject, html_message)
