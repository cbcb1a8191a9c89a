# shop/services/notification_service.py
import smtplib
from email.message import EmailMessage
from typing import Any, Dict

from kombu.exceptions import OperationalError

from shop.celery_worker import celery_app
from shop.data.models.order import OrderModel
from shop.domain.errors import NotificationFailure
from shop.utils.retry import smtp_retry
from shop.utils.settings import (
    MAIL_FROM,
    MANAGER_EMAILS,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_USER,
)
from shop.utils.logging import get_logger

logger = get_logger(__name__)


def order_payload(order: OrderModel) -> Dict[str, Any]:
    """Zamowienie jako zwykly dict, zeby przeszlo przez brokera."""
    return {
        "number": order.number,
        "status": order.status.title.value,
        "client": {
            "name": order.client.name,
            "email": order.client.email,
            "phone": order.client.phone,
        },
        "positions": [
            {
                "title": p.product.title if p.product else "",
                "number": p.number,
                "price": str(p.price),
            }
            for p in order.sale_positions
        ],
        "total": str(order.total),
    }


def render_message(payload: Dict[str, Any]) -> str:
    lines = [
        f"Order {payload['number']} ({payload['status']})",
        "",
        f"Client: {payload['client']['name']}",
        f"Email: {payload['client']['email']}",
        f"Phone: {payload['client']['phone']}",
        "",
    ]
    for p in payload["positions"]:
        lines.append(f"{p['title']} x{p['number']} @ {p['price']}")
    lines.append("")
    lines.append(f"Total: {payload['total']}")
    return "\n".join(lines)


class NotificationService:
    """
    Powiadomienia o zamowieniach. Best-effort: blad nie cofa zamowienia.
    """

    @staticmethod
    def send_order_notification(order: OrderModel) -> bool:
        try:
            send_order_notification_task.delay(order_payload(order))
        except (OperationalError, NotificationFailure) as e:
            logger.warning(f"[NOTIFICATION] Order {order.number} not queued: {e}")
            return False
        except Exception:
            logger.exception(f"[NOTIFICATION] Order {order.number} not queued")
            return False
        logger.info(f"[NOTIFICATION] Order {order.number} queued")
        return True


@smtp_retry()
def _send_mail(message: EmailMessage) -> None:
    with smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=10) as smtp:
        smtp.starttls()
        if SMTP_USER:
            smtp.login(SMTP_USER, SMTP_PASSWORD)
        smtp.send_message(message)


@celery_app.task(name="shop.services.notification_service.send_order_notification_task")
def send_order_notification_task(payload: Dict[str, Any]):
    """
    Wysyla maila do klienta i managerow. Bez SMTP_HOST tylko loguje.
    """
    body = render_message(payload)
    recipients = [r for r in [payload["client"]["email"], *MANAGER_EMAILS] if r]

    if not SMTP_HOST:
        logger.info(f"[NOTIFICATION] {', '.join(recipients)}\n{body}")
        return {"number": payload["number"], "status": "logged"}

    message = EmailMessage()
    message["Subject"] = f"Order {payload['number']}"
    message["From"] = MAIL_FROM
    message["To"] = ", ".join(recipients)
    message.set_content(body)

    try:
        _send_mail(message)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"[NOTIFICATION] Order {payload['number']} mail failed: {e}")
        raise NotificationFailure(str(e)) from e

    return {"number": payload["number"], "status": "sent"}
