import logging
from typing import Any

from fastapi import APIRouter, Depends

from portfolio.api.responses import failure
from portfolio.schemas.common import MessageResponse
from portfolio.schemas.contact import ContactRequest
from portfolio.services.mail_service import MailDeliveryError, MailService, get_mailer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["Contact"])


@router.post("", response_model=MessageResponse)
async def send_contact_message(payload: ContactRequest, mailer: MailService = Depends(get_mailer)) -> Any:
    try:
        await mailer.send_contact(payload)
    except MailDeliveryError as exc:
        logger.error(f"Error sending email: {exc}")
        return failure(500, "Failed to send message.", exc)
    return MessageResponse(message="Message sent successfully!")
