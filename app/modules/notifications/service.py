import logging
from typing import Any, Dict, Optional

import resend
from fastapi import HTTPException

from app.config import settings
from app.core.http_client import require_key
from app.modules.notifications.schemas import HotelInquiryRequest, HotelInquiryResponse
from app.modules.notifications.templates import hotel_inquiry_html, customer_confirmation_html

logger = logging.getLogger(__name__)


class ResendMailer:
    """Sends through the Resend SDK; the SDK keeps its API key at module level."""

    def __init__(self, api_key: str):
        resend.api_key = api_key

    def send(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return resend.Emails.send(params)


def get_mailer() -> ResendMailer:
    return ResendMailer(require_key(settings.resend_api_key, "Resend API key"))


class NotificationService:
    def __init__(self, mailer: ResendMailer, from_address: Optional[str] = None):
        self.mailer = mailer
        self.from_address = from_address or settings.email_from_address

    def send_hotel_inquiry(self, inquiry: HotelInquiryRequest) -> HotelInquiryResponse:
        """Email the hotel on the customer's behalf, then confirm to the customer"""
        logger.info(f"Sending inquiry to hotel: {inquiry.hotel_name} at {inquiry.hotel_email}")
        try:
            sent = self.mailer.send({
                "from": f"Hotel Inquiry <{self.from_address}>",
                "to": [inquiry.hotel_email],
                "reply_to": inquiry.customer_email,
                "subject": f"Hotel Inquiry: {inquiry.subject}",
                "html": hotel_inquiry_html(inquiry),
            })
        except Exception as e:
            logger.error(f"Failed to send hotel inquiry to {inquiry.hotel_email}: {e}")
            raise HTTPException(status_code=502, detail=f"Failed to send email: {e}")

        try:
            self.mailer.send({
                "from": f"Hotel Contact Service <{self.from_address}>",
                "to": [inquiry.customer_email],
                "subject": f"Confirmation: Your message to {inquiry.hotel_name}",
                "html": customer_confirmation_html(inquiry),
            })
        except Exception as e:
            # Confirmation is best-effort once the hotel has the inquiry
            logger.error(f"Failed to send confirmation to {inquiry.customer_email}: {e}")

        email_id = sent.get("id") if isinstance(sent, dict) else getattr(sent, "id", None)
        logger.info(f"Hotel inquiry sent: {email_id}")
        return HotelInquiryResponse(success=True, email_id=email_id)
