from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user
from app.modules.notifications.schemas import HotelInquiryRequest, HotelInquiryResponse
from app.modules.notifications.service import NotificationService, ResendMailer, get_mailer
from typing import Dict

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(mailer: ResendMailer = Depends(get_mailer)) -> NotificationService:
    return NotificationService(mailer)


@router.post("/hotel-inquiry", response_model=HotelInquiryResponse)
def send_hotel_inquiry(
    inquiry: HotelInquiryRequest,
    current_user: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Contact a hotel by email; the customer receives a confirmation copy"""
    return service.send_hotel_inquiry(inquiry)
