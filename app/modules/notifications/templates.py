from datetime import datetime
from html import escape
from typing import Optional

from app.modules.notifications.schemas import HotelInquiryRequest


def format_stay_date(value: Optional[str]) -> str:
    """ISO date or datetime -> MM/DD/YYYY; anything else is shown as given"""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%m/%d/%Y")
    except ValueError:
        return value


def _stay_details(inquiry: HotelInquiryRequest) -> str:
    if not (inquiry.check_in_date or inquiry.check_out_date or inquiry.guests):
        return ""
    rows = []
    if inquiry.check_in_date:
        rows.append(f"<p><strong>Check-in Date:</strong> {escape(format_stay_date(inquiry.check_in_date))}</p>")
    if inquiry.check_out_date:
        rows.append(f"<p><strong>Check-out Date:</strong> {escape(format_stay_date(inquiry.check_out_date))}</p>")
    if inquiry.guests:
        rows.append(f"<p><strong>Number of Guests:</strong> {inquiry.guests}</p>")
    return f"""
        <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin-bottom: 20px;">
          <h2 style="color: #333; margin-top: 0;">Stay Details</h2>
          {''.join(rows)}
        </div>"""


def hotel_inquiry_html(inquiry: HotelInquiryRequest) -> str:
    customer_name = escape(inquiry.customer_name)
    customer_email = escape(inquiry.customer_email)
    return f"""
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="border-bottom: 2px solid #007BFF; padding-bottom: 20px; margin-bottom: 20px;">
          <h1 style="color: #007BFF; margin: 0;">Hotel Inquiry</h1>
          <p style="color: #666; margin: 5px 0 0 0;">From {customer_name}</p>
        </div>

        <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin-bottom: 20px;">
          <h2 style="color: #333; margin-top: 0;">Contact Information</h2>
          <p><strong>Name:</strong> {customer_name}</p>
          <p><strong>Email:</strong> {customer_email}</p>
        </div>
{_stay_details(inquiry)}
        <div style="background-color: #fff; padding: 20px; border: 1px solid #dee2e6; border-radius: 8px; margin-bottom: 20px;">
          <h2 style="color: #333; margin-top: 0;">Message</h2>
          <div style="white-space: pre-wrap; line-height: 1.6;">{escape(inquiry.message)}</div>
        </div>

        <div style="border-top: 1px solid #dee2e6; padding-top: 20px; color: #666; font-size: 14px;">
          <p>This email was sent through your hotel's contact form. Please respond directly to the customer's email address: {customer_email}</p>
        </div>
      </div>
    """


def customer_confirmation_html(inquiry: HotelInquiryRequest) -> str:
    address = ""
    if inquiry.hotel_address:
        address = f"<p><strong>Hotel Address:</strong> {escape(inquiry.hotel_address)}</p>"
    return f"""
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="border-bottom: 2px solid #28a745; padding-bottom: 20px; margin-bottom: 20px;">
          <h1 style="color: #28a745; margin: 0;">Message Sent Successfully!</h1>
        </div>

        <p>Dear {escape(inquiry.customer_name)},</p>

        <p>Your message has been successfully sent to <strong>{escape(inquiry.hotel_name)}</strong>.</p>

        <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <h3 style="margin-top: 0; color: #333;">Your message:</h3>
          <p><strong>Subject:</strong> {escape(inquiry.subject)}</p>
          <div style="white-space: pre-wrap; border-left: 3px solid #28a745; padding-left: 15px; margin: 10px 0;">{escape(inquiry.message)}</div>
        </div>

        <p>The hotel should respond directly to this email address. If you don't hear back within 24-48 hours, you may want to contact them directly.</p>

        {address}

        <p>Thank you for using our service!</p>
      </div>
    """
