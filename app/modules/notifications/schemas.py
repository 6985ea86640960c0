from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional


class HotelInquiryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hotel_name: str = Field(..., min_length=1, alias="hotelName")
    hotel_email: EmailStr = Field(..., alias="hotelEmail")
    customer_name: str = Field(..., min_length=1, alias="customerName")
    customer_email: EmailStr = Field(..., alias="customerEmail")
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)
    hotel_address: Optional[str] = Field(None, alias="hotelAddress")
    check_in_date: Optional[str] = Field(None, alias="checkInDate")
    check_out_date: Optional[str] = Field(None, alias="checkOutDate")
    guests: Optional[int] = Field(None, ge=1)


class HotelInquiryResponse(BaseModel):
    success: bool = True
    email_id: Optional[str] = None
