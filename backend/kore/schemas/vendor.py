from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class VendorAddress(BaseModel):
    attention: str = ""
    country: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    pin_code: str = ""
    phone: str = ""
    fax: str = ""


class VendorContact(BaseModel):
    salutation: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    work_phone: str = ""
    mobile: str = ""


class VendorBankDetail(BaseModel):
    account_holder_name: str = ""
    bank_name: str = ""
    account_number: str = ""
    ifsc: str = ""


class VendorFields(BaseModel):
    salutation: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    work_phone: Optional[str] = None
    mobile: Optional[str] = None
    pan: Optional[str] = None
    msme_registered: Optional[bool] = None
    currency: Optional[str] = None
    payment_terms: Optional[str] = None
    tds: Optional[str] = None
    enable_portal: Optional[bool] = None
    billing_address: Optional[VendorAddress] = None
    shipping_address: Optional[VendorAddress] = None
    contact_persons: Optional[List[VendorContact]] = None
    bank_details: Optional[List[VendorBankDetail]] = None

    @field_validator("display_name", mode="before")
    @classmethod
    def strip_display_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class VendorCreate(VendorFields):
    display_name: str = Field(..., min_length=1)
    msme_registered: bool = False
    currency: str = "INR"
    enable_portal: bool = False
    contact_persons: List[VendorContact] = []
    bank_details: List[VendorBankDetail] = []


class VendorUpdate(VendorFields):
    pass


class VendorResponse(BaseModel):
    id: int
    salutation: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    display_name: str
    email: Optional[str] = None
    work_phone: Optional[str] = None
    mobile: Optional[str] = None
    pan: Optional[str] = None
    msme_registered: bool = False
    currency: Optional[str] = None
    payment_terms: Optional[str] = None
    tds: Optional[str] = None
    enable_portal: bool = False
    billing_address: Optional[VendorAddress] = None
    shipping_address: Optional[VendorAddress] = None
    contact_persons: List[VendorContact] = []
    bank_details: List[VendorBankDetail] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
