"""
Service and merchant details as returned by adminusers
"""

from typing import List, Optional

from pydantic import BaseModel


class MerchantDetails(BaseModel):
    name: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    address_city: Optional[str] = None
    address_postcode: Optional[str] = None
    address_country: Optional[str] = None
    telephone_number: Optional[str] = None
    email: Optional[str] = None


class Service(BaseModel):
    external_id: str
    name: str = ''
    current_go_live_stage: str = 'NOT_STARTED'
    gateway_account_ids: List[str] = []
    merchant_details: Optional[MerchantDetails] = None
