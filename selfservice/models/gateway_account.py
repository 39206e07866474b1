"""
Gateway account as returned by connector
"""

from typing import Optional

from pydantic import BaseModel

from .stripe_account_setup import StripeAccountSetup

STRIPE = 'stripe'


class GatewayAccount(BaseModel):
    gateway_account_id: int
    external_id: str
    payment_provider: str
    type: str = 'test'
    service_name: Optional[str] = None
    service_id: Optional[str] = None
    requires_additional_kyc_data: bool = False

    # Attached per request by selfservice.middleware for Stripe accounts
    stripe_setup: Optional[StripeAccountSetup] = None

    @property
    def is_stripe(self) -> bool:
        return self.payment_provider.lower() == STRIPE

    @property
    def is_live(self) -> bool:
        return self.type == 'live'
