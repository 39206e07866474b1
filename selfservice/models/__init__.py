"""Typed wrappers around backend and Stripe payloads"""

from .gateway_account import GatewayAccount
from .service import MerchantDetails, Service
from .stripe_account import StripeAccount
from .stripe_account_setup import StripeAccountSetup
from .stripe_bank_account import StripeBankAccount
from .stripe_person import StripePerson
from .webhook import Webhook

__all__ = [
    'GatewayAccount',
    'MerchantDetails',
    'Service',
    'StripeAccount',
    'StripeAccountSetup',
    'StripeBankAccount',
    'StripePerson',
    'Webhook',
]
