"""
Stripe KYC onboarding steps
Collects bank details, organisation details, VAT/company numbers, the
responsible person and the government entity document for Stripe accounts.
"""

from flask import Blueprint

stripe_setup_bp = Blueprint('stripe_setup', __name__,
                            template_folder='templates',
                            url_prefix='/account/<gateway_account_external_id>')

from . import (  # noqa: E402,F401  routes register on the blueprint
    bank_details,
    company_number,
    government_entity_document,
    organisation_details,
    responsible_person,
    vat_number,
)

__all__ = ['stripe_setup_bp']
