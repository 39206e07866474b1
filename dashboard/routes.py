"""
Dashboard routes
"""

from flask import Blueprint, g, render_template

from auth import login_required
from selfservice.middleware import with_gateway_account
from selfservice.models.stripe_account_setup import (
    BANK_ACCOUNT,
    COMPANY_NUMBER,
    GOVERNMENT_ENTITY_DOCUMENT,
    ORGANISATION_DETAILS,
    RESPONSIBLE_PERSON,
    VAT_NUMBER,
)

dashboard_bp = Blueprint('dashboard', __name__,
                         template_folder='templates',
                         url_prefix='/account/<gateway_account_external_id>')

# Onboarding step endpoint for each setup flag, in the order they are listed
STEP_ENDPOINTS = {
    BANK_ACCOUNT: 'stripe_setup.show_bank_details_form',
    ORGANISATION_DETAILS: 'stripe_setup.show_organisation_details_form',
    RESPONSIBLE_PERSON: 'stripe_setup.show_responsible_person_form',
    VAT_NUMBER: 'stripe_setup.show_vat_number_form',
    COMPANY_NUMBER: 'stripe_setup.show_company_number_form',
    GOVERNMENT_ENTITY_DOCUMENT: 'stripe_setup.show_government_entity_document_form',
}

# Requirements added after go-live for accounts flagged by connector
ADDITIONAL_KYC_FLAGS = (RESPONSIBLE_PERSON, GOVERNMENT_ENTITY_DOCUMENT)


def incomplete_steps(account) -> list:
    if account.stripe_setup is None:
        return []
    return [STEP_ENDPOINTS[flag] for flag in account.stripe_setup.incomplete_flags()]


def show_kyc_banner(account) -> bool:
    if not account.requires_additional_kyc_data or account.stripe_setup is None:
        return False
    return any(not account.stripe_setup.is_complete(flag) for flag in ADDITIONAL_KYC_FLAGS)


@dashboard_bp.route('/dashboard', methods=['GET'])
@login_required
@with_gateway_account
def index(gateway_account_external_id: str):
    account = g.account
    return render_template(
        'dashboard/index.html',
        account=account,
        incomplete_steps=incomplete_steps(account),
        show_kyc_banner=show_kyc_banner(account)
    )
