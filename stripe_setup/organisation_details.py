"""
Organisation details step (registered name and address)
"""

from flask import render_template, request

from auth import login_required
from selfservice.forms import FieldRule, FormDefinition
from selfservice.middleware import correlation_id, stripe_client, with_gateway_account
from selfservice.models.stripe_account_setup import ORGANISATION_DETAILS
from selfservice.validation import validate_mandatory_field, validate_optional_field, validate_postcode

from . import stripe_setup_bp
from .common import complete_step, get_stripe_account_id
from .gate import stripe_setup_step

ORGANISATION_NAME_FIELD = 'organisation-name'
ADDRESS_LINE1_FIELD = 'address-line1'
ADDRESS_LINE2_FIELD = 'address-line2'
ADDRESS_CITY_FIELD = 'address-city'
ADDRESS_POSTCODE_FIELD = 'address-postcode'

FORM_TEMPLATE = 'stripe_setup/organisation_details/index.html'

ORGANISATION_DETAILS_FORM = FormDefinition([
    FieldRule(ORGANISATION_NAME_FIELD, validate_mandatory_field, 100),
    FieldRule(ADDRESS_LINE1_FIELD, validate_mandatory_field, 200),
    FieldRule(ADDRESS_LINE2_FIELD, validate_optional_field, 200),
    FieldRule(ADDRESS_CITY_FIELD, validate_mandatory_field, 100),
    FieldRule(ADDRESS_POSTCODE_FIELD, validate_postcode),
])


def _company(values) -> dict:
    address = {
        'line1': values[ADDRESS_LINE1_FIELD],
        'city': values[ADDRESS_CITY_FIELD],
        'postal_code': values[ADDRESS_POSTCODE_FIELD],
        'country': 'GB',
    }
    if values[ADDRESS_LINE2_FIELD]:
        address['line2'] = values[ADDRESS_LINE2_FIELD]
    return {'name': values[ORGANISATION_NAME_FIELD], 'address': address}


@stripe_setup_bp.route('/organisation-details', methods=['GET'])
@login_required
@with_gateway_account
@stripe_setup_step(ORGANISATION_DETAILS)
def show_organisation_details_form(gateway_account_external_id: str):
    return render_template(FORM_TEMPLATE, **ORGANISATION_DETAILS_FORM.page_data({}))


@stripe_setup_bp.route('/organisation-details', methods=['POST'])
@login_required
@with_gateway_account
@stripe_setup_step(ORGANISATION_DETAILS)
def submit_organisation_details(gateway_account_external_id: str):
    values, errors = ORGANISATION_DETAILS_FORM.bind(request.form)
    if errors:
        return render_template(FORM_TEMPLATE, **ORGANISATION_DETAILS_FORM.page_data(values, errors))

    stripe_client().update_company(get_stripe_account_id(), _company(values), correlation_id())
    return complete_step(ORGANISATION_DETAILS)
