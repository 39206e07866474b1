"""
Request to go live routes
"""

from flask import Blueprint, g, redirect, render_template, request, url_for

from auth import login_required
from selfservice.forms import CrossFieldRule, FieldRule, FormDefinition
from selfservice.middleware import adminusers_client, correlation_id, with_service
from selfservice.models import MerchantDetails
from selfservice.validation import (
    validate_country_code,
    validate_mandatory_field,
    validate_optional_field,
    validate_phone_number,
    validate_postcode,
)

request_to_go_live_bp = Blueprint('request_to_go_live', __name__,
                                  template_folder='templates',
                                  url_prefix='/service/<service_external_id>/request-to-go-live')

ADDRESS_LINE1_FIELD = 'address-line1'
ADDRESS_LINE2_FIELD = 'address-line2'
ADDRESS_CITY_FIELD = 'address-city'
ADDRESS_COUNTRY_FIELD = 'address-country'
ADDRESS_POSTCODE_FIELD = 'address-postcode'
TELEPHONE_NUMBER_FIELD = 'telephone-number'

MAX_LENGTH = 255

ENTERED_ORGANISATION_NAME = 'ENTERED_ORGANISATION_NAME'
ENTERED_ORGANISATION_ADDRESS = 'ENTERED_ORGANISATION_ADDRESS'

# Stages from which the address page may be shown
ORGANISATION_ADDRESS_STAGES = (ENTERED_ORGANISATION_NAME, ENTERED_ORGANISATION_ADDRESS)

ORGANISATION_ADDRESS_FORM = FormDefinition([
    FieldRule(ADDRESS_LINE1_FIELD, validate_mandatory_field, MAX_LENGTH),
    FieldRule(ADDRESS_LINE2_FIELD, validate_optional_field, MAX_LENGTH),
    FieldRule(ADDRESS_CITY_FIELD, validate_mandatory_field, MAX_LENGTH),
    FieldRule(ADDRESS_COUNTRY_FIELD, validate_country_code),
    CrossFieldRule(ADDRESS_POSTCODE_FIELD, (ADDRESS_POSTCODE_FIELD, ADDRESS_COUNTRY_FIELD), validate_postcode),
    FieldRule(TELEPHONE_NUMBER_FIELD, validate_phone_number, MAX_LENGTH),
])


def _existing_values(merchant_details) -> dict:
    if merchant_details is None:
        return {ADDRESS_COUNTRY_FIELD: 'GB'}
    return {
        ADDRESS_LINE1_FIELD: merchant_details.address_line1 or '',
        ADDRESS_LINE2_FIELD: merchant_details.address_line2 or '',
        ADDRESS_CITY_FIELD: merchant_details.address_city or '',
        ADDRESS_COUNTRY_FIELD: merchant_details.address_country or 'GB',
        ADDRESS_POSTCODE_FIELD: merchant_details.address_postcode or '',
        TELEPHONE_NUMBER_FIELD: merchant_details.telephone_number or '',
    }


@request_to_go_live_bp.route('', methods=['GET'])
@login_required
@with_service
def index(service_external_id: str):
    return render_template('request_to_go_live/index.html', service=g.service)


@request_to_go_live_bp.route('/organisation-address', methods=['GET'])
@login_required
@with_service
def show_organisation_address_form(service_external_id: str):
    service = g.service
    if service.current_go_live_stage not in ORGANISATION_ADDRESS_STAGES:
        return redirect(url_for('request_to_go_live.index', service_external_id=service_external_id))

    page_data = ORGANISATION_ADDRESS_FORM.page_data(_existing_values(service.merchant_details))
    return render_template('request_to_go_live/organisation_address.html', service=service, **page_data)


@request_to_go_live_bp.route('/organisation-address', methods=['POST'])
@login_required
@with_service
def submit_organisation_address(service_external_id: str):
    service = g.service
    if service.current_go_live_stage not in ORGANISATION_ADDRESS_STAGES:
        return redirect(url_for('request_to_go_live.index', service_external_id=service_external_id))

    values, errors = ORGANISATION_ADDRESS_FORM.bind(request.form)
    if errors:
        page_data = ORGANISATION_ADDRESS_FORM.page_data(values, errors)
        return render_template('request_to_go_live/organisation_address.html', service=service, **page_data)

    existing = service.merchant_details or MerchantDetails()
    merchant_details = existing.model_copy(update={
        'address_line1': values[ADDRESS_LINE1_FIELD],
        'address_line2': values[ADDRESS_LINE2_FIELD] or None,
        'address_city': values[ADDRESS_CITY_FIELD],
        'address_country': values[ADDRESS_COUNTRY_FIELD],
        'address_postcode': values[ADDRESS_POSTCODE_FIELD],
        'telephone_number': values[TELEPHONE_NUMBER_FIELD],
    })

    adminusers = adminusers_client()
    adminusers.update_merchant_details(service_external_id, merchant_details, correlation_id()).result()
    if service.current_go_live_stage == ENTERED_ORGANISATION_NAME:
        adminusers.update_current_go_live_stage(
            service_external_id, ENTERED_ORGANISATION_ADDRESS, correlation_id()
        ).result()

    return redirect(url_for('request_to_go_live.index', service_external_id=service_external_id), code=303)
