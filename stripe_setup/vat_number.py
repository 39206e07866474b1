"""
VAT number step
"""

from flask import render_template, request

from auth import login_required
from selfservice.forms import FieldRule, FormDefinition
from selfservice.middleware import correlation_id, stripe_client, with_gateway_account
from selfservice.models.stripe_account_setup import VAT_NUMBER
from selfservice.validation import normalise_number, validate_vat_number

from . import stripe_setup_bp
from .common import complete_step, get_stripe_account_id
from .gate import stripe_setup_step

VAT_NUMBER_FIELD = 'vat-number'
FORM_TEMPLATE = 'stripe_setup/vat_number/index.html'

VAT_NUMBER_FORM = FormDefinition([
    FieldRule(VAT_NUMBER_FIELD, validate_vat_number),
])


@stripe_setup_bp.route('/vat-number', methods=['GET'])
@login_required
@with_gateway_account
@stripe_setup_step(VAT_NUMBER)
def show_vat_number_form(gateway_account_external_id: str):
    return render_template(FORM_TEMPLATE, **VAT_NUMBER_FORM.page_data({}))


@stripe_setup_bp.route('/vat-number', methods=['POST'])
@login_required
@with_gateway_account
@stripe_setup_step(VAT_NUMBER)
def submit_vat_number(gateway_account_external_id: str):
    values, errors = VAT_NUMBER_FORM.bind(request.form)
    if errors:
        return render_template(FORM_TEMPLATE, **VAT_NUMBER_FORM.page_data(values, errors))

    stripe_client().update_company(
        get_stripe_account_id(),
        {'vat_id': normalise_number(values[VAT_NUMBER_FIELD])},
        correlation_id()
    )
    return complete_step(VAT_NUMBER)
