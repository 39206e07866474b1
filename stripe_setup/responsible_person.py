"""
Responsible person step

EDITING -> REVIEWING (check your answers) -> COMPLETE. Errors and "change"
requests go back to the form with the user's input.
"""

from flask import render_template, request

from auth import login_required
from selfservice.forms import (
    CrossFieldRule,
    FieldRule,
    FormDefinition,
    StepState,
    next_step_state,
    submission_intent,
)
from selfservice.middleware import correlation_id, stripe_client, with_gateway_account
from selfservice.models import StripePerson
from selfservice.models.stripe_account_setup import RESPONSIBLE_PERSON
from selfservice.validation import (
    format_date_of_birth,
    validate_date_of_birth,
    validate_mandatory_field,
    validate_optional_field,
    validate_postcode,
)

from . import stripe_setup_bp
from .common import complete_step, get_stripe_account_id
from .gate import stripe_setup_step

FIRST_NAME_FIELD = 'first-name'
LAST_NAME_FIELD = 'last-name'
HOME_ADDRESS_LINE1_FIELD = 'home-address-line-1'
HOME_ADDRESS_LINE2_FIELD = 'home-address-line-2'
HOME_ADDRESS_CITY_FIELD = 'home-address-city'
HOME_ADDRESS_POSTCODE_FIELD = 'home-address-postcode'
DOB_DAY_FIELD = 'dob-day'
DOB_MONTH_FIELD = 'dob-month'
DOB_YEAR_FIELD = 'dob-year'
DOB_KEY = 'dob'

FORM_TEMPLATE = 'stripe_setup/responsible_person/index.html'
CHECK_ANSWERS_TEMPLATE = 'stripe_setup/responsible_person/check_your_answers.html'

RESPONSIBLE_PERSON_FORM = FormDefinition([
    FieldRule(FIRST_NAME_FIELD, validate_mandatory_field, 100),
    FieldRule(LAST_NAME_FIELD, validate_mandatory_field, 100),
    FieldRule(HOME_ADDRESS_LINE1_FIELD, validate_mandatory_field, 200),
    FieldRule(HOME_ADDRESS_LINE2_FIELD, validate_optional_field, 200),
    FieldRule(HOME_ADDRESS_CITY_FIELD, validate_mandatory_field, 100),
    FieldRule(HOME_ADDRESS_POSTCODE_FIELD, validate_postcode),
    CrossFieldRule(DOB_KEY, (DOB_DAY_FIELD, DOB_MONTH_FIELD, DOB_YEAR_FIELD), validate_date_of_birth),
])


def _stripe_person(values) -> StripePerson:
    return StripePerson(
        first_name=values[FIRST_NAME_FIELD],
        last_name=values[LAST_NAME_FIELD],
        address_line1=values[HOME_ADDRESS_LINE1_FIELD],
        address_line2=values[HOME_ADDRESS_LINE2_FIELD] or None,
        address_city=values[HOME_ADDRESS_CITY_FIELD],
        address_postcode=values[HOME_ADDRESS_POSTCODE_FIELD],
        dob_day=values[DOB_DAY_FIELD],
        dob_month=values[DOB_MONTH_FIELD],
        dob_year=values[DOB_YEAR_FIELD],
    )


@stripe_setup_bp.route('/responsible-person', methods=['GET'])
@login_required
@with_gateway_account
@stripe_setup_step(RESPONSIBLE_PERSON)
def show_responsible_person_form(gateway_account_external_id: str):
    return render_template(FORM_TEMPLATE, **RESPONSIBLE_PERSON_FORM.page_data({}))


@stripe_setup_bp.route('/responsible-person', methods=['POST'])
@login_required
@with_gateway_account
@stripe_setup_step(RESPONSIBLE_PERSON)
def submit_responsible_person(gateway_account_external_id: str):
    values, errors = RESPONSIBLE_PERSON_FORM.bind(request.form)
    page_data = RESPONSIBLE_PERSON_FORM.page_data(values, errors)

    state = next_step_state(errors, submission_intent(request.form))

    if state is StepState.EDITING:
        return render_template(FORM_TEMPLATE, **page_data)

    if state is StepState.REVIEWING:
        page_data['friendly_date_of_birth'] = format_date_of_birth(
            values[DOB_DAY_FIELD], values[DOB_MONTH_FIELD], values[DOB_YEAR_FIELD]
        )
        return render_template(CHECK_ANSWERS_TEMPLATE, **page_data)

    stripe_client().create_person(get_stripe_account_id(), _stripe_person(values), correlation_id())
    return complete_step(RESPONSIBLE_PERSON)
