"""
Bank details step (sort code and account number)
"""

from flask import render_template, request

from auth import login_required
from selfservice.forms import FieldRule, FormDefinition, StepState, next_step_state, submission_intent
from selfservice.middleware import correlation_id, stripe_client, with_gateway_account
from selfservice.models import StripeBankAccount
from selfservice.models.stripe_account_setup import BANK_ACCOUNT
from selfservice.validation import validate_account_number, validate_sort_code

from . import stripe_setup_bp
from .common import complete_step, get_stripe_account_id
from .gate import stripe_setup_step

ACCOUNT_NUMBER_FIELD = 'account-number'
SORT_CODE_FIELD = 'sort-code'

FORM_TEMPLATE = 'stripe_setup/bank_details/index.html'
CHECK_ANSWERS_TEMPLATE = 'stripe_setup/bank_details/check_your_answers.html'

BANK_DETAILS_FORM = FormDefinition([
    FieldRule(ACCOUNT_NUMBER_FIELD, validate_account_number),
    FieldRule(SORT_CODE_FIELD, validate_sort_code),
])


@stripe_setup_bp.route('/bank-details', methods=['GET'])
@login_required
@with_gateway_account
@stripe_setup_step(BANK_ACCOUNT)
def show_bank_details_form(gateway_account_external_id: str):
    return render_template(FORM_TEMPLATE, **BANK_DETAILS_FORM.page_data({}))


@stripe_setup_bp.route('/bank-details', methods=['POST'])
@login_required
@with_gateway_account
@stripe_setup_step(BANK_ACCOUNT)
def submit_bank_details(gateway_account_external_id: str):
    values, errors = BANK_DETAILS_FORM.bind(request.form)
    page_data = BANK_DETAILS_FORM.page_data(values, errors)

    state = next_step_state(errors, submission_intent(request.form))

    if state is StepState.EDITING:
        return render_template(FORM_TEMPLATE, **page_data)

    if state is StepState.REVIEWING:
        return render_template(CHECK_ANSWERS_TEMPLATE, **page_data)

    bank_account = StripeBankAccount(
        bank_account_sort_code=values[SORT_CODE_FIELD],
        bank_account_number=values[ACCOUNT_NUMBER_FIELD],
    )
    stripe_client().update_bank_account(get_stripe_account_id(), bank_account, correlation_id())
    return complete_step(BANK_ACCOUNT)
