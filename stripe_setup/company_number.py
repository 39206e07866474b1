"""
Company registration number step

The user first declares whether the organisation has a company number; the
number itself is only required (and validated) when they say it does.
"""

from flask import render_template, request

from auth import login_required
from selfservice.forms import CrossFieldRule, FieldRule, FormDefinition
from selfservice.middleware import correlation_id, stripe_client, with_gateway_account
from selfservice.models.stripe_account_setup import COMPANY_NUMBER
from selfservice.validation import VALID, ValidationResult, normalise_number, validate_company_number

from . import stripe_setup_bp
from .common import complete_step, get_stripe_account_id
from .gate import stripe_setup_step

COMPANY_NUMBER_DECLARATION_FIELD = 'company-number-declaration'
COMPANY_NUMBER_FIELD = 'company-number'
FORM_TEMPLATE = 'stripe_setup/company_number/index.html'


def validate_declaration(value: str, max_length=None) -> ValidationResult:
    if value not in ('true', 'false'):
        return ValidationResult(valid=False, message='You must answer this question', code='BLANK')
    return VALID


def validate_declared_company_number(declaration: str, company_number: str) -> ValidationResult:
    if declaration != 'true':
        return VALID
    return validate_company_number(company_number)


COMPANY_NUMBER_FORM = FormDefinition([
    FieldRule(COMPANY_NUMBER_DECLARATION_FIELD, validate_declaration),
    CrossFieldRule(
        COMPANY_NUMBER_FIELD,
        (COMPANY_NUMBER_DECLARATION_FIELD, COMPANY_NUMBER_FIELD),
        validate_declared_company_number
    ),
])


@stripe_setup_bp.route('/company-number', methods=['GET'])
@login_required
@with_gateway_account
@stripe_setup_step(COMPANY_NUMBER)
def show_company_number_form(gateway_account_external_id: str):
    return render_template(FORM_TEMPLATE, **COMPANY_NUMBER_FORM.page_data({}))


@stripe_setup_bp.route('/company-number', methods=['POST'])
@login_required
@with_gateway_account
@stripe_setup_step(COMPANY_NUMBER)
def submit_company_number(gateway_account_external_id: str):
    values, errors = COMPANY_NUMBER_FORM.bind(request.form)
    if errors:
        return render_template(FORM_TEMPLATE, **COMPANY_NUMBER_FORM.page_data(values, errors))

    if values[COMPANY_NUMBER_DECLARATION_FIELD] == 'true':
        stripe_client().update_company(
            get_stripe_account_id(),
            {'tax_id': normalise_number(values[COMPANY_NUMBER_FIELD])},
            correlation_id()
        )
    return complete_step(COMPANY_NUMBER)
