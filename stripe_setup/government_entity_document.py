"""
Government entity document step (file upload)
"""

import os

from flask import render_template, request

from auth import login_required
from selfservice.middleware import correlation_id, stripe_client, with_gateway_account
from selfservice.models.stripe_account_setup import GOVERNMENT_ENTITY_DOCUMENT
from selfservice.validation import BLANK, INVALID_FORMAT, TOO_LONG, VALID, ValidationResult

from . import stripe_setup_bp
from .common import complete_step, get_stripe_account_id
from .gate import stripe_setup_step

GOVERNMENT_ENTITY_DOCUMENT_FIELD = 'government-entity-document'
FORM_TEMPLATE = 'stripe_setup/government_entity_document/index.html'

MAX_FILE_SIZE = 10 * 1024 * 1024
ALLOWED_MIME_TYPES = ('application/pdf', 'image/jpeg', 'image/png')


def _file_size(file) -> int:
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def validate_government_entity_document(file) -> ValidationResult:
    if file is None or not file.filename:
        return ValidationResult(valid=False, message='Select a file to upload', code=BLANK)
    if file.mimetype not in ALLOWED_MIME_TYPES:
        return ValidationResult(valid=False, message='File type must be pdf, jpg or png', code=INVALID_FORMAT)
    if _file_size(file) > MAX_FILE_SIZE:
        return ValidationResult(valid=False, message='File size must be less than 10MB', code=TOO_LONG)
    return VALID


@stripe_setup_bp.route('/government-entity-document', methods=['GET'])
@login_required
@with_gateway_account
@stripe_setup_step(GOVERNMENT_ENTITY_DOCUMENT)
def show_government_entity_document_form(gateway_account_external_id: str):
    return render_template(FORM_TEMPLATE)


@stripe_setup_bp.route('/government-entity-document', methods=['POST'])
@login_required
@with_gateway_account
@stripe_setup_step(GOVERNMENT_ENTITY_DOCUMENT)
def submit_government_entity_document(gateway_account_external_id: str):
    file = request.files.get(GOVERNMENT_ENTITY_DOCUMENT_FIELD)

    result = validate_government_entity_document(file)
    if not result.valid:
        return render_template(FORM_TEMPLATE, errors={GOVERNMENT_ENTITY_DOCUMENT_FIELD: result.message})

    stripe_client().upload_government_entity_document(get_stripe_account_id(), file.stream, correlation_id())
    return complete_step(GOVERNMENT_ENTITY_DOCUMENT)
