"""
Tests for form aggregation and the review/confirm step states
"""

import pytest

from selfservice.forms import (
    CrossFieldRule,
    FieldRule,
    FormDefinition,
    StepState,
    SubmissionIntent,
    next_step_state,
    page_data_key,
    submission_intent,
)
from selfservice.validation import validate_date_of_birth, validate_mandatory_field, validate_postcode


def _form():
    return FormDefinition([
        FieldRule('first-name', validate_mandatory_field, 10),
        FieldRule('home-address-postcode', validate_postcode),
        CrossFieldRule('dob', ('dob-day', 'dob-month', 'dob-year'), validate_date_of_birth),
        FieldRule('last-name', validate_mandatory_field, 10),
    ])


class TestFormDefinition:
    def test_duplicate_field_rules_rejected(self):
        with pytest.raises(ValueError, match='More than one validator declared for: first-name'):
            FormDefinition([
                FieldRule('first-name', validate_mandatory_field),
                FieldRule('first-name', validate_mandatory_field, 100),
            ])

    def test_cross_field_key_clashing_with_field_rejected(self):
        with pytest.raises(ValueError, match='dob'):
            FormDefinition([
                FieldRule('dob', validate_mandatory_field),
                CrossFieldRule('dob', ('dob-day', 'dob-month', 'dob-year'), validate_date_of_birth),
            ])

    def test_fields_in_declaration_order(self):
        assert _form().fields == (
            'first-name', 'home-address-postcode', 'dob-day', 'dob-month', 'dob-year', 'last-name'
        )

    def test_values_are_trimmed_and_missing_fields_empty(self):
        values, _ = _form().bind({'first-name': '  Jane ', 'unrelated': 'x'})
        assert values['first-name'] == 'Jane'
        assert values['last-name'] == ''
        assert 'unrelated' not in values

    def test_errors_follow_declaration_order(self):
        _, errors = _form().bind({
            'first-name': '',
            'home-address-postcode': '123',
            'dob-day': '31',
            'dob-month': '2',
            'dob-year': '1990',
            'last-name': '',
        })
        assert list(errors) == ['first-name', 'home-address-postcode', 'dob', 'last-name']
        assert errors['first-name'] == 'This field cannot be blank'
        assert errors['home-address-postcode'] == 'Enter a real postcode'
        assert errors['dob'] == 'Enter a real date of birth'

    def test_valid_submission_has_no_errors(self):
        _, errors = _form().bind({
            'first-name': 'Jane',
            'home-address-postcode': 'E8 4ER',
            'dob-day': '15',
            'dob-month': '6',
            'dob-year': '1990',
            'last-name': 'Doe',
        })
        assert errors == {}

    def test_length_is_checked_after_trimming(self):
        _, errors = _form().bind({'first-name': '   abcdefghij   '})
        assert 'first-name' not in errors

    def test_page_data(self):
        form = _form()
        values, errors = form.bind({'first-name': 'Jane', 'dob-day': '15'})
        data = form.page_data(values, errors)

        assert data['first_name'] == 'Jane'
        assert data['dob_day'] == '15'
        assert data['home_address_postcode'] == ''
        assert set(data['errors']) == {'home-address-postcode', 'dob', 'last-name'}

    def test_page_data_without_errors(self):
        assert 'errors' not in _form().page_data({})

    def test_page_data_key(self):
        assert page_data_key('home-address-line-1') == 'home_address_line_1'


class TestSubmissionIntent:
    def test_plain_submission_is_review(self):
        assert submission_intent({}) is SubmissionIntent.REVIEW

    def test_answers_checked(self):
        assert submission_intent({'answers-checked': 'true'}) is SubmissionIntent.CONFIRM

    def test_answers_need_changing(self):
        assert submission_intent({'answers-need-changing': 'true'}) is SubmissionIntent.CHANGE

    def test_other_values_are_ignored(self):
        assert submission_intent({'answers-checked': 'yes'}) is SubmissionIntent.REVIEW


@pytest.mark.parametrize('errors, intent, expected', [
    ({}, SubmissionIntent.REVIEW, StepState.REVIEWING),
    ({}, SubmissionIntent.CONFIRM, StepState.COMPLETE),
    ({}, SubmissionIntent.CHANGE, StepState.EDITING),
    ({'dob': 'Enter the date of birth'}, SubmissionIntent.REVIEW, StepState.EDITING),
    ({'dob': 'Enter the date of birth'}, SubmissionIntent.CONFIRM, StepState.EDITING),
])
def test_next_step_state(errors, intent, expected):
    assert next_step_state(errors, intent) is expected
