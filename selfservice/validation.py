"""
Field validators for onboarding forms

Every validator is a pure function returning a ValidationResult. Values are
expected to be trimmed already (see selfservice.forms).
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

BLANK = 'BLANK'
TOO_LONG = 'TOO_LONG'
INVALID_FORMAT = 'INVALID_FORMAT'
INVALID_DATE = 'INVALID_DATE'
NOT_IN_PAST = 'NOT_IN_PAST'
TOO_YOUNG = 'TOO_YOUNG'
TOO_OLD = 'TOO_OLD'

MIN_AGE = 13
MAX_AGE = 120

UK_POSTCODE_PATTERN = re.compile(
    r'^(GIR ?0AA|[A-PR-UWYZ]([0-9]{1,2}|[A-HK-Y][0-9]([0-9ABEHMNPRV-Y])?|[0-9][A-HJKPS-UW]) ?[0-9][ABD-HJLNP-UW-Z]{2})$'
)
EIRCODE_PATTERN = re.compile(r'^(?:[AC-FHKNPRTV-Y][0-9]{2}|D6W) ?[0-9AC-FHKNPRTV-Y]{4}$')

POSTCODE_PATTERNS = {
    'GB': UK_POSTCODE_PATTERN,
    'IE': EIRCODE_PATTERN,
}

PHONE_NUMBER_PATTERN = re.compile(r'^\+?[0-9]{7,15}$')
VAT_NUMBER_PATTERN = re.compile(r'^(GB)?([0-9]{9}|[0-9]{12}|GD[0-4][0-9]{2}|HA[5-9][0-9]{2})$')
COMPANY_NUMBER_PATTERN = re.compile(r'^(?:[0-9]{8}|(?:OC|LP|SC|SO|SL|NI|R0|NC|NL)[0-9]{6})$')
SORT_CODE_PATTERN = re.compile(r'^[0-9]{6}$')
ACCOUNT_NUMBER_PATTERN = re.compile(r'^[0-9]{6,8}$')
COUNTRY_CODE_PATTERN = re.compile(r'^[A-Z]{2}$')
DATE_PART_PATTERN = re.compile(r'^[0-9]{1,4}$')

MESSAGES = {
    BLANK: 'This field cannot be blank',
    TOO_LONG: 'The text is too long',
}


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: Optional[str] = None
    code: Optional[str] = None


VALID = ValidationResult(valid=True)


def _invalid(code: str, message: Optional[str] = None) -> ValidationResult:
    return ValidationResult(valid=False, message=message or MESSAGES[code], code=code)


def _strip_separators(value: str) -> str:
    return re.sub(r'[\s\-()]', '', value)


def validate_mandatory_field(value: str, max_length: Optional[int] = None) -> ValidationResult:
    if not value or not value.strip():
        return _invalid(BLANK)
    if max_length is not None and len(value) > max_length:
        return _invalid(TOO_LONG)
    return VALID


def validate_optional_field(value: str, max_length: Optional[int] = None) -> ValidationResult:
    if not value or not value.strip():
        return VALID
    return validate_mandatory_field(value, max_length)


def validate_postcode(value: str, country: Optional[str] = None) -> ValidationResult:
    """
    Validate a postcode.

    Args:
        value: Postcode as entered
        country: ISO country code; when omitted any supported format is accepted

    Returns:
        ValidationResult
    """
    if not value or not value.strip():
        return _invalid(BLANK)

    postcode = value.strip().upper()

    if country:
        pattern = POSTCODE_PATTERNS.get(country.upper())
        if pattern is None:
            # No known format for the country, non-blank is enough
            return VALID
        patterns = [pattern]
    else:
        patterns = POSTCODE_PATTERNS.values()

    if any(pattern.match(postcode) for pattern in patterns):
        return VALID
    return _invalid(INVALID_FORMAT, 'Enter a real postcode')


def validate_date_of_birth(day: str, month: str, year: str, today: Optional[date] = None) -> ValidationResult:
    """
    Validate the three parts of a date of birth.

    Months are 1-indexed (January is 1) both as entered and as passed to
    ``date``.

    Args:
        day: Day of month as entered
        month: Month number as entered
        year: Four digit year as entered
        today: Reference date for the age checks, defaults to today

    Returns:
        ValidationResult
    """
    parts = [str(part).strip() if part is not None else '' for part in (day, month, year)]
    if not all(parts):
        return _invalid(BLANK, 'Enter the date of birth')

    if not all(DATE_PART_PATTERN.match(part) for part in parts):
        return _invalid(INVALID_DATE, 'Enter a real date of birth')

    day_number, month_number, year_number = (int(part) for part in parts)
    try:
        date_of_birth = date(year_number, month_number, day_number)
    except ValueError:
        return _invalid(INVALID_DATE, 'Enter a real date of birth')

    today = today or date.today()
    if date_of_birth >= today:
        return _invalid(NOT_IN_PAST, 'Date of birth must be in the past')

    age = today.year - date_of_birth.year - ((today.month, today.day) < (date_of_birth.month, date_of_birth.day))
    if age < MIN_AGE:
        return _invalid(TOO_YOUNG, f'Date of birth must be for someone aged {MIN_AGE} or over')
    if age > MAX_AGE:
        return _invalid(TOO_OLD, 'Enter a valid year of birth')

    return VALID


def format_date_of_birth(day: str, month: str, year: str) -> str:
    """Human readable date of birth, e.g. '15 June 1990'"""
    date_of_birth = date(int(year), int(month), int(day))
    return f'{date_of_birth.day} {date_of_birth:%B %Y}'


def validate_phone_number(value: str, max_length: Optional[int] = None) -> ValidationResult:
    result = validate_mandatory_field(value, max_length)
    if not result.valid:
        return result
    if not PHONE_NUMBER_PATTERN.match(_strip_separators(value)):
        return _invalid(INVALID_FORMAT, 'Invalid telephone number')
    return VALID


def validate_country_code(value: str, max_length: Optional[int] = None) -> ValidationResult:
    if not COUNTRY_CODE_PATTERN.match(value or ''):
        return _invalid(BLANK, 'Select a country')
    return VALID


def validate_vat_number(value: str, max_length: Optional[int] = None) -> ValidationResult:
    result = validate_mandatory_field(value, max_length)
    if not result.valid:
        return result
    if not VAT_NUMBER_PATTERN.match(_strip_separators(value).upper()):
        return _invalid(INVALID_FORMAT, 'Enter a valid VAT registration number')
    return VALID


def validate_company_number(value: str, max_length: Optional[int] = None) -> ValidationResult:
    result = validate_mandatory_field(value, max_length)
    if not result.valid:
        return result
    if not COMPANY_NUMBER_PATTERN.match(_strip_separators(value).upper()):
        return _invalid(INVALID_FORMAT, 'Enter a valid Company registration number')
    return VALID


def validate_sort_code(value: str, max_length: Optional[int] = None) -> ValidationResult:
    result = validate_mandatory_field(value, max_length)
    if not result.valid:
        return result
    if not SORT_CODE_PATTERN.match(_strip_separators(value)):
        return _invalid(INVALID_FORMAT, 'Enter a valid sort code like 309430')
    return VALID


def validate_account_number(value: str, max_length: Optional[int] = None) -> ValidationResult:
    result = validate_mandatory_field(value, max_length)
    if not result.valid:
        return result
    if not ACCOUNT_NUMBER_PATTERN.match(_strip_separators(value)):
        return _invalid(INVALID_FORMAT, 'Enter a valid account number like 00733445')
    return VALID


def normalise_number(value: str) -> str:
    """Strip spaces, dashes and brackets, e.g. ' 00 - 00 00 ' -> '000000'"""
    return _strip_separators(value or '').upper()
