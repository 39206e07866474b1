"""
Form aggregation for multi-field onboarding steps

A FormDefinition lists one rule per field (or per group of fields for
cross-field checks such as date of birth). Binding a submission trims every
declared field, runs the rules in declaration order and produces an ordered
error set keyed by field name.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .validation import ValidationResult

ANSWERS_CHECKED_FIELD = 'answers-checked'
ANSWERS_NEED_CHANGING_FIELD = 'answers-need-changing'

ValidationErrorSet = Dict[str, str]


@dataclass(frozen=True)
class FieldRule:
    field: str
    validator: Callable[..., ValidationResult]
    max_length: Optional[int] = None

    @property
    def key(self) -> str:
        return self.field

    @property
    def fields(self) -> Tuple[str, ...]:
        return (self.field,)

    def check(self, values: Mapping[str, str]) -> ValidationResult:
        return self.validator(values[self.field], self.max_length)


@dataclass(frozen=True)
class CrossFieldRule:
    """Validate several fields together, reporting under ``key``"""
    key: str
    fields: Tuple[str, ...]
    validator: Callable[..., ValidationResult]

    def check(self, values: Mapping[str, str]) -> ValidationResult:
        return self.validator(*(values[field] for field in self.fields))


Rule = Union[FieldRule, CrossFieldRule]


class SubmissionIntent(Enum):
    REVIEW = 'review'
    CHANGE = 'change'
    CONFIRM = 'confirm'


class StepState(Enum):
    EDITING = 'editing'
    REVIEWING = 'reviewing'
    COMPLETE = 'complete'


def page_data_key(field: str) -> str:
    """Template variable name for a form field: 'first-name' -> 'first_name'"""
    return field.replace('-', '_')


class FormDefinition:
    """
    The fields of one onboarding step and their validators.

    Args:
        rules: FieldRule or CrossFieldRule instances, in display order

    Raises:
        ValueError: if two rules report under the same key
    """

    def __init__(self, rules: Sequence[Rule]):
        keys = [rule.key for rule in rules]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise ValueError(f"More than one validator declared for: {', '.join(duplicates)}")

        self.rules = tuple(rules)

    @property
    def fields(self) -> Tuple[str, ...]:
        names = []
        for rule in self.rules:
            names.extend(field for field in rule.fields if field not in names)
        return tuple(names)

    def normalise(self, data: Mapping[str, Any]) -> Dict[str, str]:
        values = {}
        for field in self.fields:
            value = data.get(field)
            values[field] = value.strip() if isinstance(value, str) else ''
        return values

    def validate(self, values: Mapping[str, str]) -> ValidationErrorSet:
        errors = {}
        for rule in self.rules:
            result = rule.check(values)
            if not result.valid:
                errors[rule.key] = result.message
        return errors

    def bind(self, data: Mapping[str, Any]) -> Tuple[Dict[str, str], ValidationErrorSet]:
        values = self.normalise(data)
        return values, self.validate(values)

    def page_data(self, values: Mapping[str, str], errors: Optional[ValidationErrorSet] = None) -> Dict[str, Any]:
        data = {page_data_key(field): values.get(field, '') for field in self.fields}
        if errors:
            data['errors'] = dict(errors)
        return data


def submission_intent(data: Mapping[str, Any]) -> SubmissionIntent:
    if data.get(ANSWERS_CHECKED_FIELD) == 'true':
        return SubmissionIntent.CONFIRM
    if data.get(ANSWERS_NEED_CHANGING_FIELD) == 'true':
        return SubmissionIntent.CHANGE
    return SubmissionIntent.REVIEW


def next_step_state(errors: Iterable[str], intent: SubmissionIntent) -> StepState:
    if errors or intent is SubmissionIntent.CHANGE:
        return StepState.EDITING
    if intent is SubmissionIntent.CONFIRM:
        return StepState.COMPLETE
    return StepState.REVIEWING
