"""
Bank account payload sent to Stripe as the account's external account
"""

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator

from ..validation import normalise_number


class StripeBankAccount(BaseModel):
    model_config = ConfigDict(frozen=True)

    bank_account_sort_code: StrictStr
    bank_account_number: StrictStr

    @field_validator('bank_account_sort_code', 'bank_account_number')
    @classmethod
    def normalise(cls, value: str) -> str:
        value = normalise_number(value)
        if not value:
            raise ValueError('is not allowed to be empty')
        return value

    def basic_object(self) -> dict:
        return {
            'external_account': {
                'object': 'bank_account',
                'country': 'GB',
                'currency': 'GBP',
                'account_holder_type': 'company',
                'routing_number': self.bank_account_sort_code,
                'account_number': self.bank_account_number,
            }
        }
