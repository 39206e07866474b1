"""
Stripe onboarding progress for a gateway account
"""

from pydantic import BaseModel, ConfigDict

BANK_ACCOUNT = 'bank_account'
ORGANISATION_DETAILS = 'organisation_details'
RESPONSIBLE_PERSON = 'responsible_person'
VAT_NUMBER = 'vat_number'
COMPANY_NUMBER = 'company_number'
GOVERNMENT_ENTITY_DOCUMENT = 'government_entity_document'

SETUP_FLAGS = (
    BANK_ACCOUNT,
    ORGANISATION_DETAILS,
    RESPONSIBLE_PERSON,
    VAT_NUMBER,
    COMPANY_NUMBER,
    GOVERNMENT_ENTITY_DOCUMENT,
)


class StripeAccountSetup(BaseModel):
    """
    Completion flags owned by connector.

    The portal only reads these; a flag is set through
    ConnectorClient.set_stripe_account_setup_flag and never reset.
    """
    model_config = ConfigDict(frozen=True)

    bank_account: bool = False
    organisation_details: bool = False
    responsible_person: bool = False
    vat_number: bool = False
    company_number: bool = False
    government_entity_document: bool = False

    def is_complete(self, flag: str) -> bool:
        if flag not in SETUP_FLAGS:
            raise ValueError(f'Unknown stripe setup flag: {flag}')
        return getattr(self, flag)

    def incomplete_flags(self):
        return [flag for flag in SETUP_FLAGS if not getattr(self, flag)]
