from pydantic import BaseModel


class StripeAccount(BaseModel):
    stripe_account_id: str
