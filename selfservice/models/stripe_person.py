"""
Responsible person payload sent to Stripe
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictStr


class StripePerson(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_name: StrictStr
    last_name: StrictStr
    address_line1: StrictStr
    address_line2: Optional[StrictStr] = None
    address_city: StrictStr
    address_postcode: StrictStr
    address_country: StrictStr = 'GB'
    dob_day: int
    dob_month: int
    dob_year: int

    def basic_object(self) -> dict:
        address = {
            'line1': self.address_line1,
            'city': self.address_city,
            'postal_code': self.address_postcode,
            'country': self.address_country,
        }
        if self.address_line2:
            address['line2'] = self.address_line2

        return {
            'first_name': self.first_name,
            'last_name': self.last_name,
            'address': address,
            'dob': {
                'day': self.dob_day,
                'month': self.dob_month,
                'year': self.dob_year,
            },
            'relationship': {
                'representative': True,
            },
        }
