from typing import List, Optional

from pydantic import BaseModel


class Webhook(BaseModel):
    external_id: str
    callback_url: str = ''
    description: Optional[str] = None
    status: str = 'ACTIVE'
    subscriptions: List[str] = []
