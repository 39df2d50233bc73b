from typing import Optional
from pydantic import BaseModel

class PaymentDefaultsConfig(BaseModel):
    version: Optional[int] = 2
    character_set: Optional[int] = 1                # 1 = UTF-8
    currency: Optional[str] = "EUR"
