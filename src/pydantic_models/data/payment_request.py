from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel


class PaymentRequest(BaseModel):
    """
    Fachliches Datenmodell für eine einzelne Zahlungsaufforderung.
    Enthält nur die Angaben, die pro Zahlung variieren; Begünstigter und
    Standardwerte kommen aus der Config. Die eigentliche Prüfung der Werte
    erfolgt beim Befüllen des SepaQrData-Builders.
    """
    amount: Optional[Union[Decimal, str]] = None
    currency: Optional[str] = None          # überschreibt payment_defaults.currency
    purpose: str = ""
    remittance_reference: str = ""
    remittance_text: str = ""
    information: str = ""
