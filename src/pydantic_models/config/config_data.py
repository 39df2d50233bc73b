from pydantic import BaseModel

from .beneficiary_config import BeneficiaryConfig
from .logging_config import LoggingConfig
from .payment_defaults_config import PaymentDefaultsConfig


class ConfigData(BaseModel):
    """
    Modell für die gesamte Konfiguration des Projekts.
    Das sind die Sektionen in der Config-Datei.
    """
    logging: LoggingConfig = LoggingConfig()
    payment_defaults: PaymentDefaultsConfig = PaymentDefaultsConfig()
    beneficiary: BeneficiaryConfig = BeneficiaryConfig()
