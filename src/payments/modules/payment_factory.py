from typing import Iterable, List

from loguru import logger

from pydantic_models.data.payment_request import PaymentRequest
from sepa_qr import PayloadValidationError, SepaQrData
from shared_modules.config import Config
from shared_modules.utils import log_exceptions, safe_str


class PaymentFactory:
    """
    Factory-Klasse zur Erstellung von EPC-QR-Payloads für den konfigurierten Begünstigten.
    Begünstigter und Standardwerte stammen aus der Pydantic-basierten Konfiguration,
    die variablen Angaben je Zahlung aus einem PaymentRequest.
    """

    def __init__(self, config: Config):
        """
        Initialisiert die Factory und prüft Begünstigten und Standardwerte sofort.
        Args:
            config (Config): Singleton-Konfiguration mit Pydantic-Modellen.
        Raises:
            PayloadValidationError: Wenn Begünstigter oder Standardwerte ungültig sind.
        """
        self.config: Config = config
        beneficiary = self.config.beneficiary
        self.beneficiary_name: str = safe_str(beneficiary.name)
        self.beneficiary_iban: str = safe_str(beneficiary.iban).replace(" ", "")
        self.beneficiary_bic: str = safe_str(beneficiary.bic).replace(" ", "")

        try:
            self._base_data().render()
        except PayloadValidationError as e:
            logger.error(f"Ungültige Angaben zum Begünstigten in der Config ({e.field}): {e}")
            raise

    def _base_data(self) -> SepaQrData:
        """
        Builder mit Begünstigtem und Standardwerten aus der Config.
        """
        defaults = self.config.payment_defaults
        return (
            SepaQrData.create()
            .set_version(defaults.version)
            .set_character_set(defaults.character_set)
            .set_currency(defaults.currency)
            .set_bic(self.beneficiary_bic)
            .set_name(self.beneficiary_name)
            .set_iban(self.beneficiary_iban)
        )

    def create_data(self, request: PaymentRequest) -> SepaQrData:
        """
        Befüllt einen SepaQrData-Builder mit Begünstigtem, Standardwerten und Zahlungsangaben.
        Args:
            request (PaymentRequest): Angaben zur einzelnen Zahlung.
        Returns:
            SepaQrData: Befüllter Builder.
        """
        data = self._base_data()
        if request.currency:
            data.set_currency(request.currency)
        return (
            data.set_amount(request.amount)
            .set_purpose(request.purpose)
            .set_remittance_reference(request.remittance_reference)
            .set_remittance_text(request.remittance_text)
            .set_information(request.information)
        )

    def create_payload(self, request: PaymentRequest) -> str:
        """
        Erzeugt den fertigen Payload-String für eine Zahlung.
        """
        payload = self.create_data(request).render()
        logger.info(f"EPC-Payload für {self.beneficiary_name} erzeugt (Betrag: {request.amount or '-'})")
        return payload

    def create_payloads(self, requests: Iterable[PaymentRequest]) -> List[str]:
        """
        Erzeugt Payloads für mehrere Zahlungen. Ungültige Zahlungen werden geloggt
        und übersprungen.
        """
        payloads: List[str] = []
        requests = list(requests)
        for idx, request in enumerate(requests):
            with log_exceptions(f"Ungültige Zahlungsangaben in Zeile {idx}"):
                payloads.append(self.create_payload(request))
        logger.info(f"{len(payloads)} von {len(requests)} Payloads erzeugt.")
        return payloads
