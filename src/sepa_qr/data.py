from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Generator, Optional, Union

from loguru import logger
from pydantic import ValidationError

from .errors import MissingRequiredFieldError, MutualExclusionError, PayloadValidationError
from .payment_record import PaymentRecord
from .reference_data import CENT, DEFAULT_CURRENCY, IDENTIFICATION, SERVICE_TAG, CharacterSet
from .remittance import StructuredRemittance, UnstructuredRemittance

AmountInput = Union[str, int, float, Decimal, None]


def format_money(currency: str = DEFAULT_CURRENCY, amount: AmountInput = None) -> str:
    """
    Formatiert Währung und Betrag für Feld 8 des Payloads, z.B. "EUR12.30".
    Ist kein positiver Betrag vorhanden, wird nur die Währung zurückgegeben.
    """
    try:
        value = Decimal(str(amount)) if amount not in (None, "") else Decimal(0)
    except InvalidOperation:
        value = Decimal(0)
    if value.is_finite() and value > 0:
        return f"{currency.upper()}{value.quantize(CENT, rounding=ROUND_HALF_UP):f}"
    return currency.upper()


class SepaQrData:
    """
    Fluent Builder für den Text-Payload eines EPC-QR-Codes (SEPA Credit Transfer).

    Jeder Setter prüft seinen Wert sofort und gibt den Builder zurück. Bei einem
    ungültigen Wert wird eine PayloadValidationError (bzw. Unterklasse) ausgelöst
    und der Datensatz bleibt unverändert.

    Beispiel:
        payload = (
            SepaQrData.create()
            .set_name("Max Mustermann")
            .set_iban("DE02120300000000202051")
            .set_amount("123.45")
            .set_remittance_text("Rechnung 1234")
            .render()
        )
    """

    UTF_8 = CharacterSet.UTF_8
    ISO8859_1 = CharacterSet.ISO8859_1
    ISO8859_2 = CharacterSet.ISO8859_2
    ISO8859_4 = CharacterSet.ISO8859_4
    ISO8859_5 = CharacterSet.ISO8859_5
    ISO8859_7 = CharacterSet.ISO8859_7
    ISO8859_10 = CharacterSet.ISO8859_10
    ISO8859_15 = CharacterSet.ISO8859_15

    format_money = staticmethod(format_money)

    def __init__(self) -> None:
        self._record = PaymentRecord()

    @classmethod
    def create(cls) -> "SepaQrData":
        return cls()

    @property
    def record(self) -> PaymentRecord:
        """Kopie des aktuellen Datensatzes."""
        return self._record.model_copy()

    def as_dict(self) -> Dict[str, Any]:
        return self._record.as_dict()

    @contextmanager
    def _validation(self, field: str) -> Generator[None, None, None]:
        """
        Übersetzt Pydantic-Fehler in die Fehlerklassen des Payload-Builders.
        """
        try:
            yield
        except ValidationError as exc:
            error = PayloadValidationError.from_validation_error(exc, field)
            logger.debug(f"Wert für '{field}' abgelehnt: {error}")
            raise error from exc

    def _assign(self, field: str, value: Any) -> "SepaQrData":
        with self._validation(field):
            setattr(self._record, field, value)
        return self

    def set_service_tag(self, service_tag: str = SERVICE_TAG) -> "SepaQrData":
        return self._assign("service_tag", service_tag)

    def set_version(self, version: Optional[int] = 2) -> "SepaQrData":
        return self._assign("version", version)

    def set_character_set(self, character_set: Optional[int] = CharacterSet.UTF_8) -> "SepaQrData":
        return self._assign("character_set", character_set)

    def set_identification(self, identification: str = IDENTIFICATION) -> "SepaQrData":
        return self._assign("identification", identification)

    def set_bic(self, bic: Optional[str]) -> "SepaQrData":
        return self._assign("bic", bic)

    def set_name(self, name: Optional[str]) -> "SepaQrData":
        return self._assign("name", name)

    def set_iban(self, iban: Optional[str]) -> "SepaQrData":
        return self._assign("iban", iban)

    def set_currency(self, currency: Optional[str]) -> "SepaQrData":
        return self._assign("currency", currency)

    def set_amount(self, amount: AmountInput) -> "SepaQrData":
        return self._assign("amount", amount)

    def set_purpose(self, purpose: Optional[str]) -> "SepaQrData":
        return self._assign("purpose", purpose)

    def set_remittance_reference(self, remittance_reference: Optional[str]) -> "SepaQrData":
        """
        Setzt die strukturierte Referenz. Ein leerer Wert entfernt eine vorhandene
        Referenz, lässt einen gesetzten Verwendungszweck aber unberührt.
        """
        if remittance_reference is None or remittance_reference == "":
            if isinstance(self._record.remittance, StructuredRemittance):
                self._record.remittance = None
            return self
        with self._validation("remittance_reference"):
            remittance = StructuredRemittance(reference=remittance_reference)
        self._ensure_exclusive("remittance_reference", UnstructuredRemittance)
        self._record.remittance = remittance
        return self

    def set_remittance_text(self, remittance_text: Optional[str]) -> "SepaQrData":
        """
        Setzt den freien Verwendungszweck. Ein leerer Wert entfernt einen vorhandenen
        Text, lässt eine gesetzte Referenz aber unberührt.
        """
        if remittance_text is None or remittance_text == "":
            if isinstance(self._record.remittance, UnstructuredRemittance):
                self._record.remittance = None
            return self
        with self._validation("remittance_text"):
            remittance = UnstructuredRemittance(text=remittance_text)
        self._ensure_exclusive("remittance_text", StructuredRemittance)
        self._record.remittance = remittance
        return self

    def _ensure_exclusive(self, field: str, other: type) -> None:
        if isinstance(self._record.remittance, other):
            logger.debug(f"Wert für '{field}' abgelehnt: Referenz und Text schliessen sich aus")
            raise MutualExclusionError(
                "Entweder strukturierte Referenz oder unstrukturierten Verwendungszweck angeben",
                field=field,
            )

    def set_information(self, information: Optional[str]) -> "SepaQrData":
        return self._assign("information", information)

    def render(self) -> str:
        """
        Erzeugt den Payload (zwölf Zeilen, getrennt durch \\n, leere Zeilen am Ende entfernt).

        Raises:
            MissingRequiredFieldError: Wenn Name oder IBAN fehlen, oder bei Version 1 die BIC.
        """
        values = self._record.as_dict()

        if values["version"] == 1 and not values["bic"]:
            raise MissingRequiredFieldError("BIC der Bank des Begünstigten fehlt", field="bic")
        if not values["name"]:
            raise MissingRequiredFieldError("Name des Begünstigten fehlt", field="name")
        if not values["iban"]:
            raise MissingRequiredFieldError("Kontonummer (IBAN) des Begünstigten fehlt", field="iban")

        lines = [
            values["service_tag"],
            f"{values['version']:03d}",
            str(int(values["character_set"])),
            values["identification"],
            values["bic"],
            values["name"],
            values["iban"],
            format_money(values["currency"], values["amount"]),
            values["purpose"],
            values["remittance_reference"],
            values["remittance_text"],
            values["information"],
        ]
        payload = "\n".join(lines).rstrip("\n")
        logger.debug(f"EPC-Payload erzeugt ({len(payload)} Zeichen)")
        return payload

    def __str__(self) -> str:
        return self.render()
