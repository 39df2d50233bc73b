from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from .field_checks import checked_text
from .reference_data import (
    AMOUNT_PATTERN,
    BIC_LENGTHS,
    CENT,
    CURRENCIES,
    DEFAULT_CURRENCY,
    DEFAULT_VERSION,
    IDENTIFICATION,
    MAX_AMOUNT,
    MAX_IBAN_LENGTH,
    MAX_INFORMATION_LENGTH,
    MAX_NAME_LENGTH,
    MIN_AMOUNT,
    PURPOSE_LENGTH,
    PURPOSE_PATTERN,
    SERVICE_TAG,
    VERSIONS,
    CharacterSet,
)
from .remittance import Remittance, StructuredRemittance, UnstructuredRemittance


def _invalid_amount() -> PydanticCustomError:
    return PydanticCustomError(
        "invalid_format",
        "Betrag muss eine Zahl mit höchstens 5 Nachkommastellen sein",
    )


def _plain_amount(value: Any) -> tuple[Decimal, str]:
    """
    Wandelt die Eingabe in (Decimal, Rohtext) um.
    Strings werden unverändert geprüft, Zahlen in Dezimalschreibweise ohne Exponent.
    """
    if isinstance(value, bool):
        raise _invalid_amount()
    if isinstance(value, str):
        raw = value.strip()
        try:
            number = Decimal(raw)
        except InvalidOperation:
            raise _invalid_amount()
    elif isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
        if not number.is_finite():
            raise _invalid_amount()
        # normalize() darf keine Stellen runden, sonst greift das Muster nicht
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, len(number.as_tuple().digits))
            raw = format(number.normalize(), "f")
    else:
        raise _invalid_amount()
    if not number.is_finite():
        raise _invalid_amount()
    return number, raw


class PaymentRecord(BaseModel):
    """
    Datensatz einer SEPA-Überweisung für den EPC-QR-Code.
    Alle Prüfungen laufen bei der Zuweisung (validate_assignment); schlägt eine
    Prüfung fehl, bleibt der bisherige Wert erhalten.
    Leere Eingaben (None, "") setzen ein Feld auf seinen Standardwert zurück.
    """
    model_config = ConfigDict(validate_assignment=True)

    service_tag: str = SERVICE_TAG
    version: int = DEFAULT_VERSION
    character_set: CharacterSet = CharacterSet.UTF_8
    identification: str = IDENTIFICATION
    bic: str = ""
    name: str = ""
    iban: str = ""
    currency: str = DEFAULT_CURRENCY
    amount: Optional[Decimal] = None
    purpose: str = ""
    remittance: Optional[Remittance] = None
    information: str = ""

    @field_validator("service_tag", mode="before")
    @classmethod
    def check_service_tag(cls, value):
        if value != SERVICE_TAG:
            raise PydanticCustomError(
                "invalid_fixed_value",
                "Service-Tag muss '{expected}' sein",
                {"expected": SERVICE_TAG},
            )
        return value

    @field_validator("identification", mode="before")
    @classmethod
    def check_identification(cls, value):
        if value != IDENTIFICATION:
            raise PydanticCustomError(
                "invalid_fixed_value",
                "Identifikationscode muss '{expected}' sein",
                {"expected": IDENTIFICATION},
            )
        return value

    @field_validator("version", mode="before")
    @classmethod
    def check_version(cls, value):
        if value is None:
            return DEFAULT_VERSION
        if isinstance(value, bool) or not isinstance(value, int) or value not in VERSIONS:
            raise PydanticCustomError("invalid_enum_value", "Ungültige Version (erlaubt: 1 oder 2)")
        return int(value)

    @field_validator("character_set", mode="before")
    @classmethod
    def check_character_set(cls, value):
        if value is None:
            return CharacterSet.UTF_8
        if isinstance(value, bool) or not isinstance(value, int) or value not in set(CharacterSet):
            raise PydanticCustomError("invalid_enum_value", "Ungültiger Zeichensatz (erlaubt: 1 bis 8)")
        return CharacterSet(value)

    @field_validator("bic", mode="before")
    @classmethod
    def check_bic(cls, value):
        value = checked_text(value, "BIC", 11)
        if value and len(value) not in BIC_LENGTHS:
            raise PydanticCustomError(
                "length_exceeded",
                "BIC der Bank des Begünstigten muss 8 oder 11 Zeichen lang sein",
            )
        return value

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return checked_text(value, "Name des Begünstigten", MAX_NAME_LENGTH)

    @field_validator("iban", mode="before")
    @classmethod
    def check_iban(cls, value):
        return checked_text(value, "Kontonummer (IBAN) des Begünstigten", MAX_IBAN_LENGTH)

    @field_validator("currency", mode="before")
    @classmethod
    def check_currency(cls, value):
        if value is None or value == "":
            return DEFAULT_CURRENCY
        if not isinstance(value, str) or len(value) != 3:
            raise PydanticCustomError(
                "invalid_format",
                "Währung muss ein gültiger ISO-4217-Code sein",
            )
        if value not in CURRENCIES:
            raise PydanticCustomError(
                "invalid_format",
                "Die Währung wird nicht unterstützt oder ist kein gültiger ISO-4217-Code",
            )
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, value):
        if value is None or value == "":
            return None
        number, raw = _plain_amount(value)
        if number <= 0:
            return None
        if not AMOUNT_PATTERN.fullmatch(raw):
            raise _invalid_amount()
        if number < MIN_AMOUNT:
            raise PydanticCustomError(
                "range_violation",
                "Betrag darf nicht kleiner als {minimum} sein",
                {"minimum": str(MIN_AMOUNT)},
            )
        if number > MAX_AMOUNT:
            raise PydanticCustomError(
                "range_violation",
                "Betrag darf nicht grösser als {maximum} sein",
                {"maximum": str(MAX_AMOUNT)},
            )
        return number.quantize(CENT, rounding=ROUND_HALF_UP)

    @field_validator("purpose", mode="before")
    @classmethod
    def check_purpose(cls, value):
        if value is None or value == "":
            return ""
        if not isinstance(value, str):
            raise PydanticCustomError("invalid_format", "Purpose-Code muss als Text übergeben werden")
        if len(value) != PURPOSE_LENGTH:
            raise PydanticCustomError("length_exceeded", "Purpose-Code muss genau 4 Zeichen lang sein")
        if not PURPOSE_PATTERN.fullmatch(value):
            raise PydanticCustomError("invalid_format", "Purpose-Code darf nur Grossbuchstaben enthalten")
        return value

    @field_validator("information", mode="before")
    @classmethod
    def check_information(cls, value):
        return checked_text(value, "Hinweis an den Auftraggeber", MAX_INFORMATION_LENGTH)

    @property
    def remittance_reference(self) -> str:
        if isinstance(self.remittance, StructuredRemittance):
            return self.remittance.reference
        return ""

    @property
    def remittance_text(self) -> str:
        if isinstance(self.remittance, UnstructuredRemittance):
            return self.remittance.text
        return ""

    def as_dict(self) -> Dict[str, Any]:
        """
        Gibt alle zwölf Felder flach als Dictionary zurück (Remittance aufgeteilt
        in Referenz und Text).
        """
        data = self.model_dump(exclude={"remittance"})
        data["remittance_reference"] = self.remittance_reference
        data["remittance_text"] = self.remittance_text
        return data
