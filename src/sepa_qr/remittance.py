from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from .field_checks import checked_text
from .reference_data import MAX_REFERENCE_LENGTH, MAX_TEXT_LENGTH, REFERENCE_PATTERN


class StructuredRemittance(BaseModel):
    """
    Strukturierte Referenz (Feld 10), z.B. eine RF-Creditor-Reference.
    """
    model_config = ConfigDict(frozen=True)

    reference: str

    @field_validator("reference", mode="before")
    @classmethod
    def check_reference(cls, value):
        value = checked_text(value, "Strukturierte Referenz", MAX_REFERENCE_LENGTH)
        if not REFERENCE_PATTERN.fullmatch(value):
            raise PydanticCustomError(
                "invalid_format",
                "Strukturierte Referenz enthält unzulässige Zeichen",
            )
        return value


class UnstructuredRemittance(BaseModel):
    """
    Freier Verwendungszweck (Feld 11).
    """
    model_config = ConfigDict(frozen=True)

    text: str

    @field_validator("text", mode="before")
    @classmethod
    def check_text(cls, value):
        return checked_text(value, "Verwendungszweck", MAX_TEXT_LENGTH)


# Entweder Referenz oder Text, nie beides
Remittance = Union[StructuredRemittance, UnstructuredRemittance]
