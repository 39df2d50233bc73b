from typing import Any

from pydantic_core import PydanticCustomError


def checked_text(value: Any, label: str, max_length: int) -> str:
    """
    Gemeinsame Prüfung für Textfelder des EPC-Payloads.
    None gilt als leer, alles andere muss ein String mit höchstens max_length Zeichen
    und ohne Zeilenumbruch sein.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise PydanticCustomError(
            "invalid_format",
            "{label} muss als Text übergeben werden",
            {"label": label},
        )
    if len(value) > max_length:
        raise PydanticCustomError(
            "length_exceeded",
            "{label} darf höchstens {max_length} Zeichen lang sein",
            {"label": label, "max_length": max_length},
        )
    # Zeilenumbrüche würden die Feldreihenfolge im Payload verschieben
    if "\n" in value or "\r" in value:
        raise PydanticCustomError(
            "invalid_format",
            "{label} darf keine Zeilenumbrüche enthalten",
            {"label": label},
        )
    return value
