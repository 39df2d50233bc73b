from typing import Dict, Optional, Type

from pydantic import ValidationError


class PayloadValidationError(ValueError):
    """
    Basisklasse für alle Fehler beim Setzen oder Rendern von EPC-QR-Feldern.
    Jede Unterklasse steht für eine Fehlerart; `code` entspricht dem Fehlertyp,
    den die Validatoren in `PaymentRecord` melden.
    """

    code = "payload_validation"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    @classmethod
    def from_validation_error(cls, exc: ValidationError, field: str) -> "PayloadValidationError":
        """
        Übersetzt einen Pydantic-ValidationError in die passende Fehlerklasse.
        Massgeblich ist der erste gemeldete Fehler.
        """
        error = exc.errors()[0]
        error_class = _ERROR_CLASSES.get(error["type"], InvalidFormatError)
        return error_class(error["msg"], field=field)


class InvalidFixedValueError(PayloadValidationError):
    code = "invalid_fixed_value"


class InvalidEnumValueError(PayloadValidationError):
    code = "invalid_enum_value"


class LengthExceededError(PayloadValidationError):
    code = "length_exceeded"


class InvalidFormatError(PayloadValidationError):
    code = "invalid_format"


class RangeViolationError(PayloadValidationError):
    code = "range_violation"


class MutualExclusionError(PayloadValidationError):
    code = "mutual_exclusion"


class MissingRequiredFieldError(PayloadValidationError):
    code = "missing_required_field"


_ERROR_CLASSES: Dict[str, Type[PayloadValidationError]] = {
    error_class.code: error_class
    for error_class in (
        InvalidFixedValueError,
        InvalidEnumValueError,
        LengthExceededError,
        InvalidFormatError,
        RangeViolationError,
        MutualExclusionError,
        MissingRequiredFieldError,
    )
}
