from .data import SepaQrData, format_money
from .errors import (
    InvalidEnumValueError,
    InvalidFixedValueError,
    InvalidFormatError,
    LengthExceededError,
    MissingRequiredFieldError,
    MutualExclusionError,
    PayloadValidationError,
    RangeViolationError,
)
from .reference_data import CURRENCIES, CharacterSet
