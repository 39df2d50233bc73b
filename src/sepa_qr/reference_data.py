import re
from decimal import Decimal
from enum import IntEnum
from typing import FrozenSet


class CharacterSet(IntEnum):
    """
    Zeichensätze nach EPC069-12 (Feld 3 des Payloads).
    """
    UTF_8 = 1
    ISO8859_1 = 2
    ISO8859_2 = 3
    ISO8859_4 = 4
    ISO8859_5 = 5
    ISO8859_7 = 6
    ISO8859_10 = 7
    ISO8859_15 = 8


SERVICE_TAG = "BCD"
IDENTIFICATION = "SCT"
VERSIONS: FrozenSet[int] = frozenset({1, 2})
DEFAULT_VERSION = 2
DEFAULT_CURRENCY = "EUR"

MAX_NAME_LENGTH = 70
MAX_IBAN_LENGTH = 34
BIC_LENGTHS: FrozenSet[int] = frozenset({8, 11})
PURPOSE_LENGTH = 4
MAX_REFERENCE_LENGTH = 35
MAX_TEXT_LENGTH = 140
MAX_INFORMATION_LENGTH = 70

MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999.99")
CENT = Decimal("0.01")

AMOUNT_PATTERN = re.compile(r"[0-9]+(\.[0-9]{0,5})?")
PURPOSE_PATTERN = re.compile(r"[A-Z]{4}")
REFERENCE_PATTERN = re.compile(r"[A-Za-z0-9':,.?\-+()/ ]*")

# Unterstützte ISO-4217-Codes (inkl. einiger historischer Codes)
CURRENCIES: FrozenSet[str] = frozenset({
    "ALL", "AFN", "ARS", "AWG", "AUD", "AZN", "BSD", "BBD", "BDT", "BYR", "BZD", "BMD", "BOB", "BAM", "BWP", "BGN", "BRL",
    "BND", "KHR", "CAD", "KYD", "CLP", "CNY", "COP", "CRC", "HRK", "CUP", "CZK", "DKK", "DOP", "XCD", "EGP", "SVC", "EEK",
    "EUR", "FKP", "FJD", "GHC", "GIP", "GTQ", "GGP", "GYD", "HNL", "HKD", "HUF", "ISK", "INR", "IDR", "IRR", "IMP", "ILS",
    "JMD", "JPY", "JEP", "KZT", "KPW", "KRW", "KGS", "LAK", "LVL", "LBP", "LRD", "LTL", "MKD", "MYR", "MUR", "MXN", "MNT",
    "MZN", "NAD", "NPR", "ANG", "NZD", "NIO", "NGN", "NOK", "OMR", "PKR", "PAB", "PYG", "PEN", "PHP", "PLN", "QAR", "RON",
    "RUB", "SHP", "SAR", "RSD", "SCR", "SGD", "SBD", "SOS", "ZAR", "LKR", "SEK", "CHF", "SRD", "SYP", "TWD", "THB", "TTD",
    "TRY", "TRL", "TVD", "UAH", "GBP", "USD", "UYU", "UZS", "VEF", "VND", "YER", "ZWD",
})
