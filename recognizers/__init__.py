"""Deterministic recognizers for anonymizable spans in free text.

This package contains:
- patterns: regex recognizers for email addresses, phone numbers and card numbers
"""

from .patterns import (
    CreditCardNumberRecognizer,
    EmailRecognizer,
    PhoneNumberRecognizer,
    create_default_recognizers,
    luhn_checksum,
)

__all__ = [
    "EmailRecognizer",
    "PhoneNumberRecognizer",
    "CreditCardNumberRecognizer",
    "create_default_recognizers",
    "luhn_checksum",
]
