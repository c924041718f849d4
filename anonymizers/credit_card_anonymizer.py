"""Payment card number anonymizer."""

import re

from fpe import DIGITS

from .base import AnonymizerKind, BaseAnonymizer, as_bool
from .phone_anonymizer import extract_digits

MIN_CARD_DIGITS = 13
MAX_CARD_DIGITS = 19
GROUP_SIZE = 4
SEPARATORS = ("-", " ")
CARD_TEXT = re.compile(r"^[0-9 \-]+$")


def group_digits(digits: str, separator: str) -> str:
    """Insert ``separator`` after every 4 digits ("41111111" -> "4111-1111")."""
    if not separator:
        return digits
    return separator.join(digits[i:i + GROUP_SIZE] for i in range(0, len(digits), GROUP_SIZE))


def detect_separator(text: str) -> str:
    for separator in SEPARATORS:
        if separator in text:
            return separator
    return ""


class CreditCardAnonymizer(BaseAnonymizer):
    """
    Anonymize 13-19 digit card numbers.

    The digits between the optionally preserved first and last four are
    encrypted with the digit alphabet. If the input used ``-`` (or else a
    space) as a separator, the output is grouped in blocks of four with it;
    other layouts are normalized to that grouping. Text with other
    characters, or a digit count outside 13-19, falls back to string
    anonymization.

    Options:
        preserve_first_four: Keep the first four digits (default False)
        preserve_last_four: Keep the last four digits (default True)
    """

    kind = AnonymizerKind.CREDIT_CARD

    def __init__(self, cipher):
        super().__init__(cipher)
        self.preserve_first_four = False
        self.preserve_last_four = True
        self._digits = cipher.with_alphabet(DIGITS)

    def set_preserve_first_four(self, preserve) -> None:
        self._check_mutable()
        self.preserve_first_four = as_bool(preserve)

    def set_preserve_last_four(self, preserve) -> None:
        self._check_mutable()
        self.preserve_last_four = as_bool(preserve)

    @staticmethod
    def _is_card_number(text: str) -> bool:
        if not CARD_TEXT.match(text):
            return False
        return MIN_CARD_DIGITS <= len(extract_digits(text)) <= MAX_CARD_DIGITS

    def _transform(self, text: str, decrypting: bool) -> str:
        digits = extract_digits(text)
        start = GROUP_SIZE if self.preserve_first_four else 0
        end = len(digits) - GROUP_SIZE if self.preserve_last_four else len(digits)

        middle = digits[start:end]
        if decrypting:
            middle = self._decrypt_field(self._digits, middle)
        else:
            middle = self._encrypt_field(self._digits, middle)

        return group_digits(digits[:start] + middle + digits[end:], detect_separator(text))

    def _anonymize(self, text: str) -> str:
        if not self._is_card_number(text):
            return self._fallback_anonymize(text)
        return self._transform(text, decrypting=False)

    def _deanonymize(self, text: str) -> str:
        if not self._is_card_number(text):
            return self._fallback_deanonymize(text)
        return self._transform(text, decrypting=True)
