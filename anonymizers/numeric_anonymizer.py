"""Numeral anonymizer: sign, integer part and decimal part handled separately."""

import logging
import re

from fpe import DIGITS, CipherError, chunk_bounds

from .base import AnonymizerKind, BaseAnonymizer, as_bool, as_int

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r"^([+-]?)([0-9]+)(?:\.([0-9]+))?$")
CHUNK_SIZE = 16
PAD_DIGIT = "0"


class NumericAnonymizer(BaseAnonymizer):
    """
    Anonymize numerals such as ``-123.4567`` digit run by digit run.

    Input that is not a plain decimal numeral falls back to string
    anonymization. A lone single digit is padded with ``0`` before
    encryption and so comes back as two digits.

    Options:
        preserve_sign: Keep a leading ``+``/``-`` (default True)
        preserve_decimal_point: Keep the decimal part; when False it is
            dropped (default True)
        preserve_decimal_places: Number of leading decimal digits kept in
            clear (default 0)
        preserve_magnitude: Pad/truncate the integer part to its original
            digit count (default False)
    """

    kind = AnonymizerKind.NUMERIC

    def __init__(self, cipher):
        super().__init__(cipher)
        self.preserve_sign = True
        self.preserve_decimal_point = True
        self.preserve_decimal_places = 0
        self.preserve_magnitude = False
        self._digits = cipher.with_alphabet(DIGITS)

    def set_preserve_sign(self, preserve) -> None:
        self._check_mutable()
        self.preserve_sign = as_bool(preserve)

    def set_preserve_decimal_point(self, preserve) -> None:
        self._check_mutable()
        self.preserve_decimal_point = as_bool(preserve)

    def set_preserve_decimal_places(self, places) -> None:
        self._check_mutable()
        places = as_int(places)
        self.preserve_decimal_places = max(places, 0)

    def set_preserve_magnitude(self, preserve) -> None:
        self._check_mutable()
        self.preserve_magnitude = as_bool(preserve)

    def _encrypt_run(self, digits: str) -> str:
        if len(digits) < 2:
            digits = digits.ljust(2, PAD_DIGIT)
        return "".join(
            self._digits.encrypt(digits[start:end])
            for start, end in chunk_bounds(len(digits), CHUNK_SIZE)
        )

    def _decrypt_run(self, digits: str) -> str:
        if len(digits) < 2:
            return digits
        result = []
        for start, end in chunk_bounds(len(digits), CHUNK_SIZE):
            chunk = digits[start:end]
            try:
                result.append(self._digits.decrypt(chunk))
            except CipherError as e:
                logger.warning(f"[NumericAnonymizer] Decryption failed, keeping chunk: {e}")
                result.append(chunk)
        return "".join(result)

    def _fit_magnitude(self, digits: str, length: int) -> str:
        if len(digits) < length:
            return digits.rjust(length, PAD_DIGIT)
        return digits[:length]

    def _split_decimals(self, decimals: str) -> tuple[str, str]:
        places = self.preserve_decimal_places
        if len(decimals) <= places:
            return decimals, ""
        return decimals[:places], decimals[places:]

    def _anonymize(self, text: str) -> str:
        match = NUMBER_PATTERN.match(text)
        if match is None:
            return self._fallback_anonymize(text)
        sign, integer, decimals = match.group(1), match.group(2), match.group(3)

        encrypted_integer = self._encrypt_run(integer)
        if self.preserve_magnitude:
            encrypted_integer = self._fit_magnitude(encrypted_integer, len(integer))

        result = (sign if self.preserve_sign else "") + encrypted_integer
        if decimals and self.preserve_decimal_point:
            kept, rest = self._split_decimals(decimals)
            result += "." + kept + (self._encrypt_run(rest) if rest else "")
        return result

    def _deanonymize(self, text: str) -> str:
        match = NUMBER_PATTERN.match(text)
        if match is None:
            return self._fallback_deanonymize(text)
        sign, integer, decimals = match.group(1), match.group(2), match.group(3)

        result = sign + self._decrypt_run(integer)
        if decimals:
            kept, rest = self._split_decimals(decimals)
            result += "." + kept + (self._decrypt_run(rest) if rest else "")
        return result
