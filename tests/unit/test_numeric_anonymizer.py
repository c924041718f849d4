"""Unit tests for NumericAnonymizer."""

import pytest

from anonymizers import NumericAnonymizer
from fpe import ConfigurationError


class TestNumericAnonymizer:
    """Sign, integer and decimal handling."""

    def test_integer_round_trip(self, cipher):
        """Plain integers round-trip with the same digit count."""
        anonymizer = NumericAnonymizer(cipher)
        token = anonymizer.anonymize("123456")
        assert len(token) == 6 and token.isdigit()
        assert anonymizer.deanonymize(token) == "123456"

    def test_decimal_places_kept(self, cipher):
        """-123.4567 with two kept places keeps sign, point and 45."""
        anonymizer = NumericAnonymizer(cipher).configure(preserve_decimal_places=2)
        token = anonymizer.anonymize("-123.4567")
        assert token.startswith("-")
        assert len(token) == len("-123.4567")
        assert token[4:7] == ".45"
        assert anonymizer.deanonymize(token) == "-123.4567"

    def test_decimal_part_encrypted_by_default(self, cipher):
        """All decimals are encrypted when no places are kept."""
        anonymizer = NumericAnonymizer(cipher)
        token = anonymizer.anonymize("42.1234")
        assert token[2] == "."
        assert anonymizer.deanonymize(token) == "42.1234"

    def test_drop_sign(self, cipher):
        """Without preserve_sign the sign disappears."""
        anonymizer = NumericAnonymizer(cipher).configure(preserve_sign=False)
        assert not anonymizer.anonymize("-12345").startswith("-")

    def test_drop_decimal_part(self, cipher):
        """Without preserve_decimal_point the fraction is dropped."""
        anonymizer = NumericAnonymizer(cipher).configure(preserve_decimal_point=False)
        token = anonymizer.anonymize("12345.678")
        assert "." not in token
        assert len(token) == 5

    def test_long_numbers_chunked(self, cipher):
        """Runs longer than one chunk round-trip."""
        anonymizer = NumericAnonymizer(cipher)
        number = "12345678901234567"
        token = anonymizer.anonymize(number)
        assert len(token) == 17
        assert anonymizer.deanonymize(token) == number

    def test_single_digit_is_padded(self, cipher):
        """A lone digit becomes two digits and is not recoverable as one."""
        anonymizer = NumericAnonymizer(cipher)
        token = anonymizer.anonymize("7")
        assert len(token) == 2
        assert anonymizer.deanonymize(token) == "70"

    def test_preserve_magnitude(self, cipher):
        """The integer part keeps its digit count."""
        anonymizer = NumericAnonymizer(cipher).configure(preserve_magnitude=True)
        assert len(anonymizer.anonymize("5")) == 1
        assert len(anonymizer.anonymize("98765")) == 5

    def test_non_numeric_falls_back(self, cipher):
        """Text that is not a numeral uses keyed substitution."""
        anonymizer = NumericAnonymizer(cipher)
        token = anonymizer.anonymize("12,5 EUR")
        assert token[2] == ","
        assert token[4] == " "
        assert anonymizer.deanonymize(token) == "12,5 EUR"

    def test_unicode_digits_not_numeric(self, cipher):
        """Non-ASCII digits are not treated as a numeral."""
        token = NumericAnonymizer(cipher).anonymize("١٢٣")
        assert token == "١٢٣"

    def test_negative_places_clamped(self, cipher):
        """Negative decimal places mean none."""
        anonymizer = NumericAnonymizer(cipher).configure(preserve_decimal_places=-3)
        assert anonymizer.preserve_decimal_places == 0

    def test_bad_places(self, cipher):
        """Non-integer places are a configuration error."""
        with pytest.raises(ConfigurationError):
            NumericAnonymizer(cipher).configure(preserve_decimal_places="two")
