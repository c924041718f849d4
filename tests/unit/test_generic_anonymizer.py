"""Unit tests for GenericAnonymizer."""

import logging

import pytest

from anonymizers import GenericAnonymizer
from fpe import CipherError


class TestGenericAnonymizer:
    """Whole-value encryption."""

    def test_round_trip(self, alnum_cipher):
        """Values over the cipher alphabet round-trip."""
        anonymizer = GenericAnonymizer(alnum_cipher)
        token = anonymizer.anonymize("AccountRef2024")
        assert len(token) == len("AccountRef2024")
        assert anonymizer.deanonymize(token) == "AccountRef2024"

    def test_invalid_input_raises(self, cipher):
        """Anonymizing a value outside the alphabet is an error."""
        with pytest.raises(CipherError):
            GenericAnonymizer(cipher).anonymize("12-34")

    def test_deanonymize_fail_open(self, cipher, caplog):
        """Undecryptable values are returned unchanged with a warning."""
        with caplog.at_level(logging.WARNING):
            assert GenericAnonymizer(cipher).deanonymize("12-34") == "12-34"
        assert "GenericAnonymizer" in caplog.text

    def test_preservation_pattern(self, cipher):
        """A preservation pattern limits encryption to its groups."""
        anonymizer = GenericAnonymizer(cipher).configure(preserve_pattern=r"ID-(\d+)")
        token = anonymizer.anonymize("ID-123456")
        assert token.startswith("ID-")
        assert anonymizer.deanonymize(token) == "ID-123456"

    def test_preservation_characters(self, cipher):
        """Preserved characters let structured values through."""
        anonymizer = GenericAnonymizer(cipher).configure(preserve_characters="-")
        token = anonymizer.anonymize("ab12-cd34")
        assert token[4] == "-"
        assert anonymizer.deanonymize(token) == "ab12-cd34"
