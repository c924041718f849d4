"""Shared fixtures for anonymizer tests."""

import pytest

from anonymization_logging import AnonymizationLogger
from fpe import ALPHANUMERIC, FF3Cipher

KEY_HEX = "2DE79D232DF5585D68CE47882AE256D6" * 2
OTHER_KEY_HEX = "EF4359D8D580AA4F7F036D6F04FC6A94" * 2
TWEAK = bytes(7)
OTHER_TWEAK = bytes.fromhex("D8E7920AFA330A")


@pytest.fixture
def cipher():
    """Radix-10 cipher with a fixed 256-bit key and the zero tweak."""
    return FF3Cipher(KEY_HEX, TWEAK, radix=10)


@pytest.fixture
def other_cipher():
    """Same radix, different key."""
    return FF3Cipher(OTHER_KEY_HEX, TWEAK, radix=10)


@pytest.fixture
def alnum_cipher():
    """Cipher over digits and ASCII letters (radix 62)."""
    return FF3Cipher(KEY_HEX, TWEAK, alphabet=ALPHANUMERIC)


@pytest.fixture
def sample_config():
    """Sample config matching the structure in config.yaml."""
    return {
        "cipher": {
            "radix": 10,
        },
        "anonymizers": {
            "EMAIL_ADDRESS": {"kind": "email", "options": {"preserve_domain": True}},
            "PHONE_NUMBER": {"kind": "phone", "options": {"preserve_country_code": True}},
            "CREDIT_CARD": {"kind": "credit_card", "options": {"preserve_last_four": True}},
        },
        "recognizers": {
            "entities": ["EMAIL_ADDRESS", "PHONE_NUMBER", "CREDIT_CARD"],
        },
        "keystore": {
            "path": "keystore.dat",
            "iterations": 1000,
        },
        "logging": {
            "level": "WARNING",
        },
    }


@pytest.fixture
def audit_logger():
    """Audit logger whose handlers are closed after the test."""
    logger = AnonymizationLogger()
    yield logger
    logger.close()
