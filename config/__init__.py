"""Configuration loading and management."""

from .loader import (
    DEFAULT_ANONYMIZER_PROFILES,
    get_anonymizer_profiles,
    get_cipher_config,
    get_keystore_config,
    get_logging_config,
    get_recognizer_entities,
    load_config,
)

__all__ = [
    "DEFAULT_ANONYMIZER_PROFILES",
    "get_anonymizer_profiles",
    "get_cipher_config",
    "get_keystore_config",
    "get_logging_config",
    "get_recognizer_entities",
    "load_config",
]
