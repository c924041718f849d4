"""Format-preserving encryption core.

This package contains:
- radix: symbol string <-> integer codec
- alphabets: named alphabets and the default-alphabet resolver
- cipher: FF3Cipher, the keyed Feistel cipher
- errors: exception taxonomy shared with the anonymizers
"""

from .alphabets import (
    ALPHANUMERIC,
    BASE64,
    DIGITS,
    EMAIL,
    EXTENDED_LATIN,
    HEX,
    LOWER_ALPHA,
    NAMED_ALPHABETS,
    SPECIAL_CHARS,
    SPECIAL_LOWER,
    SPECIAL_UPPER,
    UPPER_ALPHA,
    default_alphabet,
    resolve_alphabet,
    validate_alphabet,
)
from .cipher import DEFAULT_TWEAK, TWEAK_LEN, FF3Cipher, chunk_bounds, maximum_length, minimum_length
from .errors import (
    AnonymizationError,
    CipherError,
    ConfigurationError,
    InsufficientDomainError,
    InvalidAlphabetError,
    InvalidCharacterError,
    InvalidKeyError,
    InvalidLengthError,
    InvalidSymbolError,
    InvalidTweakError,
    KeyStoreError,
    NoActiveCipherError,
    UnsupportedRadixError,
)
from .radix import add_mod, decode, encode, sub_mod

__all__ = [
    # Cipher
    "FF3Cipher",
    "DEFAULT_TWEAK",
    "TWEAK_LEN",
    "minimum_length",
    "maximum_length",
    "chunk_bounds",
    # Codec
    "decode",
    "encode",
    "add_mod",
    "sub_mod",
    # Alphabets
    "ALPHANUMERIC",
    "BASE64",
    "DIGITS",
    "EMAIL",
    "EXTENDED_LATIN",
    "HEX",
    "LOWER_ALPHA",
    "NAMED_ALPHABETS",
    "SPECIAL_CHARS",
    "SPECIAL_LOWER",
    "SPECIAL_UPPER",
    "UPPER_ALPHA",
    "default_alphabet",
    "resolve_alphabet",
    "validate_alphabet",
    # Errors
    "AnonymizationError",
    "CipherError",
    "ConfigurationError",
    "InsufficientDomainError",
    "InvalidAlphabetError",
    "InvalidCharacterError",
    "InvalidKeyError",
    "InvalidLengthError",
    "InvalidSymbolError",
    "InvalidTweakError",
    "KeyStoreError",
    "NoActiveCipherError",
    "UnsupportedRadixError",
]
