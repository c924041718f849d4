"""Exception taxonomy for the cipher core and the anonymization layer.

The cipher core raises these immediately on any violation. The anonymizers
catch ``CipherError`` only on the de-anonymization path, where a field that
cannot be decrypted is returned unchanged.
"""


class AnonymizationError(Exception):
    """Base class for every error raised by this project."""


class CipherError(AnonymizationError, ValueError):
    """Invalid input or parameters for the FPE cipher."""


class InvalidSymbolError(CipherError):
    """A symbol is not part of the alphabet used by the radix codec."""


class InvalidCharacterError(InvalidSymbolError):
    """Cipher input contains a character outside the active alphabet."""


class InvalidLengthError(CipherError):
    """Cipher input length is outside ``[2, max_len]``."""


class InvalidTweakError(CipherError):
    """Tweak is not exactly 7 bytes."""


class InvalidKeyError(CipherError):
    """Key is not valid hex or not a valid AES key size."""


class InvalidAlphabetError(CipherError):
    """Alphabet is empty or contains repeated symbols."""


class InsufficientDomainError(CipherError):
    """Radix too small (or too large) for the FF3-1 domain-size floor."""


class UnsupportedRadixError(CipherError):
    """Radix above 62 requested without a custom alphabet."""


class NoActiveCipherError(AnonymizationError):
    """An anonymizer or session was used without a configured cipher."""


class ConfigurationError(AnonymizationError):
    """Unknown option, invalid option value, or change after first use."""


class KeyStoreError(AnonymizationError):
    """Key store file could not be read or written."""
