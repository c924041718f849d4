"""Shared plumbing for the domain anonymizers.

Every anonymizer exposes the same capability interface:
``anonymize``, ``deanonymize`` and ``configure`` (plus per-variant setters).
Options may only change before the first call; after that the instance is
read-only and can be shared between threads.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import Enum

from fpe import CipherError, ConfigurationError, NoActiveCipherError
from fpe.cipher import FF3Cipher

from .preservation import PreservationEngine
from .substitution import SubstitutionAlphabets

logger = logging.getLogger(__name__)


class AnonymizerKind(str, Enum):
    """Closed set of anonymizer variants."""
    STRING = "string"
    NAME = "name"
    NUMERIC = "numeric"
    PHONE = "phone"
    PHONE_NANP = "phone_nanp"
    EMAIL = "email"
    CREDIT_CARD = "credit_card"
    GENERIC = "generic"


class BaseAnonymizer(ABC):
    """
    Base for all anonymizer variants.

    Holds a read-only reference to the cipher, the preservation engine and
    the keyed substitution tables. Subclasses implement ``_anonymize`` and
    ``_deanonymize`` for non-empty input.

    ``deanonymize`` never raises for malformed ciphertext: fields that
    cannot be decrypted are returned unchanged. It raises only for
    configuration problems.

    Args:
        cipher: Configured FF3Cipher (shared, not owned)

    Raises:
        NoActiveCipherError: If cipher is None
    """

    kind: AnonymizerKind

    def __init__(self, cipher: FF3Cipher | None):
        if cipher is None:
            raise NoActiveCipherError(
                f"{type(self).__name__} requires a configured cipher"
            )
        self._cipher = cipher
        self._preservation = PreservationEngine(cipher)
        self._substitution = SubstitutionAlphabets.from_cipher(cipher)
        self._frozen = False

    @property
    def cipher(self) -> FF3Cipher:
        return self._cipher

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConfigurationError(
                f"{type(self).__name__} is already in use; configure it before the first call"
            )

    # Preservation options shared by every variant

    def set_preserve_characters(self, characters: Iterable[str]) -> None:
        self._check_mutable()
        self._preservation.set_characters(characters)

    def set_preserve_pattern(self, pattern: str | re.Pattern | None) -> None:
        self._check_mutable()
        self._preservation.set_pattern(pattern)

    def configure(self, **options) -> "BaseAnonymizer":
        """
        Apply options by name, e.g. ``configure(preserve_domain=False)``.

        Each option ``x`` is routed to the setter ``set_x``.

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: Unknown option or instance already in use
        """
        for name, value in options.items():
            setter = getattr(self, f"set_{name}", None)
            if setter is None or not callable(setter):
                raise ConfigurationError(f"Unknown option for {type(self).__name__}: {name}")
            setter(value)
        return self

    def anonymize(self, text: str) -> str:
        self._frozen = True
        if not text:
            return text
        return self._anonymize(text)

    def deanonymize(self, text: str) -> str:
        self._frozen = True
        if not text:
            return text
        return self._deanonymize(text)

    @abstractmethod
    def _anonymize(self, text: str) -> str:
        ...

    @abstractmethod
    def _deanonymize(self, text: str) -> str:
        ...

    # Fallback for input that does not fit the variant's domain

    def _fallback_anonymize(self, text: str) -> str:
        if self._preservation.active:
            return self._preservation.anonymize(text)
        return self._substitution.substitute_ascii(text)

    def _fallback_deanonymize(self, text: str) -> str:
        if self._preservation.active:
            return self._preservation.deanonymize(text)
        return self._substitution.restore_ascii(text)

    # Field helpers.
    # ``field_cipher`` alphabets must be closed under the substitution classes
    # (all of a-z, A-Z or 0-9, or none of them) for the round trip to hold.

    def _encrypt_field(self, field_cipher: FF3Cipher, value: str) -> str:
        if not value:
            return value
        if field_cipher.accepts(value):
            return field_cipher.encrypt(value)
        return self._substitution.substitute_ascii(value)

    def _decrypt_field(self, field_cipher: FF3Cipher, value: str) -> str:
        if not value:
            return value
        if not field_cipher.accepts(value):
            return self._substitution.restore_ascii(value)
        try:
            return field_cipher.decrypt(value)
        except CipherError as e:
            logger.warning(f"[{type(self).__name__}] Decryption failed, keeping field: {e}")
            return value


def as_bool(value) -> bool:
    """Coerce config/CLI values such as "true"/"0" to bool."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off", ""):
            return False
        raise ConfigurationError(f"Not a boolean value: {value!r}")
    return bool(value)


def as_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Not an integer value: {value!r}") from e
