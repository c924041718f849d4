"""Whole-value anonymizer over the cipher's own alphabet."""

import logging

from fpe import CipherError

from .base import AnonymizerKind, BaseAnonymizer

logger = logging.getLogger(__name__)


class GenericAnonymizer(BaseAnonymizer):
    """
    Encrypt the whole value, or use the preservation engine when configured.

    Without preservation the value must be a valid cipher input: every
    character in the cipher alphabet and a length within its bounds.
    ``anonymize`` raises CipherError otherwise; ``deanonymize`` logs a
    warning and returns the input unchanged.
    """

    kind = AnonymizerKind.GENERIC

    def _anonymize(self, text: str) -> str:
        if self._preservation.active:
            return self._preservation.anonymize(text)
        return self._cipher.encrypt(text)

    def _deanonymize(self, text: str) -> str:
        if self._preservation.active:
            return self._preservation.deanonymize(text)
        try:
            return self._cipher.decrypt(text)
        except CipherError as e:
            logger.warning(f"[GenericAnonymizer] Decryption failed, keeping value: {e}")
            return text
