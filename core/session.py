"""Anonymization session - explicit scope for a cipher.

Instead of a process-wide cipher, callers open a session and pass it (or the
anonymizers it creates) to whatever needs one:

    with AnonymizationSession.from_key_store(store, "customers") as session:
        phone = session.create_anonymizer("phone")
        token = phone.anonymize("+40 721 234 567")
"""

from typing import Any

from anonymizers import AnonymizerKind, BaseAnonymizer, create_anonymizer
from core.masker import Masker, build_anonymizers
from core.protocols import KeyResolverProtocol, LoggerProtocol
from fpe import NoActiveCipherError
from fpe.cipher import FF3Cipher


class AnonymizationSession:
    """
    Owns one cipher for the duration of a ``with`` block.

    Anonymizers created by the session keep working after it closes (they
    hold their own reference to the cipher); the session itself refuses to
    hand out the cipher or create anything new once closed.

    Args:
        cipher: Configured cipher
    """

    def __init__(self, cipher: FF3Cipher):
        self._cipher: FF3Cipher | None = cipher

    @classmethod
    def from_key_pair(
        cls,
        pair,
        radix: int = 10,
        alphabet: str | None = None,
    ) -> "AnonymizationSession":
        """Open a session for a ``keys.KeyTweakPair``."""
        return cls(FF3Cipher.from_key_pair(pair, radix=radix, alphabet=alphabet))

    @classmethod
    def from_key_store(
        cls,
        store: KeyResolverProtocol,
        name: str,
        radix: int = 10,
        alphabet: str | None = None,
    ) -> "AnonymizationSession":
        """
        Open a session for a named key.

        Raises:
            KeyError: If the store has no key with this name
        """
        key, tweak = store.resolve(name)
        return cls(FF3Cipher(key, tweak, radix=radix, alphabet=alphabet))

    def __enter__(self) -> "AnonymizationSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def active(self) -> bool:
        return self._cipher is not None

    @property
    def cipher(self) -> FF3Cipher:
        if self._cipher is None:
            raise NoActiveCipherError("Anonymization session is closed")
        return self._cipher

    def create_anonymizer(self, kind: AnonymizerKind | str, **options) -> BaseAnonymizer:
        return create_anonymizer(kind, self.cipher, **options)

    def create_masker(
        self,
        config: dict[str, Any],
        logger: LoggerProtocol | None = None,
    ) -> Masker:
        """Create a Masker whose anonymizers come from ``config``."""
        return Masker(build_anonymizers(config, self.cipher), logger=logger, config=config)

    def close(self) -> None:
        self._cipher = None
