"""Email address anonymizer."""

from fpe import EMAIL

from .base import AnonymizerKind, BaseAnonymizer, as_bool
from .preservation import CharacterPreserver


class EmailAnonymizer(BaseAnonymizer):
    """
    Anonymize the local part (and optionally the domain) of an address.

    The address is split on the first ``@``. Each part is encrypted over the
    email alphabet (letters, digits and ``._-``). Parts that cannot be
    encrypted as a whole (a single character, or characters such as ``+``
    outside the alphabet) are substituted symbol by symbol instead, so the
    round trip is still exact. Input without ``@`` falls back to string
    anonymization.

    Options:
        preserve_domain: Keep the domain unchanged (default True)
        preserve_dots: Keep ``.`` at its positions (default False)
        preserve_underscores: Keep ``_`` at its positions (default False)
    """

    kind = AnonymizerKind.EMAIL

    def __init__(self, cipher):
        super().__init__(cipher)
        self.preserve_domain = True
        self.preserve_dots = False
        self.preserve_underscores = False
        self._email = cipher.with_alphabet(EMAIL)
        self._preserver: CharacterPreserver | None = None

    def set_preserve_domain(self, preserve) -> None:
        self._check_mutable()
        self.preserve_domain = as_bool(preserve)

    def set_preserve_dots(self, preserve) -> None:
        self._check_mutable()
        self.preserve_dots = as_bool(preserve)
        self._update_preserver()

    def set_preserve_underscores(self, preserve) -> None:
        self._check_mutable()
        self.preserve_underscores = as_bool(preserve)
        self._update_preserver()

    def _update_preserver(self) -> None:
        characters = ("." if self.preserve_dots else "") + ("_" if self.preserve_underscores else "")
        if not characters:
            self._preserver = None
            return
        alphabet = "".join(c for c in EMAIL if c not in characters)
        self._preserver = CharacterPreserver(self._cipher, characters, alphabet)

    def _transform_field(self, value: str, decrypting: bool) -> str:
        transform = self._decrypt_field if decrypting else self._encrypt_field
        if self._preserver is None:
            return transform(self._email, value)

        preserved, remainder = self._preserver.split(value)
        remainder = transform(self._preserver.cipher, remainder)
        return self._preserver.reinsert(remainder, preserved)

    def _transform(self, text: str, decrypting: bool) -> str:
        local, _, domain = text.partition("@")
        local = self._transform_field(local, decrypting)
        if not self.preserve_domain:
            domain = self._transform_field(domain, decrypting)
        return f"{local}@{domain}"

    def _anonymize(self, text: str) -> str:
        if "@" not in text:
            return self._fallback_anonymize(text)
        return self._transform(text, decrypting=False)

    def _deanonymize(self, text: str) -> str:
        if "@" not in text:
            return self._fallback_deanonymize(text)
        return self._transform(text, decrypting=True)
