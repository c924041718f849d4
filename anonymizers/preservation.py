"""Preservation engine - keep structural characters and fields intact.

Wraps the FPE cipher so that characters the cipher cannot (or must not)
encrypt survive a round trip:

- CharacterPreserver: keeps a fixed set of characters at their positions
- PatternPreserver: encrypts only the capture groups of a regex
- PreservationEngine: holds whichever of the two is configured

De-anonymization is fail-open per field: a field that fails to decrypt is
returned unchanged and a warning is logged.
"""

import logging
import random
import re
from collections.abc import Iterable

from fpe import DIGITS, LOWER_ALPHA, UPPER_ALPHA, CipherError, ConfigurationError, chunk_bounds
from fpe.cipher import FF3Cipher

logger = logging.getLogger(__name__)

PRESERVATION_ALPHABET = LOWER_ALPHA + UPPER_ALPHA + DIGITS
FILLER = "X"


def placeholder_for(alphabet: str) -> str:
    """Two-symbol stand-in for fields too short to encrypt."""
    return FILLER * 2 if FILLER in alphabet else alphabet[0] * 2


def encrypt_chunked(cipher: FF3Cipher, text: str) -> str:
    """Encrypt ``text`` in pieces of at most ``cipher.max_length`` symbols."""
    return "".join(
        cipher.encrypt(text[start:end])
        for start, end in chunk_bounds(len(text), cipher.max_length)
    )


def decrypt_chunked(cipher: FF3Cipher, text: str, owner: str) -> str:
    """Inverse of :func:`encrypt_chunked`; pieces that fail to decrypt are kept."""
    plaintext = []
    for start, end in chunk_bounds(len(text), cipher.max_length):
        chunk = text[start:end]
        try:
            plaintext.append(cipher.decrypt(chunk))
        except CipherError as e:
            logger.warning(f"[{owner}] Decryption failed, keeping field: {e}")
            plaintext.append(chunk)
    return "".join(plaintext)


class CharacterPreserver:
    """
    Keep given characters at their original positions.

    The remaining characters are filtered to ``alphabet`` and encrypted
    (in ``max_length`` pieces when longer), then the preserved characters
    are re-inserted in ascending position order. Positions past the end of the ciphertext are appended.

    Args:
        cipher: Cipher providing key and tweak
        characters: Characters to pass through unchanged
        alphabet: Alphabet used for the encrypted remainder (same on both sides)
    """

    def __init__(
        self,
        cipher: FF3Cipher,
        characters: Iterable[str],
        alphabet: str = PRESERVATION_ALPHABET,
    ):
        self.characters = frozenset(characters)
        self.alphabet = alphabet
        self._cipher = cipher.with_alphabet(alphabet)

    @property
    def cipher(self) -> FF3Cipher:
        return self._cipher

    def split(self, text: str) -> tuple[list[tuple[int, str]], str]:
        """Separate the preserved (position, char) pairs from the rest of the text."""
        preserved = []
        remainder = []
        for position, char in enumerate(text):
            if char in self.characters:
                preserved.append((position, char))
            else:
                remainder.append(char)
        return preserved, "".join(remainder)

    @staticmethod
    def reinsert(text: str, preserved: list[tuple[int, str]]) -> str:
        chars = list(text)
        for position, char in preserved:
            if position <= len(chars):
                chars.insert(position, char)
            else:
                chars.append(char)
        return "".join(chars)

    def anonymize(self, text: str) -> str:
        if not text:
            return text

        preserved, remainder = self.split(text)
        if not remainder:
            return text

        if len(remainder) < 2:
            remainder += FILLER

        safe_text = "".join(c for c in remainder if c in self.alphabet)
        if len(safe_text) < 2:
            safe_text = placeholder_for(self.alphabet)

        ciphertext = encrypt_chunked(self._cipher, safe_text)
        return self.reinsert(ciphertext, preserved)

    def deanonymize(self, text: str) -> str:
        if not text:
            return text

        preserved, remainder = self.split(text)
        if len(remainder) < 2:
            return text

        plaintext = decrypt_chunked(self._cipher, remainder, "CharacterPreserver")
        return self.reinsert(plaintext, preserved)


class PatternPreserver:
    """
    Encrypt only the capture groups of the first regex match.

    Text outside the groups passes through unchanged. If the regex does not
    match, the whole string is treated as one field. Nested groups are not
    supported: a group starting inside an earlier group is skipped.

    Single-character groups cannot go through FPE; they are replaced with a
    random letter when anonymizing and left alone when de-anonymizing, so
    those positions are not recoverable.

    Args:
        cipher: Cipher whose alphabet is the active alphabet for every field
        pattern: Regular expression (string or compiled)
    """

    def __init__(self, cipher: FF3Cipher, pattern: str | re.Pattern):
        self._cipher = cipher
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def anonymize(self, text: str) -> str:
        if not text:
            return text
        match = self.pattern.search(text)
        if match is None:
            return self._encrypt_field(text)
        return self._transform_groups(text, match, self._anonymize_group)

    def deanonymize(self, text: str) -> str:
        if not text:
            return text
        match = self.pattern.search(text)
        if match is None:
            if len(text) < 2:
                return text
            return decrypt_chunked(self._cipher, text, "PatternPreserver")
        return self._transform_groups(text, match, self._deanonymize_group)

    @staticmethod
    def _transform_groups(text: str, match: re.Match, transform) -> str:
        result = text
        offset = 0
        consumed_until = 0

        for index in range(1, match.re.groups + 1):
            value = match.group(index)
            if not value:
                continue
            start = match.start(index)
            if start < consumed_until:
                continue
            consumed_until = match.end(index)

            replacement = transform(value)
            if replacement is None:
                continue

            begin = start + offset
            result = result[:begin] + replacement + result[begin + len(value):]
            offset += len(replacement) - len(value)

        return result

    def _anonymize_group(self, value: str) -> str:
        if len(value) < 2:
            return random.choice(UPPER_ALPHA)
        return self._encrypt_field(value)

    def _deanonymize_group(self, value: str) -> str | None:
        if len(value) < 2:
            return None
        return decrypt_chunked(self._cipher, value, "PatternPreserver")

    def _encrypt_field(self, value: str) -> str:
        alphabet = self._cipher.alphabet
        safe_text = "".join(c for c in value if c in alphabet)
        if len(safe_text) < 2:
            safe_text = placeholder_for(alphabet)
        return encrypt_chunked(self._cipher, safe_text)


class PreservationEngine:
    """
    Dispatches to pattern preservation (if set) or character preservation.

    Usage:
        engine = PreservationEngine(cipher)
        engine.set_characters("-@")
        token = engine.anonymize("ab-cd@ef")
    """

    def __init__(self, cipher: FF3Cipher):
        self._cipher = cipher
        self._characters: CharacterPreserver | None = None
        self._pattern: PatternPreserver | None = None

    @property
    def active(self) -> bool:
        return self._pattern is not None or self._characters is not None

    @property
    def preserved_characters(self) -> frozenset:
        return self._characters.characters if self._characters else frozenset()

    def set_characters(self, characters: Iterable[str], alphabet: str = PRESERVATION_ALPHABET) -> None:
        characters = frozenset(characters)
        self._characters = CharacterPreserver(self._cipher, characters, alphabet) if characters else None

    def set_pattern(self, pattern: str | re.Pattern | None) -> None:
        self._pattern = PatternPreserver(self._cipher, pattern) if pattern else None

    def _preserver(self) -> CharacterPreserver | PatternPreserver:
        if self._pattern is not None:
            return self._pattern
        if self._characters is not None:
            return self._characters
        raise ConfigurationError("No preservation characters or pattern configured")

    def anonymize(self, text: str) -> str:
        return self._preserver().anonymize(text)

    def deanonymize(self, text: str) -> str:
        return self._preserver().deanonymize(text)
