"""Keyed substitution alphabets.

Each permutation is a Fisher-Yates shuffle seeded from an FPE encryption of a
fixed plaintext, so the tables depend only on the cipher (key and tweak) and
are identical for every anonymizer built from the same cipher.
"""

import string
from dataclasses import dataclass

from fpe import DIGITS, HEX, LOWER_ALPHA, SPECIAL_CHARS, SPECIAL_LOWER, SPECIAL_UPPER, UPPER_ALPHA
from fpe.cipher import FF3Cipher

SEED_MODULUS = 997
SEED_MULTIPLIER = 31

# Fixed plaintexts over the hex alphabet, one per table
SEED_LOWER = "a1b2c3d4e5f6"
SEED_UPPER = "f6e5d4c3b2a1"
SEED_DIGITS = "1a2b3c4d5e6f"
SEED_LETTERS = "c3a1f6e5b2d4"
SEED_SPECIAL = "5e3c1a1c4a2f"
SEED_SPECIAL_LOWER = "0b9a8d7c6f5e"
SEED_SPECIAL_UPPER = "e5f6c7d8a9b0"
SEED_PUNCTUATION = "9f8e7d6c5b4a"
SEED_WHITESPACE = "4d3c2b1a0f9e"

ASCII_PUNCTUATION = string.punctuation
ASCII_WHITESPACE = string.whitespace


def fold_seed(seed_text: str) -> int:
    """Fold a string into a small integer (base-31 polynomial mod 997)."""
    value = 0
    for c in seed_text:
        value = (value * SEED_MULTIPLIER + ord(c)) % SEED_MODULUS
    return value


def shuffle_alphabet(source: str, seed_text: str) -> str:
    """
    Deterministically permute ``source`` using ``seed_text``.

    Args:
        source: Alphabet to shuffle
        seed_text: Seed string (typically FPE ciphertext)

    Returns:
        Permutation of ``source``
    """
    chars = list(source)
    seed = fold_seed(seed_text)
    for i in range(len(chars) - 1, 0, -1):
        seed = (seed * SEED_MULTIPLIER + i) % SEED_MODULUS
        j = seed % (i + 1)
        chars[i], chars[j] = chars[j], chars[i]
    return "".join(chars)


def keyed_shuffle(cipher: FF3Cipher, source: str, seed_plaintext: str) -> str:
    """Shuffle ``source`` with a seed derived from the cipher."""
    seed_text = cipher.with_alphabet(HEX).encrypt(seed_plaintext)
    return shuffle_alphabet(source, seed_text)


@dataclass(frozen=True)
class SubstitutionTable:
    """A reversible one-to-one symbol mapping."""
    source: str
    target: str

    def __post_init__(self):
        if sorted(self.source) != sorted(self.target):
            raise ValueError("Substitution target must be a permutation of the source")

    def substitute(self, char: str) -> str:
        index = self.source.find(char)
        return self.target[index] if index >= 0 else char

    def restore(self, char: str) -> str:
        index = self.target.find(char)
        return self.source[index] if index >= 0 else char

    def __contains__(self, char: str) -> bool:
        return char in self.source


@dataclass(frozen=True)
class SubstitutionAlphabets:
    """All keyed tables used by the String and Name anonymizers.

    Case-preserving tables map each case class onto itself; the ``*_mixed``
    tables permute across cases.
    """
    lower: SubstitutionTable
    upper: SubstitutionTable
    digits: SubstitutionTable
    letters_mixed: SubstitutionTable
    special_lower: SubstitutionTable
    special_upper: SubstitutionTable
    special_mixed: SubstitutionTable
    punctuation: SubstitutionTable
    whitespace: SubstitutionTable

    @classmethod
    def from_cipher(cls, cipher: FF3Cipher) -> "SubstitutionAlphabets":
        letters = LOWER_ALPHA + UPPER_ALPHA

        def table(source: str, seed: str) -> SubstitutionTable:
            return SubstitutionTable(source, keyed_shuffle(cipher, source, seed))

        return cls(
            lower=table(LOWER_ALPHA, SEED_LOWER),
            upper=table(UPPER_ALPHA, SEED_UPPER),
            digits=table(DIGITS, SEED_DIGITS),
            letters_mixed=table(letters, SEED_LETTERS),
            special_lower=table(SPECIAL_LOWER, SEED_SPECIAL_LOWER),
            special_upper=table(SPECIAL_UPPER, SEED_SPECIAL_UPPER),
            special_mixed=table(SPECIAL_CHARS, SEED_SPECIAL),
            punctuation=table(ASCII_PUNCTUATION, SEED_PUNCTUATION),
            whitespace=table(ASCII_WHITESPACE, SEED_WHITESPACE),
        )

    def substitute_ascii(self, text: str) -> str:
        """Substitute ASCII letters (case-preserving) and digits; leave the rest."""
        return "".join(self._ascii_map(c, restore=False) for c in text)

    def restore_ascii(self, text: str) -> str:
        """Inverse of :meth:`substitute_ascii`."""
        return "".join(self._ascii_map(c, restore=True) for c in text)

    def _ascii_map(self, char: str, restore: bool) -> str:
        for table in (self.lower, self.upper, self.digits):
            if char in table:
                return table.restore(char) if restore else table.substitute(char)
        return char
