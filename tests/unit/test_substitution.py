"""Unit tests for keyed substitution tables."""

import pytest

from anonymizers.substitution import (
    SubstitutionAlphabets,
    SubstitutionTable,
    fold_seed,
    keyed_shuffle,
    shuffle_alphabet,
)
from fpe import DIGITS, LOWER_ALPHA, SPECIAL_CHARS, SPECIAL_LOWER, UPPER_ALPHA


class TestShuffle:
    """shuffle_alphabet / keyed_shuffle."""

    def test_fold_seed_range(self):
        """Folded seeds stay below the modulus."""
        assert 0 <= fold_seed("f6e5d4c3b2a1") < 997

    def test_shuffle_is_permutation(self):
        """Shuffling never drops or duplicates symbols."""
        shuffled = shuffle_alphabet(LOWER_ALPHA, "a1b2c3d4e5f6")
        assert sorted(shuffled) == sorted(LOWER_ALPHA)

    def test_shuffle_is_deterministic(self):
        """Same seed, same permutation."""
        assert shuffle_alphabet(DIGITS, "seed") == shuffle_alphabet(DIGITS, "seed")

    def test_keyed_shuffle_is_permutation(self, cipher):
        """Keyed shuffles are permutations of the source."""
        shuffled = keyed_shuffle(cipher, LOWER_ALPHA, "a1b2c3d4e5f6")
        assert sorted(shuffled) == sorted(LOWER_ALPHA)

    def test_tables_depend_on_key(self, cipher, other_cipher):
        """Different keys give a different set of tables."""
        first = SubstitutionAlphabets.from_cipher(cipher)
        second = SubstitutionAlphabets.from_cipher(other_cipher)
        assert first != second


class TestSubstitutionTable:
    """SubstitutionTable."""

    def test_rejects_non_permutation(self):
        """Target must contain the same symbols as source."""
        with pytest.raises(ValueError):
            SubstitutionTable("abc", "abd")

    def test_substitute_and_restore(self):
        """restore undoes substitute."""
        table = SubstitutionTable("abc", "cab")
        assert table.substitute("a") == "c"
        assert table.restore("c") == "a"

    def test_unknown_characters_pass_through(self):
        """Symbols outside the table are returned unchanged."""
        table = SubstitutionTable("abc", "cab")
        assert table.substitute("z") == "z"
        assert table.restore("z") == "z"

    def test_membership(self):
        """`in` tests the source alphabet."""
        table = SubstitutionTable("abc", "cab")
        assert "a" in table
        assert "z" not in table


class TestSubstitutionAlphabets:
    """Tables derived from a cipher."""

    def test_tables_are_permutations(self, cipher):
        """Every table is a permutation of its source alphabet."""
        tables = SubstitutionAlphabets.from_cipher(cipher)
        assert sorted(tables.lower.target) == sorted(LOWER_ALPHA)
        assert sorted(tables.upper.target) == sorted(UPPER_ALPHA)
        assert sorted(tables.digits.target) == sorted(DIGITS)
        assert sorted(tables.special_lower.target) == sorted(SPECIAL_LOWER)
        assert sorted(tables.special_mixed.target) == sorted(SPECIAL_CHARS)

    def test_same_cipher_same_tables(self, cipher):
        """Tables depend only on the cipher."""
        assert SubstitutionAlphabets.from_cipher(cipher) == SubstitutionAlphabets.from_cipher(cipher)

    def test_ascii_round_trip(self, cipher):
        """restore_ascii undoes substitute_ascii."""
        tables = SubstitutionAlphabets.from_cipher(cipher)
        text = "Hello, World 42!"
        substituted = tables.substitute_ascii(text)
        assert tables.restore_ascii(substituted) == text

    def test_ascii_keeps_classes(self, cipher):
        """Case and digit classes survive substitution; other symbols are kept."""
        tables = SubstitutionAlphabets.from_cipher(cipher)
        substituted = tables.substitute_ascii("Ab9 ?ș")
        assert substituted[0].isupper()
        assert substituted[1].islower()
        assert substituted[2].isdigit()
        assert substituted[3:] == " ?ș"
