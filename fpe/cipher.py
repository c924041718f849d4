"""FF3-1 style format-preserving Feistel cipher.

Encrypts a string over an arbitrary alphabet into another string of the same
length over the same alphabet. The round function is a single AES block
(ECB, no padding) keyed with the secret key.

Usage:
    cipher = FF3Cipher("00" * 32, bytes(7), radix=10)
    token = cipher.encrypt("123456")
    assert cipher.decrypt(token) == "123456"
"""

import math

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .alphabets import default_alphabet, validate_alphabet
from .errors import (
    InsufficientDomainError,
    InvalidCharacterError,
    InvalidKeyError,
    InvalidLengthError,
    InvalidTweakError,
)
from .radix import add_mod, decode, encode, sub_mod

DOMAIN_MIN = 1_000_000  # FF3-1 minimum domain size
TWEAK_LEN = 7           # 56-bit tweak
NUM_ROUNDS = 8
AES_KEY_SIZES = (16, 24, 32)
DEFAULT_TWEAK = bytes(TWEAK_LEN)


def _parse_key(key: str | bytes) -> bytes:
    if isinstance(key, str):
        try:
            key = bytes.fromhex(key)
        except ValueError as e:
            raise InvalidKeyError(f"Key is not a valid hex string: {e}") from e
    key = bytes(key)
    if len(key) not in AES_KEY_SIZES:
        raise InvalidKeyError(
            f"Key must be {', '.join(str(s) for s in AES_KEY_SIZES)} bytes, got {len(key)}"
        )
    return key


def _parse_tweak(tweak: str | bytes | None) -> bytes:
    if tweak is None:
        return DEFAULT_TWEAK
    if isinstance(tweak, str):
        try:
            tweak = bytes.fromhex(tweak)
        except ValueError as e:
            raise InvalidTweakError(f"Tweak is not a valid hex string: {e}") from e
    tweak = bytes(tweak)
    if len(tweak) != TWEAK_LEN:
        raise InvalidTweakError(f"Tweak must be {TWEAK_LEN} bytes, got {len(tweak)}")
    return tweak


def minimum_length(radix: int) -> int:
    """Smallest numeral length whose domain reaches ``DOMAIN_MIN``."""
    length = 1
    while radix ** length < DOMAIN_MIN:
        length += 1
    return length


def maximum_length(radix: int) -> int:
    """Largest numeral length accepted for a radix: ``2 * floor(96 / log2(radix))``."""
    return 2 * math.floor(96 / math.log2(radix))


def chunk_bounds(length: int, chunk_size: int, min_size: int = 2) -> list[tuple[int, int]]:
    """
    Split a run of ``length`` symbols into chunks of at most ``chunk_size``.

    Boundaries depend only on the run length, so the same split is found on
    both sides. A tail shorter than ``min_size`` borrows symbols from the
    previous chunk (17 with size 16 -> 15 + 2).

    Returns:
        List of (start, end) slices
    """
    if length <= chunk_size:
        return [(0, length)]

    sizes = [chunk_size] * (length // chunk_size)
    tail = length % chunk_size
    if 0 < tail < min_size:
        sizes[-1] -= min_size - tail
        tail = min_size
    if tail:
        sizes.append(tail)

    bounds = []
    start = 0
    for size in sizes:
        bounds.append((start, start + size))
        start += size
    return bounds


class FF3Cipher:
    """
    Format-preserving cipher over a fixed alphabet.

    Immutable once constructed: encrypt/decrypt are pure functions of
    (key, tweak, alphabet, input) and are safe to call from many threads.

    Args:
        key: AES key as hex string or bytes (32 bytes recommended)
        tweak: 7-byte tweak as bytes or hex string (default: seven zero bytes)
        radix: Size of the default alphabet (ignored when ``alphabet`` is given)
        alphabet: Custom ordered alphabet of distinct symbols

    Raises:
        InvalidKeyError, InvalidTweakError, InvalidAlphabetError,
        InsufficientDomainError, UnsupportedRadixError
    """

    def __init__(
        self,
        key: str | bytes,
        tweak: str | bytes | None = None,
        radix: int = 10,
        alphabet: str | None = None,
    ):
        self._key = _parse_key(key)
        self._tweak = _parse_tweak(tweak)

        if alphabet is None:
            alphabet = default_alphabet(radix)
        self._alphabet = validate_alphabet(alphabet)
        self._radix = len(self._alphabet)

        if self._radix < 2:
            raise InsufficientDomainError("Alphabet must have at least 2 symbols")
        self._min_len = minimum_length(self._radix)
        if self._min_len < 2:
            raise InsufficientDomainError(
                f"Radix {self._radix} requires minimum length of 2"
            )
        self._max_len = maximum_length(self._radix)

        self._aes = Cipher(algorithms.AES(self._key), modes.ECB())

    @classmethod
    def from_key_pair(cls, pair, radix: int = 10, alphabet: str | None = None) -> "FF3Cipher":
        """Build a cipher from a ``keys.KeyTweakPair`` (or any object with key/tweak)."""
        return cls(pair.key, pair.tweak, radix=radix, alphabet=alphabet)

    def with_alphabet(self, alphabet: str) -> "FF3Cipher":
        """Return a sibling cipher with the same key and tweak over another alphabet."""
        return FF3Cipher(self._key, self._tweak, alphabet=alphabet)

    @property
    def alphabet(self) -> str:
        return self._alphabet

    @property
    def radix(self) -> int:
        return self._radix

    @property
    def tweak(self) -> bytes:
        return self._tweak

    @property
    def key_hex(self) -> str:
        return self._key.hex()

    @property
    def min_length(self) -> int:
        return self._min_len

    @property
    def max_length(self) -> int:
        return self._max_len

    def __repr__(self) -> str:
        return f"FF3Cipher(radix={self._radix}, alphabet={self._alphabet!r})"

    def accepts(self, text: str) -> bool:
        """Return True if ``text`` is a valid cipher input for this alphabet."""
        if not 2 <= len(text) <= self._max_len:
            return False
        return all(c in self._alphabet for c in text)

    def encrypt(self, plaintext: str, tweak: str | bytes | None = None) -> str:
        """
        Encrypt a numeral string.

        Args:
            plaintext: String over the cipher alphabet, length in [2, max_length]
            tweak: Optional per-call tweak overriding the cipher's tweak

        Returns:
            Ciphertext of the same length over the same alphabet

        Raises:
            InvalidCharacterError, InvalidLengthError, InvalidTweakError
        """
        return self._feistel(plaintext, tweak, decrypting=False)

    def decrypt(self, ciphertext: str, tweak: str | bytes | None = None) -> str:
        """Inverse of :meth:`encrypt` for the same key, tweak and alphabet."""
        return self._feistel(ciphertext, tweak, decrypting=True)

    def _validate_input(self, text: str) -> None:
        for c in text:
            if c not in self._alphabet:
                raise InvalidCharacterError(f"Input contains character {c!r} not in alphabet")
        if not 2 <= len(text) <= self._max_len:
            raise InvalidLengthError(
                f"Input length must be between 2 and {self._max_len}, got {len(text)}"
            )

    def _feistel(self, text: str, tweak: str | bytes | None, decrypting: bool) -> str:
        tweak = self._tweak if tweak is None else _parse_tweak(tweak)
        self._validate_input(text)

        n = len(text)
        u = n // 2
        v = n - u
        a, b = text[:u], text[u:]
        modulus_a = self._radix ** u
        modulus_b = self._radix ** v

        combine = sub_mod if decrypting else add_mod
        rounds = range(NUM_ROUNDS - 1, -1, -1) if decrypting else range(NUM_ROUNDS)

        for i in rounds:
            if i % 2 == 0:
                c = self._round_value(i, tweak, b)
                y = combine(decode(a, self._alphabet), c, modulus_a)
                a = encode(y, self._alphabet, u)
            else:
                c = self._round_value(i, tweak, a)
                y = combine(decode(b, self._alphabet), c, modulus_b)
                b = encode(y, self._alphabet, v)

        return a + b

    def _round_input(self, round_index: int, tweak: bytes, half: str) -> bytes:
        """
        Build the 16-byte AES input for one round.

        Bytes 12-15 hold the untouched half as a big-endian 32-bit value.
        Halves wider than 32 bits contribute their low-order 4 bytes. Ports
        that slice the high-order end of a signed big-endian byte array
        produce different ciphertexts once a half exceeds 32 bits (radix-10
        inputs of 20 or more digits), so such outputs are not interchangeable.
        """
        block = bytearray(16)
        block[0] = round_index & 0xFF
        if round_index % 2 == 0:
            block[1:4] = tweak[0:3]
            block[8:12] = tweak[3:7]
        else:
            block[1:4] = tweak[3:6]
            block[8:11] = tweak[0:3]
            block[11] = 0
        # Numerals wider than 32 bits contribute their low-order 4 bytes
        value = decode(half, self._alphabet) & 0xFFFFFFFF
        block[12:16] = value.to_bytes(4, "big")
        return bytes(block)

    def _round_value(self, round_index: int, tweak: bytes, half: str) -> int:
        encryptor = self._aes.encryptor()
        block = encryptor.update(self._round_input(round_index, tweak, half)) + encryptor.finalize()
        # decode(encode(y)) == y, so the numeral is consumed as its integer value
        return int.from_bytes(block, "big")
