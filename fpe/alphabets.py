"""Named alphabets and the default-alphabet resolver."""

from collections import Counter

from .errors import InsufficientDomainError, InvalidAlphabetError, UnsupportedRadixError

DIGITS = "0123456789"
LOWER_ALPHA = "abcdefghijklmnopqrstuvwxyz"
UPPER_ALPHA = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ALPHANUMERIC = DIGITS + LOWER_ALPHA + UPPER_ALPHA
EMAIL = ALPHANUMERIC + "._-"
BASE64 = ALPHANUMERIC + "+/="
HEX = "0123456789abcdef"

# Accented letters (Romanian and common Western European), paired by case
SPECIAL_LOWER = "ăîâșțüöäéèêëàáíìñç"
SPECIAL_UPPER = "ĂÎÂȘȚÜÖÄÉÈÊËÀÁÍÌÑÇ"
SPECIAL_CHARS = "".join(lo + up for lo, up in zip(SPECIAL_LOWER, SPECIAL_UPPER))
EXTENDED_LATIN = ALPHANUMERIC + SPECIAL_CHARS

MAX_DEFAULT_RADIX = len(ALPHANUMERIC)


def default_alphabet(radix: int) -> str:
    """
    Return the canonical alphabet for a radix.

    Digits first, then lowercase, then uppercase letters, truncated to
    ``radix`` symbols.

    Args:
        radix: Number of symbols (2-62)

    Returns:
        Alphabet string of length ``radix``

    Raises:
        InsufficientDomainError: If radix is below 2
        UnsupportedRadixError: If radix is above 62
    """
    if radix < 2:
        raise InsufficientDomainError(f"Radix must be at least 2, got {radix}")
    if radix > MAX_DEFAULT_RADIX:
        raise UnsupportedRadixError(
            f"Radix {radix} > {MAX_DEFAULT_RADIX} requires a custom alphabet"
        )
    return ALPHANUMERIC[:radix]


def validate_alphabet(alphabet: str) -> str:
    """Check that an alphabet is non-empty and has no repeated symbols."""
    if not alphabet:
        raise InvalidAlphabetError("Alphabet must not be empty")
    repeated = [symbol for symbol, count in Counter(alphabet).items() if count > 1]
    if repeated:
        raise InvalidAlphabetError(f"Alphabet has repeated symbols: {''.join(repeated)!r}")
    return alphabet


NAMED_ALPHABETS = {
    "digits": DIGITS,
    "lower": LOWER_ALPHA,
    "upper": UPPER_ALPHA,
    "alphanumeric": ALPHANUMERIC,
    "email": EMAIL,
    "hex": HEX,
    "base64": BASE64,
    "extended_latin": EXTENDED_LATIN,
}


def resolve_alphabet(alphabet: str | None) -> str | None:
    """
    Map an alphabet name such as ``"base64"`` to its symbols.

    Names are case-insensitive and take precedence; any other string is
    returned as a literal alphabet. None passes through.
    """
    if alphabet is None:
        return None
    return NAMED_ALPHABETS.get(alphabet.strip().lower(), alphabet)
