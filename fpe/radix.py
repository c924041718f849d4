"""Radix codec: symbol strings <-> arbitrary-precision integers."""

from functools import lru_cache

from .errors import InvalidSymbolError


@lru_cache(maxsize=64)
def _symbol_index(alphabet: str) -> dict[str, int]:
    return {symbol: index for index, symbol in enumerate(alphabet)}


def decode(symbols: str, alphabet: str) -> int:
    """
    Evaluate a symbol string as a number in base ``len(alphabet)``.

    Args:
        symbols: Numeral string, most significant symbol first
        alphabet: Ordered alphabet; ``alphabet[0]`` is zero

    Returns:
        Non-negative integer value

    Raises:
        InvalidSymbolError: If a symbol is not in the alphabet
    """
    index = _symbol_index(alphabet)
    radix = len(alphabet)
    value = 0
    for symbol in symbols:
        digit = index.get(symbol)
        if digit is None:
            raise InvalidSymbolError(f"Character {symbol!r} not in alphabet")
        value = value * radix + digit
    return value


def encode(value: int, alphabet: str, min_length: int = 0) -> str:
    """
    Write a non-negative integer in base ``len(alphabet)``.

    Args:
        value: Integer to encode (callers reduce modulo the modulus first)
        alphabet: Ordered alphabet; ``alphabet[0]`` is zero
        min_length: Left-pad with the zero symbol up to this length

    Returns:
        Numeral string
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value}")

    radix = len(alphabet)
    symbols = []
    while value:
        value, digit = divmod(value, radix)
        symbols.append(alphabet[digit])
    if not symbols:
        symbols.append(alphabet[0])

    numeral = "".join(reversed(symbols))
    if len(numeral) < min_length:
        numeral = alphabet[0] * (min_length - len(numeral)) + numeral
    return numeral


def add_mod(a: int, b: int, modulus: int) -> int:
    return ((a + b) % modulus + modulus) % modulus


def sub_mod(a: int, b: int, modulus: int) -> int:
    return ((a - b) % modulus + modulus) % modulus
