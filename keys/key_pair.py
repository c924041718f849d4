"""Key/tweak pair value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyTweakPair:
    """
    A named FPE key and tweak.

    Attributes:
        key: AES key as a hex string (64 hex chars for AES-256)
        tweak: 7-byte tweak
        name: Identifier used to look the pair up in a key store
    """
    key: str
    tweak: bytes
    name: str = ""

    @property
    def tweak_hex(self) -> str:
        return self.tweak.hex()

    def __repr__(self) -> str:
        # Never print the key material
        return f"KeyTweakPair(name={self.name!r})"
