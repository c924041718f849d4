"""Key management: key/tweak pairs, generation and the encrypted key store."""

from .generator import KeyGenerator
from .key_pair import KeyTweakPair
from .store import KeyStore

__all__ = ["KeyGenerator", "KeyStore", "KeyTweakPair"]
